"""
Presentation Layer - Predictions Controller

Exposes the scoring engine and the prediction event log over HTTP.
"""

from typing import List, Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from questlogic.application.dtos.prediction_dto import (
    ComputePredictionRequestDTO,
    ComputePredictionResponseDTO,
    PredictionEventResponseDTO,
    RecordOutcomeRequestDTO,
    ResponseCurveDTO,
    SubmitPredictionRequestDTO,
    SubmitPredictionResponseDTO,
)
from questlogic.application.use_cases.prediction_use_cases import (
    ComputePredictionUseCase,
    GetAllPredictionsUseCase,
    GetPredictionEventUseCase,
    GetResponseCurveUseCase,
    GetUserPredictionsUseCase,
    RecordOutcomeUseCase,
    SubmitPredictionUseCase,
)
from questlogic.domain.entities.errors import (
    OutcomeConflictError,
    PredictionEventNotFoundError,
    PredictionValidationError,
)
from questlogic.domain.entities.prediction import Mood
from questlogic.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.post(
    "/compute",
    response_model=ComputePredictionResponseDTO,
    summary="Score factor inputs without recording them",
    description="""
    Runs the scoring engine on the supplied factors. When model params are
    omitted the standard mood bias and the configured default beta are used.
    """,
)
@inject
async def compute_prediction(
    payload: ComputePredictionRequestDTO,
    compute_use_case: ComputePredictionUseCase = Depends(
        Provide[AppContainer.compute_prediction_use_case]
    ),
) -> ComputePredictionResponseDTO:
    return compute_use_case.execute(payload)


@router.get(
    "/curve",
    response_model=ResponseCurveDTO,
    summary="Probability curve over scaled drive for a mood",
)
@inject
async def get_response_curve(
    mood: Mood = Query(default=Mood.NEUTRAL, description="Mood category"),
    curve_use_case: GetResponseCurveUseCase = Depends(
        Provide[AppContainer.get_response_curve_use_case]
    ),
) -> ResponseCurveDTO:
    return curve_use_case.execute(mood)


@router.post(
    "",
    response_model=SubmitPredictionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Record a prediction event",
)
@inject
async def submit_prediction(
    payload: SubmitPredictionRequestDTO,
    submit_use_case: SubmitPredictionUseCase = Depends(
        Provide[AppContainer.submit_prediction_use_case]
    ),
) -> SubmitPredictionResponseDTO:
    try:
        return await submit_use_case.execute(payload)
    except PredictionValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors)
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "prediction.submit.unexpected_error",
            user_hash=payload.user_hash,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/{event_id}/outcome",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Attach the observed outcome to a prediction event",
    description="""
    An outcome can be recorded once per event. A second attempt is rejected
    with 409 and the first outcome is kept.
    """,
)
@inject
async def record_outcome(
    event_id: str,
    payload: RecordOutcomeRequestDTO,
    outcome_use_case: RecordOutcomeUseCase = Depends(
        Provide[AppContainer.record_outcome_use_case]
    ),
) -> Response:
    try:
        await outcome_use_case.execute(event_id, payload)
    except PredictionEventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except OutcomeConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "prediction.outcome.unexpected_error",
            event_id=event_id,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/users/{user_hash}",
    response_model=List[PredictionEventResponseDTO],
    summary="List a user's prediction events, newest first",
)
@inject
async def get_predictions_for_user(
    user_hash: str,
    skip: int = Query(default=0, ge=0, description="Records to skip"),
    limit: Optional[int] = Query(
        default=None, ge=1, le=1000, description="Maximum records to return"
    ),
    user_use_case: GetUserPredictionsUseCase = Depends(
        Provide[AppContainer.get_user_predictions_use_case]
    ),
) -> List[PredictionEventResponseDTO]:
    return await user_use_case.execute(user_hash, skip=skip, limit=limit)


@router.get(
    "",
    response_model=List[PredictionEventResponseDTO],
    summary="List all prediction events, newest first",
)
@inject
async def get_all_predictions(
    skip: int = Query(default=0, ge=0, description="Records to skip"),
    limit: Optional[int] = Query(
        default=None, ge=1, le=1000, description="Maximum records to return"
    ),
    all_use_case: GetAllPredictionsUseCase = Depends(
        Provide[AppContainer.get_all_predictions_use_case]
    ),
) -> List[PredictionEventResponseDTO]:
    return await all_use_case.execute(skip=skip, limit=limit)


@router.get(
    "/{event_id}",
    response_model=PredictionEventResponseDTO,
    summary="Fetch a single prediction event",
)
@inject
async def get_prediction_event(
    event_id: str,
    event_use_case: GetPredictionEventUseCase = Depends(
        Provide[AppContainer.get_prediction_event_use_case]
    ),
) -> PredictionEventResponseDTO:
    try:
        return await event_use_case.execute(event_id)
    except PredictionEventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
