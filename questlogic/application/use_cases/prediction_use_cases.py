"""
Prediction Use Cases - Application Layer

Scoring requests go straight to the stateless engine. Submissions and
outcomes go through the prediction event repository; errors raised there
are passed to the caller unchanged and nothing is retried.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from questlogic.domain.entities.errors import PredictionEventNotFoundError
from questlogic.domain.entities.prediction import (
    MOOD_BIAS,
    ModelParams,
    Mood,
    Outcome,
)
from questlogic.domain.repositories.prediction_event_repository import (
    IPredictionEventRepository,
)
from questlogic.domain.services import (
    classify_probability,
    response_curve,
    score,
    validate_prediction_event,
)
from questlogic.shared import get_logger

from ..dtos.prediction_dto import (
    ComputePredictionRequestDTO,
    ComputePredictionResponseDTO,
    CurvePointDTO,
    PredictionEventResponseDTO,
    RecordOutcomeRequestDTO,
    ResponseCurveDTO,
    SubmitPredictionRequestDTO,
    SubmitPredictionResponseDTO,
)

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_store_precision(moment: datetime) -> datetime:
    """Drop sub-millisecond digits, which BSON dates cannot hold."""
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


class ComputePredictionUseCase:
    """Run the scoring engine without persisting anything."""

    def __init__(self, default_beta: float) -> None:
        self.default_beta = default_beta

    def execute(
        self, request: ComputePredictionRequestDTO
    ) -> ComputePredictionResponseDTO:
        inputs = request.inputs.to_domain()
        if request.model_params is None:
            params = ModelParams.for_mood(inputs.mood, beta=self.default_beta)
        else:
            params = ModelParams(
                beta=request.model_params.beta,
                mood_bias_val=request.model_params.mood_bias_val,
            )

        breakdown = score(inputs, params)
        label = classify_probability(breakdown.prediction.probability)
        return ComputePredictionResponseDTO.from_domain(breakdown, params, label)


class GetResponseCurveUseCase:
    """Probability curve over scaled drive for one mood."""

    def execute(self, mood: Mood) -> ResponseCurveDTO:
        bias = MOOD_BIAS[mood]
        return ResponseCurveDTO(
            mood=mood,
            mood_bias_val=bias,
            points=[CurvePointDTO.from_domain(p) for p in response_curve(bias)],
        )


class SubmitPredictionUseCase:
    """Record a prediction event and return its new identifier."""

    def __init__(
        self,
        prediction_event_repository: IPredictionEventRepository,
        clock: Clock = utc_now,
    ) -> None:
        self.prediction_event_repository = prediction_event_repository
        self.clock = clock

    async def execute(
        self, request: SubmitPredictionRequestDTO
    ) -> SubmitPredictionResponseDTO:
        """
        Validate and store a prediction.

        Raises:
            PredictionValidationError: If the payload is structurally invalid
        """
        payload = validate_prediction_event(
            request.user_hash,
            request.inputs.model_dump(),
            request.model_params.model_dump(),
            request.prediction.model_dump(),
        )

        event_id = await self.prediction_event_repository.create(
            user_hash=payload.user_hash,
            timestamp=to_store_precision(self.clock()),
            inputs=payload.inputs,
            model_params=payload.model_params,
            prediction=payload.prediction,
        )
        return SubmitPredictionResponseDTO(id=event_id)


class RecordOutcomeUseCase:
    """Attach the observed outcome to an event, at most once."""

    def __init__(self, prediction_event_repository: IPredictionEventRepository):
        self.prediction_event_repository = prediction_event_repository

    async def execute(self, event_id: str, request: RecordOutcomeRequestDTO) -> None:
        """
        Raises:
            PredictionEventNotFoundError: If the event does not exist
            OutcomeConflictError: If an outcome was already recorded
        """
        await self.prediction_event_repository.attach_outcome(
            event_id,
            Outcome(action_taken=request.action_taken, time_delta=request.time_delta),
        )


class GetPredictionEventUseCase:
    def __init__(self, prediction_event_repository: IPredictionEventRepository):
        self.prediction_event_repository = prediction_event_repository

    async def execute(self, event_id: str) -> PredictionEventResponseDTO:
        event = await self.prediction_event_repository.find_by_id(event_id)
        if event is None:
            raise PredictionEventNotFoundError(event_id)
        return PredictionEventResponseDTO.from_domain(event)


class GetUserPredictionsUseCase:
    """Events for one user, newest first. Unknown users yield an empty list."""

    def __init__(self, prediction_event_repository: IPredictionEventRepository):
        self.prediction_event_repository = prediction_event_repository

    async def execute(
        self, user_hash: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEventResponseDTO]:
        events = await self.prediction_event_repository.find_by_user(
            user_hash, skip=skip, limit=limit
        )
        logger.debug(
            "prediction_events.listed_for_user", user_hash=user_hash, count=len(events)
        )
        return [PredictionEventResponseDTO.from_domain(event) for event in events]


class GetAllPredictionsUseCase:
    """Every event, newest first. Access restriction is the caller's concern."""

    def __init__(self, prediction_event_repository: IPredictionEventRepository):
        self.prediction_event_repository = prediction_event_repository

    async def execute(
        self, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEventResponseDTO]:
        events = await self.prediction_event_repository.find_all(
            skip=skip, limit=limit
        )
        return [PredictionEventResponseDTO.from_domain(event) for event in events]
