"""System endpoints exposing service health."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Response, status

from questlogic.application.dtos.health_dto import SystemHealthDTO
from questlogic.application.use_cases.health_use_cases import GetHealthStatusUseCase
from questlogic.domain.entities.health import ServiceStatus
from questlogic.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Report whether the event store is reachable."""
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    if health_status.status == ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    logger.debug("health.check.success", status=health_status.status.value)
    return health_status
