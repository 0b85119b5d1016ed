"""Use case behind the /health endpoint."""

from questlogic.application.dtos.health_dto import SystemHealthDTO
from questlogic.domain.ports.health_check import IHealthCheckService


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, health_check_service: IHealthCheckService, version: str) -> None:
        self._health_check_service = health_check_service
        self._version = version

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health, self._version)
