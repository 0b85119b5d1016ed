"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from questlogic.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Interface for probing the services the event log depends on."""

    async def evaluate(self) -> SystemHealth:
        ...
