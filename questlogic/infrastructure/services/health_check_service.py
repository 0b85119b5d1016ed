"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Optional

from questlogic.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from questlogic.domain.ports.health_check import IHealthCheckService
from questlogic.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Probe the MongoDB instance backing the event log."""

    def __init__(self, mongo_database: Optional[MongoDatabase]) -> None:
        self._mongo_database = mongo_database

    async def evaluate(self) -> SystemHealth:
        return SystemHealth.from_dependencies([await self._check_mongo()])

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.to_thread(self._mongo_database.client.admin.command, "ping")
        except Exception as exc:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )

        return DependencyStatus(
            name="mongo",
            status=ServiceStatus.UP,
            message="MongoDB ping successful",
            latency_ms=(perf_counter() - start) * 1000,
            details={
                "database": self._mongo_database.db.name,
                "collection": self._mongo_database.events_collection,
            },
        )
