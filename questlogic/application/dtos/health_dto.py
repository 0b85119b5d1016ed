"""DTOs for the /health response."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from questlogic.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    name: str = Field(description="Dependency identifier")
    status: ServiceStatus = Field(description="Status of the dependency")
    message: Optional[str] = Field(default=None, description="Status note")
    checked_at: datetime = Field(description="Timestamp of the check")
    latency_ms: Optional[float] = Field(default=None, description="Probe latency")
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            details=status.details,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    version: str = Field(description="Service version")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth, version: str) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            version=version,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "version": "1.0.0",
                "dependencies": [
                    {
                        "name": "mongo",
                        "status": "up",
                        "message": "MongoDB ping successful",
                        "checked_at": "2026-01-10T12:00:00Z",
                        "latency_ms": 3.2,
                        "details": {"database": "questlogic"},
                    }
                ],
            }
        }
    }
