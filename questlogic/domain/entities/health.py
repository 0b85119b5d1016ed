"""Health value objects reported by the /health endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Result of probing one backing service."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, dependencies: List[DependencyStatus]) -> "SystemHealth":
        """Overall status is the worst dependency status."""
        statuses = {dep.status for dep in dependencies}
        if ServiceStatus.DOWN in statuses:
            overall = ServiceStatus.DOWN
        elif ServiceStatus.UNKNOWN in statuses or not dependencies:
            overall = ServiceStatus.UNKNOWN
        else:
            overall = ServiceStatus.UP
        return cls(status=overall, dependencies=list(dependencies))
