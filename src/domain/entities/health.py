"""
Health domain entities.

Value objects describing the availability of the registry's backing
services (store and cache) and the metadata surfaced by ``/info``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency or the whole service."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single backing service."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the service."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, statuses: Iterable[DependencyStatus]) -> SystemHealth:
        """Aggregate dependency statuses; DOWN beats DEGRADED beats UNKNOWN."""
        dependencies = list(statuses)
        reported = {dependency.status for dependency in dependencies}
        for candidate in (
            ServiceStatus.DOWN,
            ServiceStatus.DEGRADED,
            ServiceStatus.UNKNOWN,
        ):
            if candidate in reported:
                return cls(status=candidate, dependencies=dependencies)
        return cls(status=ServiceStatus.UP, dependencies=dependencies)


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
