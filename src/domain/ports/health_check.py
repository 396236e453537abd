"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Interface for probing the store and cache backends."""

    async def evaluate(self) -> SystemHealth:
        """Probe every backing service and aggregate the result."""
        ...
