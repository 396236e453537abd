"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Dict, List, Optional

import redis.asyncio as aioredis

from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from src.domain.ports.health_check import IHealthCheckService
from src.infrastructure.database.mongo_database import MongoDatabase
from src.shared import EnumCacheBackend


class HealthCheckService(IHealthCheckService):
    """Collect health information for the store and the cache."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        cache_backend: str,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._cache_backend = cache_backend
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""

        checks: Dict[str, asyncio.Task] = {
            "mongo": asyncio.create_task(self._check_mongo()),
            "cache": asyncio.create_task(self._check_cache()),
        }

        dependency_statuses: List[DependencyStatus] = []

        for name, task in checks.items():
            try:
                dependency_statuses.append(await task)
            except Exception as exc:  # pragma: no cover - defensive fallback
                dependency_statuses.append(
                    DependencyStatus(
                        name=name,
                        status=ServiceStatus.DOWN,
                        message=str(exc),
                    )
                )

        return SystemHealth.from_dependencies(dependency_statuses)

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
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UP,
                message="MongoDB ping successful",
                latency_ms=latency_ms,
                details={"database": self._mongo_database.db.name},
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=latency_ms,
            )

    async def _check_cache(self) -> DependencyStatus:
        if self._cache_backend == EnumCacheBackend.MEMORY.value:
            return DependencyStatus(
                name="cache",
                status=ServiceStatus.UP,
                message="In-process memory cache",
                details={"backend": self._cache_backend},
            )
        return await self._check_redis()

    async def _check_redis(self) -> DependencyStatus:
        if not self._redis_url:
            return DependencyStatus(
                name="cache",
                status=ServiceStatus.UNKNOWN,
                message="Redis URL not configured.",
                details={"backend": self._cache_backend},
            )

        start = perf_counter()
        client = aioredis.from_url(
            self._redis_url,
            socket_connect_timeout=self._socket_timeout,
            socket_timeout=self._socket_timeout,
        )
        try:
            await client.ping()
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="cache",
                status=ServiceStatus.UP,
                message="Redis ping successful",
                latency_ms=latency_ms,
                details={"backend": self._cache_backend},
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="cache",
                status=ServiceStatus.DOWN,
                message=f"Redis ping failed: {exc}",
                latency_ms=latency_ms,
                details={"backend": self._cache_backend},
            )
        finally:
            await client.aclose()
