from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from src.application.models import SystemInfo
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth


@dataclass
class _StubHealthService:
    health: SystemHealth

    async def evaluate(self) -> SystemHealth:
        return self.health


def _system_info(**overrides) -> SystemInfo:
    values = dict(
        title="Device Registry",
        description="Devices with a read-through cache",
        version="1.2.3",
        environment="development",
        git_commit="abc1234",
        build_time="2024-09-09T10:00:00Z",
        database_name="devices_db",
        cache_backend="redis",
        cache_url="redis://:redispass@redis:6379/0",
    )
    values.update(overrides)
    return SystemInfo(**values)


@pytest.mark.asyncio
async def test_get_health_status_use_case_returns_dto() -> None:
    dependencies = [
        DependencyStatus(name="mongo", status=ServiceStatus.UP),
        DependencyStatus(name="cache", status=ServiceStatus.DOWN),
    ]
    health = SystemHealth(status=ServiceStatus.DOWN, dependencies=dependencies)

    use_case = GetHealthStatusUseCase(health_check_service=_StubHealthService(health))

    dto = await use_case.execute()

    assert dto.status is ServiceStatus.DOWN
    assert len(dto.dependencies) == 2
    assert dto.dependencies[1].status is ServiceStatus.DOWN


@pytest.mark.asyncio
async def test_get_application_info_use_case_sanitizes_urls() -> None:
    dependencies = [DependencyStatus(name="mongo", status=ServiceStatus.UP)]
    health = SystemHealth(status=ServiceStatus.UP, dependencies=dependencies)

    started_at = datetime.now(timezone.utc) - timedelta(seconds=120)

    use_case = GetApplicationInfoUseCase(
        health_check_service=_StubHealthService(health),
        system_info=_system_info(),
    )

    dto = await use_case.execute(started_at)

    assert dto.status is ServiceStatus.UP
    assert dto.name == "Device Registry"
    assert abs(dto.uptime_seconds - 120) < 2
    assert dto.extras["cache"] == {"backend": "redis", "url": "redis://redis:6379/0"}
    assert dto.extras["database"] == {"name": "devices_db"}
    assert dto.dependencies[0].name == "mongo"


@pytest.mark.asyncio
async def test_get_application_info_without_start_time_reports_zero_uptime() -> None:
    health = SystemHealth(status=ServiceStatus.UP)
    use_case = GetApplicationInfoUseCase(
        health_check_service=_StubHealthService(health),
        system_info=_system_info(cache_backend="memory", cache_url=None),
    )

    dto = await use_case.execute(None)

    assert dto.uptime_seconds == 0.0
    assert dto.extras["cache"] == {"backend": "memory", "url": None}
