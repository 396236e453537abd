from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest
from dependency_injector import providers

from src.application.services.device_registry import DeviceRegistry
from src.infrastructure.cache import MemoryCacheService, RedisCacheService
from src.main.config import AppSettings, CacheSettings
from src.main.container import app_lifespan, get_container, init_container
from src.shared import EnumCacheBackend
from tests.conftest import RecordingCache


@dataclass
class _StubMongoDatabase:
    ensured_indexes: bool = False
    closed: bool = False

    async def create_indexes(self) -> None:
        self.ensured_indexes = True

    def close(self) -> None:
        self.closed = True


def _settings(backend: EnumCacheBackend) -> AppSettings:
    return AppSettings(cache=CacheSettings(backend=backend))


@pytest.mark.asyncio
async def test_init_and_get_container() -> None:
    container = init_container(_settings(EnumCacheBackend.MEMORY))
    assert hasattr(container, "mongo_database")
    assert get_container() is container

    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    async with app_lifespan():
        pass


def test_cache_backend_selects_adapter() -> None:
    memory_container = init_container(_settings(EnumCacheBackend.MEMORY))
    assert isinstance(memory_container.cache(), MemoryCacheService)

    redis_container = init_container(_settings(EnumCacheBackend.REDIS))
    assert isinstance(redis_container.cache(), RedisCacheService)


def test_registry_is_a_shared_singleton() -> None:
    container = init_container(_settings(EnumCacheBackend.MEMORY))
    container.mongo_database.override(providers.Object(_StubMongoDatabase()))

    registry = container.device_registry()

    assert isinstance(registry, DeviceRegistry)
    assert container.device_registry() is registry
    assert registry.cache is container.cache()
    assert container.get_devices_use_case().device_registry is registry


def test_system_info_reflects_settings() -> None:
    container = init_container(_settings(EnumCacheBackend.MEMORY))

    info = container.system_info()

    assert info.cache_backend == "memory"
    assert info.environment == "development"
    assert info.database_name == "devices_db"


@pytest.mark.asyncio
async def test_app_lifespan_manages_resources() -> None:
    container = init_container(_settings(EnumCacheBackend.MEMORY))
    stub_db = _StubMongoDatabase()
    cache = RecordingCache()
    container.mongo_database.override(providers.Object(stub_db))
    container.cache.override(providers.Object(cache))

    async with app_lifespan():
        await asyncio.sleep(0)

    assert stub_db.ensured_indexes is True
    assert stub_db.closed is True
    assert cache.closed is True


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("src.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
