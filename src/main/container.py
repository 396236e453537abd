"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.services.device_registry import DeviceRegistry
from src.application.use_cases.device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    ReplaceDeviceUseCase,
    UpdateDeviceUseCase,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.infrastructure.cache import MemoryCacheService, RedisCacheService
from src.infrastructure.database import MongoDatabase
from src.infrastructure.repositories.device_repository import DeviceRepository
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    device_repository = providers.Singleton(
        DeviceRepository,
        mongo_database=mongo_database,
    )

    cache_backend = providers.Callable(_enum_value, config.cache.backend)

    cache = providers.Selector(
        cache_backend,
        redis=providers.Singleton(
            RedisCacheService,
            redis_url=config.cache.redis_url,
            ttl_seconds=config.cache.ttl_seconds,
        ),
        memory=providers.Singleton(MemoryCacheService),
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        cache_backend=cache_backend,
        redis_url=config.cache.redis_url,
    )

    # Application
    device_registry = providers.Singleton(
        DeviceRegistry,
        repository=device_repository,
        cache=cache,
    )

    create_device_use_case = providers.Factory(
        CreateDeviceUseCase,
        device_registry=device_registry,
    )

    get_devices_use_case = providers.Factory(
        GetDevicesUseCase,
        device_registry=device_registry,
    )

    get_device_by_id_use_case = providers.Factory(
        GetDeviceByIdUseCase,
        device_registry=device_registry,
    )

    update_device_use_case = providers.Factory(
        UpdateDeviceUseCase,
        device_registry=device_registry,
    )

    replace_device_use_case = providers.Factory(
        ReplaceDeviceUseCase,
        device_registry=device_registry,
    )

    delete_device_use_case = providers.Factory(
        DeleteDeviceUseCase,
        device_registry=device_registry,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.api.git_commit,
        build_time=config.api.build_time,
        database_name=config.database.database_name,
        cache_backend=cache_backend,
        cache_url=config.cache.redis_url,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the store indexes on startup and closes the MongoDB client and
    the cache connection on shutdown.
    """
    container = get_container()

    mongo_database = container.mongo_database()
    cache = container.cache()

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.cache.close")
        await cache.close()

        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")
