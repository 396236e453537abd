"""Domain ports package."""

from .cache import ICacheService
from .health_check import IHealthCheckService

__all__ = ["ICacheService", "IHealthCheckService"]
