"""Cache adapters implementing the domain cache port."""

from .memory_cache import MemoryCacheService
from .redis_cache import RedisCacheService

__all__ = ["MemoryCacheService", "RedisCacheService"]
