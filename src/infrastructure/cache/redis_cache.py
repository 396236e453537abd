"""Redis-backed implementation of the cache port."""

from __future__ import annotations

import json
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.domain.entities.errors import CacheOperationError
from src.domain.ports.cache import ICacheService
from src.shared import get_logger

logger = get_logger(__name__)


class RedisCacheService(ICacheService):
    """Store JSON-encoded values in Redis."""

    def __init__(
        self,
        redis_url: str,
        ttl_seconds: Optional[int] = None,
        *,
        client: Optional[aioredis.Redis] = None,
        socket_timeout: float = 5.0,
    ) -> None:
        """
        Args:
            redis_url: Connection URL, e.g. ``redis://localhost:6379/0``
            ttl_seconds: Expiry applied to every entry; None keeps entries
                until they are invalidated
            client: Pre-built client, mainly for tests
            socket_timeout: Connect and read timeout in seconds
        """
        self._ttl_seconds = ttl_seconds or None
        self._client = client or aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            raise CacheOperationError(
                f"Failed to read cache key: {exc}", {"key": key}
            ) from exc

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise CacheOperationError(
                f"Cached value is not valid JSON: {exc}", {"key": key}
            ) from exc

    async def set(self, key: str, value: Any) -> None:
        try:
            await self._client.set(key, json.dumps(value), ex=self._ttl_seconds)
        except RedisError as exc:
            raise CacheOperationError(
                f"Failed to write cache key: {exc}", {"key": key}
            ) from exc

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise CacheOperationError(
                f"Failed to delete cache key: {exc}", {"key": key}
            ) from exc

    async def close(self) -> None:
        """Release the connection pool."""
        try:
            await self._client.aclose()
        except RedisError as exc:
            logger.warning("cache.redis.close_failed", error=str(exc))
