"""Domain port for the key-value cache sitting in front of the store."""

from __future__ import annotations

from typing import Any, Optional, Protocol


class ICacheService(Protocol):
    """Best-effort key-value cache; never authoritative, no expiry assumed."""

    async def get(self, key: str) -> Optional[Any]:
        """Return the JSON-compatible value stored under ``key`` or None."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under ``key``."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``; removing a missing key is not an error."""
        ...
