"""Process-local cache used for development and tests."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from src.domain.ports.cache import ICacheService


class MemoryCacheService(ICacheService):
    """Dict-backed cache; values are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        if key not in self._entries:
            return None
        return copy.deepcopy(self._entries[key])

    async def set(self, key: str, value: Any) -> None:
        self._entries[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._entries)

    async def close(self) -> None:
        self._entries.clear()
