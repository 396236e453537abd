from __future__ import annotations

import copy
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set
from uuid import uuid4

import pytest

from src.application.services.device_registry import DeviceRegistry
from src.domain.entities.device import Device, DeviceState
from src.domain.entities.errors import CacheOperationError
from src.infrastructure.repositories.device_repository import DeviceRepository

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture()
def sample_device(dummy_now: datetime) -> Device:
    return Device(
        id=uuid4(),
        name="iPhone 15 Pro",
        brand="Apple",
        state=DeviceState.AVAILABLE,
        created_at=dummy_now,
    )


@pytest.fixture()
def in_use_device(dummy_now: datetime) -> Device:
    return Device(
        id=uuid4(),
        name="Pixel 8",
        brand="Google",
        state=DeviceState.IN_USE,
        created_at=dummy_now - timedelta(minutes=5),
    )


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)

    def sort(self, key: Optional[str], direction: int = 1) -> "FakeCursor":
        if key:
            self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(copy.deepcopy(self._documents))


class FakeCollection:
    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.inserts: List[Dict[str, Any]] = []
        self.last_query: Dict[str, Any] | None = None
        self.dropped_indexes: List[str] = []
        self.created_indexes: List[tuple[Any, ...]] = []

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self.last_query = query
        key = query.get("id")
        if not isinstance(key, str) or key not in self.documents:
            return None
        return copy.deepcopy(self.documents[key])

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.last_query = query
        results = [doc for doc in self.documents.values() if self._matches(doc, query)]
        return FakeCursor(results)

    def insert_one(self, document: Dict[str, Any]) -> Any:
        self.inserts.append(document)
        self.documents[document["id"]] = copy.deepcopy(document)
        return SimpleNamespace(acknowledged=True, inserted_id=document["id"])

    def replace_one(
        self, query: Dict[str, Any], document: Dict[str, Any], upsert: bool = False
    ) -> Any:
        key = query.get("id")
        if not isinstance(key, str):
            return SimpleNamespace(matched_count=0, acknowledged=False)
        matched = 1 if key in self.documents else 0
        if not matched and not upsert:
            return SimpleNamespace(matched_count=0, acknowledged=True)
        self.documents[key] = copy.deepcopy(document)
        return SimpleNamespace(matched_count=matched, acknowledged=True)

    def delete_one(self, query: Dict[str, Any]) -> Any:
        key = query.get("id")
        if isinstance(key, str) and key in self.documents:
            del self.documents[key]
            return SimpleNamespace(deleted_count=1, acknowledged=True)
        return SimpleNamespace(deleted_count=0, acknowledged=True)

    def drop_index(self, index_name: str) -> None:
        self.dropped_indexes.append(index_name)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeMongoDatabase:
    """In-memory stand-in for ``MongoDatabase`` that records every call."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.calls: List[str] = []
        self.fail_with: Exception | None = None
        self.indexes_created = False
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with is not None:
            raise self.fail_with

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        self._record("find_one")
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: str | None = None,
        sort_direction: int = 1,
    ) -> List[Dict[str, Any]]:
        self._record("find_many")
        cursor = self.get_collection(collection_name).find(query)
        cursor.sort(sort_by, sort_direction)
        return list(cursor)

    async def insert_one(self, collection_name: str, document: Dict[str, Any]) -> Any:
        self._record("insert_one")
        result = self.get_collection(collection_name).insert_one(document)
        if not getattr(result, "acknowledged", True):
            raise Exception(f"Failed to insert document in {collection_name}")
        return document

    async def replace_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        document: Dict[str, Any],
        upsert: bool = False,
    ) -> Any:
        self._record("replace_one")
        result = self.get_collection(collection_name).replace_one(
            query, document, upsert=upsert
        )
        if not upsert and getattr(result, "matched_count", 0) == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not getattr(result, "acknowledged", True):
            raise Exception(f"Failed to replace document in {collection_name}")
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        self._record("delete_one")
        result = self.get_collection(collection_name).delete_one(query)
        if getattr(result, "deleted_count", 0) == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not getattr(result, "acknowledged", True):
            raise Exception(f"Failed to delete document in {collection_name}")
        return None

    async def create_indexes(self) -> None:
        self.indexes_created = True

    def close(self) -> None:
        self.closed = True

    def seed(self, collection_name: str, *devices: Device) -> None:
        """Store devices directly, bypassing the call log."""
        collection = self.get_collection(collection_name)
        for device in devices:
            collection.documents[str(device.id)] = {
                "id": str(device.id),
                "name": device.name,
                "brand": device.brand,
                "state": device.state.value,
                "created_at": device.created_at,
            }


class RecordingCache:
    """Dict-backed cache that records operations and can simulate outages."""

    def __init__(self) -> None:
        self.entries: Dict[str, Any] = {}
        self.gets: List[str] = []
        self.sets: List[str] = []
        self.deletes: List[str] = []
        self.failing: Set[str] = set()
        self.closed = False

    def _check(self, operation: str, key: str) -> None:
        if operation in self.failing:
            raise CacheOperationError(f"cache {operation} unavailable", {"key": key})

    async def get(self, key: str) -> Optional[Any]:
        self.gets.append(key)
        self._check("get", key)
        return copy.deepcopy(self.entries.get(key))

    async def set(self, key: str, value: Any) -> None:
        self.sets.append(key)
        self._check("set", key)
        self.entries[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self.deletes.append(key)
        self._check("delete", key)
        self.entries.pop(key, None)

    async def close(self) -> None:
        self.closed = True

    def reset_log(self) -> None:
        self.gets.clear()
        self.sets.clear()
        self.deletes.clear()


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def recording_cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture()
def device_repository(fake_mongo_database: FakeMongoDatabase) -> DeviceRepository:
    return DeviceRepository(fake_mongo_database)


@pytest.fixture()
def device_registry(
    device_repository: DeviceRepository, recording_cache: RecordingCache
) -> DeviceRegistry:
    return DeviceRegistry(repository=device_repository, cache=recording_cache)
