"""
MongoDB Device Repository - Infrastructure Layer

This module implements the IDeviceRepository interface using MongoDB
as the underlying data store.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

import pymongo

from src.domain.entities.device import Device, DeviceFields, DeviceState
from src.domain.entities.errors import DeviceNotFoundError, DeviceOperationError
from src.domain.repositories.device_repository import IDeviceRepository
from src.infrastructure.database import MongoDatabase
from src.infrastructure.database.mongo_database import DEVICES_COLLECTION


def _utc_now() -> datetime:
    # BSON dates carry millisecond precision
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class DeviceRepository(IDeviceRepository):
    """MongoDB implementation of the device store."""

    COLLECTION_NAME = DEVICES_COLLECTION

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB device repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, device: Device) -> Dict[str, Any]:
        """Convert a Device entity to a MongoDB document."""
        return {
            "id": str(device.id),
            "name": device.name,
            "brand": device.brand,
            "state": device.state.value,
            "created_at": device.created_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> Device:
        """Convert a MongoDB document to a Device entity."""
        created_at = document["created_at"]
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Device(
            id=UUID(document["id"]),
            name=document["name"],
            brand=document["brand"],
            state=DeviceState(document["state"]),
            created_at=created_at,
        )

    async def _find(self, query: Dict[str, Any]) -> List[Device]:
        try:
            documents = await self.db.find_many(
                self.COLLECTION_NAME,
                query,
                sort_by="created_at",
                sort_direction=pymongo.DESCENDING,
            )
        except Exception as e:
            raise DeviceOperationError(f"Failed to list devices: {str(e)}")

        return [self._to_entity(document) for document in documents]

    async def create(self, fields: DeviceFields) -> Device:
        """
        Create a new device with a generated id and creation time.

        Raises:
            DeviceOperationError: If the insert fails
        """
        device = Device(
            id=uuid4(),
            name=fields.name,
            brand=fields.brand,
            state=DeviceState(fields.state),
            created_at=_utc_now(),
        )
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(device))
        except Exception as e:
            raise DeviceOperationError(f"Failed to create device: {str(e)}")
        return device

    async def find_by_id(self, device_id: UUID) -> Optional[Device]:
        """
        Find a device by its ID.

        Args:
            device_id: The unique identifier of the device to find

        Returns:
            The device if found, None otherwise
        """
        try:
            document = await self.db.find_one(
                self.COLLECTION_NAME, {"id": str(device_id)}
            )
        except Exception as e:
            raise DeviceOperationError(f"Failed to fetch device: {str(e)}")

        if document is None:
            return None
        return self._to_entity(document)

    async def find_all(self) -> List[Device]:
        return await self._find({})

    async def find_by(
        self,
        brand: Optional[str] = None,
        state: Optional[DeviceState] = None,
    ) -> List[Device]:
        query: Dict[str, Any] = {}

        if brand is not None:
            query["brand"] = brand

        if state is not None:
            query["state"] = DeviceState(state).value

        return await self._find(query)

    async def save(self, device: Device) -> Device:
        """
        Insert or replace the device document.

        Raises:
            DeviceOperationError: If the write fails
        """
        try:
            await self.db.replace_one(
                self.COLLECTION_NAME,
                {"id": str(device.id)},
                self._to_document(device),
                upsert=True,
            )
        except Exception as e:
            raise DeviceOperationError(f"Failed to save device: {str(e)}")
        return device

    async def delete(self, device: Device) -> None:
        """
        Delete a device document.

        Raises:
            DeviceNotFoundError: If the device does not exist
            DeviceOperationError: If the deletion fails
        """
        try:
            await self.db.delete_one(self.COLLECTION_NAME, {"id": str(device.id)})
        except Exception as e:
            if "Document not found" in str(e):
                raise DeviceNotFoundError(str(device.id))
            raise DeviceOperationError(f"Failed to delete device: {str(e)}")
