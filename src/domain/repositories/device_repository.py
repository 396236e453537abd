"""
Device Repository Interface

This module defines the interface for device repositories following
the repository pattern. The registry depends only on this contract;
identity generation and timestamps are the store's responsibility.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities.device import Device, DeviceFields, DeviceState


class IDeviceRepository(ABC):
    """Interface for Device repository implementations."""

    @abstractmethod
    async def create(self, fields: DeviceFields) -> Device:
        """
        Create a new device record.

        Args:
            fields: Validated name, brand and state of the new device

        Returns:
            The stored device with ``id`` and ``created_at`` assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, device_id: UUID) -> Optional[Device]:
        """
        Find a device by its ID.

        Args:
            device_id: The unique identifier of the device

        Returns:
            The device if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Device]:
        """
        Return every device, newest first (``created_at`` descending).
        """
        pass

    @abstractmethod
    async def find_by(
        self,
        brand: Optional[str] = None,
        state: Optional[DeviceState] = None,
    ) -> List[Device]:
        """
        Return devices matching all given filters, newest first.

        Args:
            brand: Exact brand to match
            state: Lifecycle state to match

        Returns:
            Matching devices ordered by ``created_at`` descending
        """
        pass

    @abstractmethod
    async def save(self, device: Device) -> Device:
        """
        Insert or replace a device record (upsert).

        Args:
            device: The full device to persist

        Returns:
            The persisted device
        """
        pass

    @abstractmethod
    async def delete(self, device: Device) -> None:
        """
        Delete a device record.

        Args:
            device: The device to remove

        Raises:
            DeviceNotFoundError: If the device no longer exists
        """
        pass
