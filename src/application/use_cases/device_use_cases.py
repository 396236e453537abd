"""
Device Use Cases - Application Layer

This module defines use cases for device operations. Each use case maps
request DTOs onto the device registry and the resulting domain entities
back onto response DTOs; caching and guard rules live in the registry.
"""

from typing import List, Optional
from uuid import UUID

from dependency_injector.wiring import Provide, inject

from src.application.services.device_registry import DeviceRegistry
from src.domain.entities.device import DeviceState

from ..dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceReplaceDTO,
    DeviceResponseDTO,
)


class CreateDeviceUseCase:
    """Use case for registering a new device."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(self, device_dto: DeviceCreateDTO) -> DeviceResponseDTO:
        """
        Create a new device.

        Args:
            device_dto: The device create DTO

        Returns:
            The created device as a response DTO
        """
        device = await self.device_registry.create(device_dto.to_fields())
        return DeviceResponseDTO.from_domain(device)


class GetDevicesUseCase:
    """Use case for listing devices, optionally filtered by brand or state."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(
        self,
        brand: Optional[str] = None,
        state: Optional[DeviceState] = None,
    ) -> List[DeviceResponseDTO]:
        """
        Retrieve devices, newest first.

        When both filters are given, ``brand`` takes precedence.

        Args:
            brand: Only return devices of this brand
            state: Only return devices in this state

        Returns:
            List of device response DTOs
        """
        if brand:
            devices = await self.device_registry.list_by_brand(brand)
        elif state is not None:
            devices = await self.device_registry.list_by_state(state)
        else:
            devices = await self.device_registry.list()
        return [DeviceResponseDTO.from_domain(device) for device in devices]


class GetDeviceByIdUseCase:
    """Use case for retrieving a device by ID."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(self, device_id: UUID) -> DeviceResponseDTO:
        """
        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        device = await self.device_registry.get(device_id)
        return DeviceResponseDTO.from_domain(device)


class UpdateDeviceUseCase:
    """Use case for partially updating a device."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(
        self, device_id: UUID, device_dto: DevicePatchDTO
    ) -> DeviceResponseDTO:
        """
        Update the fields present in the DTO.

        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If name or brand change while in use
        """
        device = await self.device_registry.update(device_id, device_dto.to_patch())
        return DeviceResponseDTO.from_domain(device)


class ReplaceDeviceUseCase:
    """Use case for fully replacing a device's mutable fields."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(
        self, device_id: UUID, device_dto: DeviceReplaceDTO
    ) -> DeviceResponseDTO:
        """
        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If the device is in use
        """
        device = await self.device_registry.replace(
            device_id, device_dto.to_fields()
        )
        return DeviceResponseDTO.from_domain(device)


class DeleteDeviceUseCase:
    """Use case for deleting a device."""

    @inject
    def __init__(self, device_registry: DeviceRegistry = Provide["device_registry"]):
        self.device_registry = device_registry

    async def execute(self, device_id: UUID) -> None:
        """
        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If the device is in use
        """
        await self.device_registry.remove(device_id)
