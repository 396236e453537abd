"""
Use Cases Package - Application Layer

This package contains use cases that expose the device registry to the
presentation layer, translating between DTOs and domain entities.
"""

from .device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    ReplaceDeviceUseCase,
    UpdateDeviceUseCase,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase

__all__ = [
    "CreateDeviceUseCase",
    "GetDevicesUseCase",
    "GetDeviceByIdUseCase",
    "UpdateDeviceUseCase",
    "ReplaceDeviceUseCase",
    "DeleteDeviceUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
