"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceReplaceDTO,
    DeviceResponseDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "DeviceCreateDTO",
    "DevicePatchDTO",
    "DeviceReplaceDTO",
    "DeviceResponseDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
