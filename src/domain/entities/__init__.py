"""
Domain Entities Package

This package contains the core domain entities and business errors.
"""

from .device import (
    MAX_FIELD_LENGTH,
    Device,
    DeviceFields,
    DevicePatch,
    DeviceState,
    apply_patch,
)
from .errors import (
    CacheOperationError,
    DeviceNotFoundError,
    DeviceOperationError,
    DeviceValidationError,
    DomainError,
    InvalidTransitionError,
)
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth

__all__ = [
    "MAX_FIELD_LENGTH",
    "Device",
    "DeviceFields",
    "DevicePatch",
    "DeviceState",
    "apply_patch",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "DeviceNotFoundError",
    "InvalidTransitionError",
    "DeviceValidationError",
    "DeviceOperationError",
    "CacheOperationError",
]
