"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DeviceNotFoundError(DomainError):
    """Raised when a device cannot be found."""

    def __init__(self, device_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Device with ID {device_id} not found"
        super().__init__(message, details)


class InvalidTransitionError(DomainError):
    """Raised when a mutation is not allowed in the device's current state."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class DeviceValidationError(DomainError):
    """Raised when device input fails validation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class DeviceOperationError(DomainError):
    """Raised when the device store fails to complete an operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class CacheOperationError(DomainError):
    """Raised when the cache backend fails to complete an operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
