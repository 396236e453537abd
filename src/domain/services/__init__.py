"""
Domain Services Package

Stateless business rules: input validation, the in-use transition guard
and the cache key scheme.
"""

from .cache_keys import (
    ALL_DEVICES_KEY,
    brand_key,
    collection_keys,
    device_key,
    state_key,
)
from .device_guard import ensure_patch_allowed, ensure_removable
from .device_validator import (
    parse_state,
    validate_device_fields,
    validate_device_patch,
)

__all__ = [
    "ALL_DEVICES_KEY",
    "brand_key",
    "collection_keys",
    "device_key",
    "state_key",
    "ensure_patch_allowed",
    "ensure_removable",
    "parse_state",
    "validate_device_fields",
    "validate_device_patch",
]
