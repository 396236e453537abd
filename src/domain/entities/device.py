"""
Domain Entities - Device

This module defines the Device entity, its lifecycle states and the
explicit patch structure used for partial updates. The entity is a plain
dataclass with no knowledge of storage or caching.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

MAX_FIELD_LENGTH = 255


class DeviceState(str, Enum):
    """Lifecycle state of a device."""

    AVAILABLE = "available"
    IN_USE = "in-use"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Device:
    """A physical or virtual device tracked by the registry."""

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    brand: str = ""
    state: DeviceState = DeviceState.AVAILABLE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_in_use(self) -> bool:
        return self.state is DeviceState.IN_USE


@dataclass(frozen=True)
class DeviceFields:
    """Input for creating or fully replacing a device."""

    name: str
    brand: str
    state: Union[DeviceState, str] = DeviceState.AVAILABLE


@dataclass(frozen=True)
class DevicePatch:
    """Partial update; ``None`` means the field is not part of the update."""

    name: Optional[str] = None
    brand: Optional[str] = None
    state: Optional[Union[DeviceState, str]] = None

    @property
    def touches_identity(self) -> bool:
        """Whether the patch sets ``name`` or ``brand`` (even to the same value)."""
        return self.name is not None or self.brand is not None

    @classmethod
    def from_fields(cls, fields: DeviceFields) -> "DevicePatch":
        return cls(name=fields.name, brand=fields.brand, state=fields.state)


def apply_patch(device: Device, patch: DevicePatch) -> Device:
    """Return a copy of ``device`` with the fields present in ``patch`` applied.

    ``id`` and ``created_at`` are always carried over unchanged and fields
    missing from the patch keep their current value.
    """
    changes = {}
    if patch.name is not None:
        changes["name"] = patch.name
    if patch.brand is not None:
        changes["brand"] = patch.brand
    if patch.state is not None:
        changes["state"] = DeviceState(patch.state)
    return replace(device, **changes)
