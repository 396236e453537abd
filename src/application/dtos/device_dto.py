"""
Device DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) for the device entity.
These DTOs are used to transfer data between the application layer and
the presentation layer (API) and carry the request validation rules.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.entities.device import (
    MAX_FIELD_LENGTH,
    Device,
    DeviceFields,
    DevicePatch,
    DeviceState,
)


def _reject_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class DeviceCreateDTO(BaseModel):
    """DTO for creating a new device."""

    name: str = Field(
        ...,
        description="Device name",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    brand: str = Field(
        ...,
        description="Device brand",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    state: DeviceState = Field(
        default=DeviceState.AVAILABLE, description="Initial device state"
    )

    @field_validator("name", "brand")
    @classmethod
    def reject_blank(cls, value: Optional[str]) -> Optional[str]:
        return _reject_blank(value)

    def to_fields(self) -> DeviceFields:
        return DeviceFields(name=self.name, brand=self.brand, state=self.state)

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "example": {
                "name": "iPhone 15 Pro",
                "brand": "Apple",
                "state": "available",
            }
        },
    }


class DeviceReplaceDTO(BaseModel):
    """DTO for replacing every mutable field of a device (PUT)."""

    name: str = Field(
        ...,
        description="Device name (cannot be updated if device is in-use)",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    brand: str = Field(
        ...,
        description="Device brand (cannot be updated if device is in-use)",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    state: DeviceState = Field(..., description="Device state")

    @field_validator("name", "brand")
    @classmethod
    def reject_blank(cls, value: Optional[str]) -> Optional[str]:
        return _reject_blank(value)

    def to_fields(self) -> DeviceFields:
        return DeviceFields(name=self.name, brand=self.brand, state=self.state)

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "example": {
                "name": "iPhone 15 Pro Max",
                "brand": "Apple",
                "state": "in-use",
            }
        },
    }


class DevicePatchDTO(BaseModel):
    """DTO for partially updating a device (PATCH)."""

    name: Optional[str] = Field(
        None,
        description="Device name (cannot be updated if device is in-use)",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    brand: Optional[str] = Field(
        None,
        description="Device brand (cannot be updated if device is in-use)",
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
    )
    state: Optional[DeviceState] = Field(None, description="Device state")

    @field_validator("name", "brand")
    @classmethod
    def reject_blank(cls, value: Optional[str]) -> Optional[str]:
        return _reject_blank(value)

    def to_patch(self) -> DevicePatch:
        return DevicePatch(name=self.name, brand=self.brand, state=self.state)

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {"example": {"state": "in-use"}},
    }


class DeviceResponseDTO(BaseModel):
    """DTO returned for a single device."""

    id: UUID = Field(description="Device identifier")
    name: str = Field(description="Device name")
    brand: str = Field(description="Device brand")
    state: DeviceState = Field(description="Device state")
    created_at: datetime = Field(description="When the device was created")

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceResponseDTO":
        return cls(
            id=device.id,
            name=device.name,
            brand=device.brand,
            state=device.state,
            created_at=device.created_at,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "229e8072-d714-4305-a9c2-6ad57c4ecba2",
                "name": "iPhone 15 Pro",
                "brand": "Apple",
                "state": "available",
                "created_at": "2024-06-15T12:34:56.789Z",
            }
        }
    }
