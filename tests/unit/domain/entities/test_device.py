from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import timezone

import pytest

from src.domain.entities.device import (
    Device,
    DeviceFields,
    DevicePatch,
    DeviceState,
    apply_patch,
)


def test_device_defaults() -> None:
    device = Device(name="Galaxy S24", brand="Samsung")
    assert device.state is DeviceState.AVAILABLE
    assert device.created_at.tzinfo == timezone.utc
    assert device.is_in_use is False


def test_device_is_immutable(sample_device: Device) -> None:
    with pytest.raises(FrozenInstanceError):
        sample_device.name = "Other"  # type: ignore[misc]


def test_state_wire_values() -> None:
    assert [state.value for state in DeviceState] == [
        "available",
        "in-use",
        "inactive",
    ]


def test_apply_patch_keeps_absent_fields(sample_device: Device) -> None:
    updated = apply_patch(sample_device, DevicePatch(state=DeviceState.IN_USE))

    assert updated.state is DeviceState.IN_USE
    assert updated.name == sample_device.name
    assert updated.brand == sample_device.brand
    assert updated.id == sample_device.id
    assert updated.created_at == sample_device.created_at
    assert sample_device.state is DeviceState.AVAILABLE


def test_apply_patch_coerces_state_strings(sample_device: Device) -> None:
    patch = DevicePatch(name="iPhone 16", state="inactive")
    updated = apply_patch(sample_device, patch)
    assert updated.name == "iPhone 16"
    assert updated.state is DeviceState.INACTIVE


def test_empty_patch_returns_equal_device(sample_device: Device) -> None:
    assert apply_patch(sample_device, DevicePatch()) == sample_device


def test_patch_touches_identity() -> None:
    assert DevicePatch(name="x").touches_identity
    assert DevicePatch(brand="x").touches_identity
    assert not DevicePatch(state=DeviceState.INACTIVE).touches_identity


def test_patch_from_fields() -> None:
    patch = DevicePatch.from_fields(
        DeviceFields(name="Pixel 8", brand="Google", state=DeviceState.IN_USE)
    )
    assert patch == DevicePatch(
        name="Pixel 8", brand="Google", state=DeviceState.IN_USE
    )
