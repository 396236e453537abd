"""Domain service helpers for validating device input."""

from typing import List, Optional, Union

from src.domain.entities.device import (
    MAX_FIELD_LENGTH,
    DeviceFields,
    DevicePatch,
    DeviceState,
)
from src.domain.entities.errors import DeviceValidationError


def parse_state(value: Union[DeviceState, str]) -> DeviceState:
    """Coerce a raw state value into a ``DeviceState``.

    Raises:
        DeviceValidationError: If the value is not one of the known states.
    """
    if isinstance(value, DeviceState):
        return value
    try:
        return DeviceState(value)
    except ValueError:
        allowed = [state.value for state in DeviceState]
        raise DeviceValidationError(
            f"Invalid device state '{value}'",
            {"field": "state", "allowed": allowed},
        )


def _validate_text(field_name: str, value: Optional[str], errors: List[str]) -> None:
    if value is None:
        return
    if not isinstance(value, str) or not value.strip():
        errors.append(f"Device {field_name} must be a non-empty string.")
    elif len(value) > MAX_FIELD_LENGTH:
        errors.append(
            f"Device {field_name} must be at most {MAX_FIELD_LENGTH} characters."
        )


def _raise_if_errors(errors: List[str]) -> None:
    if errors:
        raise DeviceValidationError("Device validation failed", {"errors": errors})


def validate_device_fields(fields: DeviceFields) -> DeviceFields:
    """Validate creation / full-replace input and normalise its state.

    Raises:
        DeviceValidationError: If name or brand is empty or too long, or the
            state is unknown.
    """
    errors: List[str] = []
    _validate_text("name", fields.name, errors)
    _validate_text("brand", fields.brand, errors)
    if fields.name is None:
        errors.append("Device name is required.")
    if fields.brand is None:
        errors.append("Device brand is required.")
    _raise_if_errors(errors)

    return DeviceFields(
        name=fields.name,
        brand=fields.brand,
        state=parse_state(fields.state),
    )


def validate_device_patch(patch: DevicePatch) -> DevicePatch:
    """Validate the fields present in a partial update.

    Raises:
        DeviceValidationError: If a provided field is malformed.
    """
    errors: List[str] = []
    _validate_text("name", patch.name, errors)
    _validate_text("brand", patch.brand, errors)
    _raise_if_errors(errors)

    if patch.state is None:
        return patch
    return DevicePatch(
        name=patch.name, brand=patch.brand, state=parse_state(patch.state)
    )
