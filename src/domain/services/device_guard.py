"""Transition guard for device mutations.

The state values themselves can move freely between AVAILABLE, IN_USE and
INACTIVE. The guard only blocks field changes and deletion while a device
is in use.
"""

from src.domain.entities.device import Device, DevicePatch
from src.domain.entities.errors import InvalidTransitionError


def ensure_patch_allowed(device: Device, patch: DevicePatch) -> None:
    """
    Raises:
        InvalidTransitionError: If the device is in use and the patch sets
            ``name`` or ``brand``.
    """
    if device.is_in_use and patch.touches_identity:
        raise InvalidTransitionError(
            "Name and brand properties cannot be updated when device is in-use",
            {"device_id": str(device.id), "state": device.state.value},
        )


def ensure_removable(device: Device) -> None:
    """
    Raises:
        InvalidTransitionError: If the device is in use.
    """
    if device.is_in_use:
        raise InvalidTransitionError(
            "In-use devices cannot be deleted",
            {"device_id": str(device.id), "state": device.state.value},
        )
