"""Cache key scheme shared by every registry instance using the same cache."""

from typing import List, Union
from uuid import UUID

from src.domain.entities.device import Device, DeviceState

KEY_PREFIX = "device"
ALL_DEVICES_KEY = f"{KEY_PREFIX}:all"


def device_key(device_id: Union[UUID, str]) -> str:
    return f"{KEY_PREFIX}:{device_id}"


def brand_key(brand: str) -> str:
    return f"{KEY_PREFIX}:brand:{brand}"


def state_key(state: DeviceState) -> str:
    return f"{KEY_PREFIX}:state:{state.value}"


def collection_keys(device: Device) -> List[str]:
    """Keys of every cached collection the device appears in."""
    return [ALL_DEVICES_KEY, brand_key(device.brand), state_key(device.state)]
