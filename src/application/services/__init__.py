"""
Application Services Package

Stateful orchestrators composed from domain ports; currently the device
registry that coordinates the cache and the store.
"""

from .device_registry import DeviceRegistry, device_from_payload, device_to_payload

__all__ = ["DeviceRegistry", "device_from_payload", "device_to_payload"]
