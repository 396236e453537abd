"""
Device Registry - Application Layer

The single decision point for device mutations and the owner of cache
coherence between the cache and the store.

Reads go through the cache (``device:<id>``, ``device:all``,
``device:brand:<brand>``, ``device:state:<state>``): a hit is returned
without touching the store, a miss is loaded from the store and written
back. Writes never populate the cache; they delete every entry the
mutation may have changed once the store has committed. Guarded mutations
that fail leave both the store and the cache untouched.

Concurrent writes to the same device are not serialized: the last save
wins, and a reader may observe a stale entry between the store commit and
the invalidation.
"""

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union
from uuid import UUID

from src.domain.entities.device import (
    Device,
    DeviceFields,
    DevicePatch,
    DeviceState,
    apply_patch,
)
from src.domain.entities.errors import CacheOperationError, DeviceNotFoundError
from src.domain.ports.cache import ICacheService
from src.domain.repositories.device_repository import IDeviceRepository
from src.domain.services import (
    ALL_DEVICES_KEY,
    brand_key,
    collection_keys,
    device_key,
    ensure_patch_allowed,
    ensure_removable,
    parse_state,
    state_key,
    validate_device_fields,
    validate_device_patch,
)
from src.shared import get_logger

logger = get_logger(__name__)

_DECODE_ERRORS = (KeyError, TypeError, ValueError)


def device_to_payload(device: Device) -> Dict[str, Any]:
    """Serialize a device into the JSON object stored in the cache."""
    return {
        "id": str(device.id),
        "name": device.name,
        "brand": device.brand,
        "state": device.state.value,
        "created_at": device.created_at.isoformat(),
    }


def device_from_payload(payload: Dict[str, Any]) -> Device:
    """Rebuild a device from its cached JSON object."""
    return Device(
        id=UUID(payload["id"]),
        name=payload["name"],
        brand=payload["brand"],
        state=DeviceState(payload["state"]),
        created_at=datetime.fromisoformat(payload["created_at"]),
    )


class DeviceRegistry:
    """Read-through / invalidate-on-write registry of devices."""

    def __init__(self, repository: IDeviceRepository, cache: ICacheService):
        """
        Args:
            repository: Authoritative device store
            cache: Advisory key-value cache shared with other instances
        """
        self.repository = repository
        self.cache = cache

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, device_id: UUID) -> Device:
        """
        Return a device, from the cache when present.

        Raises:
            DeviceNotFoundError: If no device exists for ``device_id``
        """
        key = device_key(device_id)
        cached = await self._cache_get(key)
        if cached is not None:
            try:
                device = device_from_payload(cached)
            except _DECODE_ERRORS as exc:
                logger.warning("devices.cache.decode_failed", key=key, error=str(exc))
            else:
                logger.debug("devices.cache.hit", key=key)
                return device

        logger.debug("devices.cache.miss", key=key)
        device = await self.repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(str(device_id))

        await self._cache_set(key, device_to_payload(device))
        return device

    async def list(self) -> List[Device]:
        """Return all devices, newest first."""
        return await self._read_through_collection(
            ALL_DEVICES_KEY, self.repository.find_all
        )

    async def list_by_brand(self, brand: str) -> List[Device]:
        """Return the devices of ``brand``, newest first."""
        return await self._read_through_collection(
            brand_key(brand), lambda: self.repository.find_by(brand=brand)
        )

    async def list_by_state(self, state: Union[DeviceState, str]) -> List[Device]:
        """
        Return the devices in ``state``, newest first.

        An empty cached bucket is treated as a miss and re-derived from the
        store.

        Raises:
            DeviceValidationError: If ``state`` is not a known state
        """
        device_state = parse_state(state)
        return await self._read_through_collection(
            state_key(device_state),
            lambda: self.repository.find_by(state=device_state),
            empty_is_miss=True,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, fields: DeviceFields) -> Device:
        """
        Create a device; state defaults to AVAILABLE.

        Raises:
            DeviceValidationError: If the input is malformed
        """
        valid_fields = validate_device_fields(fields)
        device = await self.repository.create(valid_fields)

        await self._invalidate(collection_keys(device))
        logger.info(
            "devices.created",
            device_id=str(device.id),
            brand=device.brand,
            state=device.state.value,
        )
        return device

    async def update(self, device_id: UUID, patch: DevicePatch) -> Device:
        """
        Apply a partial update.

        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If the device is in use and the patch
                sets ``name`` or ``brand``
            DeviceValidationError: If a provided field is malformed
        """
        current = await self.get(device_id)
        ensure_patch_allowed(current, patch)
        return await self._save_merged(current, validate_device_patch(patch))

    async def replace(self, device_id: UUID, fields: DeviceFields) -> Device:
        """
        Replace name, brand and state at once; ``id`` and ``created_at`` stay.

        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If the device is in use
            DeviceValidationError: If any field is missing or malformed
        """
        current = await self.get(device_id)
        ensure_patch_allowed(current, DevicePatch.from_fields(fields))
        valid_fields = validate_device_fields(fields)
        return await self._save_merged(current, DevicePatch.from_fields(valid_fields))

    async def remove(self, device_id: UUID) -> None:
        """
        Delete a device.

        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidTransitionError: If the device is in use
        """
        current = await self.get(device_id)
        ensure_removable(current)

        await self.repository.delete(current)
        await self._invalidate([device_key(current.id), *collection_keys(current)])
        logger.info("devices.deleted", device_id=str(current.id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _save_merged(self, current: Device, patch: DevicePatch) -> Device:
        saved = await self.repository.save(apply_patch(current, patch))

        keys = [device_key(saved.id), *collection_keys(saved)]
        # the buckets the device left are stale too
        keys.extend(key for key in collection_keys(current) if key not in keys)
        await self._invalidate(keys)

        logger.info(
            "devices.updated",
            device_id=str(saved.id),
            previous_state=current.state.value,
            state=saved.state.value,
        )
        return saved

    async def _read_through_collection(
        self,
        key: str,
        fetch: Callable[[], Awaitable[List[Device]]],
        empty_is_miss: bool = False,
    ) -> List[Device]:
        cached = await self._cache_get(key)
        if cached is not None and (cached or not empty_is_miss):
            try:
                devices = [device_from_payload(item) for item in cached]
            except _DECODE_ERRORS as exc:
                logger.warning("devices.cache.decode_failed", key=key, error=str(exc))
            else:
                logger.debug("devices.cache.hit", key=key, count=len(devices))
                return devices

        logger.debug("devices.cache.miss", key=key)
        devices = await fetch()
        await self._cache_set(key, [device_to_payload(device) for device in devices])
        return devices

    async def _cache_get(self, key: str) -> Optional[Any]:
        try:
            return await self.cache.get(key)
        except CacheOperationError as exc:
            logger.warning("devices.cache.read_failed", key=key, error=exc.message)
            return None

    async def _cache_set(self, key: str, value: Any) -> None:
        try:
            await self.cache.set(key, value)
        except CacheOperationError as exc:
            logger.warning("devices.cache.populate_failed", key=key, error=exc.message)

    async def _invalidate(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        await asyncio.gather(*(self.cache.delete(key) for key in keys))
        logger.debug("devices.cache.invalidated", keys=keys)
