from __future__ import annotations

from datetime import timedelta, timezone
from uuid import uuid4

import pytest

from src.domain.entities.device import Device, DeviceFields, DeviceState
from src.domain.entities.errors import DeviceNotFoundError, DeviceOperationError
from src.infrastructure.repositories.device_repository import DeviceRepository

COLLECTION = DeviceRepository.COLLECTION_NAME


@pytest.mark.asyncio
async def test_create_assigns_identity_and_timestamp(
    device_repository: DeviceRepository, fake_mongo_database
) -> None:
    device = await device_repository.create(
        DeviceFields(name="iPhone 15 Pro", brand="Apple", state=DeviceState.IN_USE)
    )

    assert device.id is not None
    assert device.created_at.tzinfo == timezone.utc
    assert device.created_at.microsecond % 1000 == 0
    document = fake_mongo_database.get_collection(COLLECTION).documents[str(device.id)]
    assert document == {
        "id": str(device.id),
        "name": "iPhone 15 Pro",
        "brand": "Apple",
        "state": "in-use",
        "created_at": device.created_at,
    }


@pytest.mark.asyncio
async def test_find_by_id_round_trip(
    device_repository: DeviceRepository, fake_mongo_database, sample_device
) -> None:
    fake_mongo_database.seed(COLLECTION, sample_device)

    assert await device_repository.find_by_id(sample_device.id) == sample_device
    assert await device_repository.find_by_id(uuid4()) is None


@pytest.mark.asyncio
async def test_naive_timestamps_are_read_as_utc(
    device_repository: DeviceRepository, fake_mongo_database, sample_device
) -> None:
    fake_mongo_database.seed(COLLECTION, sample_device)
    document = fake_mongo_database.get_collection(COLLECTION).documents[
        str(sample_device.id)
    ]
    document["created_at"] = sample_device.created_at.replace(tzinfo=None)

    device = await device_repository.find_by_id(sample_device.id)

    assert device is not None
    assert device.created_at == sample_device.created_at


@pytest.mark.asyncio
async def test_find_all_is_newest_first(
    device_repository: DeviceRepository, fake_mongo_database, dummy_now
) -> None:
    devices = [
        Device(name=f"Device {index}", brand="Acme", created_at=dummy_now + delta)
        for index, delta in enumerate(
            [timedelta(minutes=1), timedelta(minutes=3), timedelta(minutes=2)]
        )
    ]
    fake_mongo_database.seed(COLLECTION, *devices)

    result = await device_repository.find_all()

    assert [device.name for device in result] == ["Device 1", "Device 2", "Device 0"]


@pytest.mark.asyncio
async def test_find_by_filters_brand_and_state(
    device_repository: DeviceRepository,
    fake_mongo_database,
    sample_device,
    in_use_device,
) -> None:
    fake_mongo_database.seed(COLLECTION, sample_device, in_use_device)

    assert await device_repository.find_by(brand="Google") == [in_use_device]
    assert await device_repository.find_by(state=DeviceState.AVAILABLE) == [
        sample_device
    ]
    assert (
        await device_repository.find_by(brand="Apple", state=DeviceState.IN_USE) == []
    )
    assert fake_mongo_database.get_collection(COLLECTION).last_query == {
        "brand": "Apple",
        "state": "in-use",
    }


@pytest.mark.asyncio
async def test_save_upserts(
    device_repository: DeviceRepository, fake_mongo_database, sample_device
) -> None:
    await device_repository.save(sample_device)
    assert await device_repository.find_by_id(sample_device.id) == sample_device

    updated = Device(
        id=sample_device.id,
        name=sample_device.name,
        brand=sample_device.brand,
        state=DeviceState.INACTIVE,
        created_at=sample_device.created_at,
    )
    await device_repository.save(updated)

    assert await device_repository.find_by_id(sample_device.id) == updated


@pytest.mark.asyncio
async def test_delete_removes_document(
    device_repository: DeviceRepository, fake_mongo_database, sample_device
) -> None:
    fake_mongo_database.seed(COLLECTION, sample_device)

    await device_repository.delete(sample_device)

    assert fake_mongo_database.get_collection(COLLECTION).documents == {}


@pytest.mark.asyncio
async def test_delete_missing_device_raises_not_found(
    device_repository: DeviceRepository, sample_device
) -> None:
    with pytest.raises(DeviceNotFoundError):
        await device_repository.delete(sample_device)


@pytest.mark.asyncio
async def test_driver_failures_are_wrapped(
    device_repository: DeviceRepository, fake_mongo_database, sample_device
) -> None:
    fake_mongo_database.fail_with = RuntimeError("connection reset")

    with pytest.raises(DeviceOperationError, match="connection reset"):
        await device_repository.create(DeviceFields(name="iPhone", brand="Apple"))
    with pytest.raises(DeviceOperationError):
        await device_repository.find_by_id(sample_device.id)
    with pytest.raises(DeviceOperationError):
        await device_repository.find_all()
    with pytest.raises(DeviceOperationError):
        await device_repository.save(sample_device)
    with pytest.raises(DeviceOperationError):
        await device_repository.delete(sample_device)
