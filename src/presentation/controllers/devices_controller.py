"""
Devices Router - Presentation Layer

This module defines the FastAPI router for device endpoints.
"""

from typing import Any, List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import UUID4

from src.application.dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceReplaceDTO,
    DeviceResponseDTO,
)
from src.application.use_cases.device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    ReplaceDeviceUseCase,
    UpdateDeviceUseCase,
)
from src.domain.entities.device import DeviceState
from src.domain.entities.errors import (
    DeviceNotFoundError,
    DeviceValidationError,
    DomainError,
    InvalidTransitionError,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/devices", tags=["Devices"])


def _error_detail(error: DomainError) -> Any:
    return {"message": error.message, **error.details} if error.details else str(error)


def _to_http_exception(error: Exception, event: str, **context: Any) -> HTTPException:
    """Map a domain error raised by a use case onto an HTTP error response."""
    if isinstance(error, DeviceNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error),
        )
    if isinstance(error, (InvalidTransitionError, DeviceValidationError)):
        logger.warning(event, error=str(error), details=error.details, **context)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error_detail(error),
        )

    logger.error(event, error=str(error), exc_info=error, **context)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post(
    "/",
    response_model=DeviceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_device(
    device_dto: DeviceCreateDTO,
    create_device_use_case: CreateDeviceUseCase = Depends(
        Provide["create_device_use_case"]
    ),
) -> DeviceResponseDTO:
    """
    Register a new device. The state defaults to ``available``.
    """
    try:
        return await create_device_use_case.execute(device_dto=device_dto)
    except Exception as e:
        raise _to_http_exception(e, "devices.create.failed")


@router.get("/", response_model=List[DeviceResponseDTO])
@inject
async def get_devices(
    brand: Optional[str] = Query(None, description="Filter by device brand"),
    state: Optional[DeviceState] = Query(
        None, description="Filter by device state (ignored when brand is given)"
    ),
    get_devices_use_case: GetDevicesUseCase = Depends(Provide["get_devices_use_case"]),
) -> List[DeviceResponseDTO]:
    """
    List devices, newest first.

    Filter by brand or by state; when both are given the brand filter is
    applied.
    """
    try:
        return await get_devices_use_case.execute(brand=brand, state=state)
    except Exception as e:
        raise _to_http_exception(
            e,
            "devices.list.failed",
            brand=brand,
            state=state.value if state else None,
        )


@router.get("/{device_id}", response_model=DeviceResponseDTO)
@inject
async def get_device_by_id(
    device_id: UUID4,
    get_device_use_case: GetDeviceByIdUseCase = Depends(
        Provide["get_device_by_id_use_case"]
    ),
) -> DeviceResponseDTO:
    """Get a single device by its ID."""
    try:
        return await get_device_use_case.execute(device_id=device_id)
    except Exception as e:
        raise _to_http_exception(e, "devices.get.failed", device_id=str(device_id))


@router.patch("/{device_id}", response_model=DeviceResponseDTO)
@inject
async def update_device(
    device_id: UUID4,
    device_dto: DevicePatchDTO,
    update_device_use_case: UpdateDeviceUseCase = Depends(
        Provide["update_device_use_case"]
    ),
) -> DeviceResponseDTO:
    """
    Partially update a device.

    Name and brand cannot be changed while the device is in use.
    """
    try:
        return await update_device_use_case.execute(
            device_id=device_id, device_dto=device_dto
        )
    except Exception as e:
        raise _to_http_exception(e, "devices.update.failed", device_id=str(device_id))


@router.put("/{device_id}", response_model=DeviceResponseDTO)
@inject
async def replace_device(
    device_id: UUID4,
    device_dto: DeviceReplaceDTO,
    replace_device_use_case: ReplaceDeviceUseCase = Depends(
        Provide["replace_device_use_case"]
    ),
) -> DeviceResponseDTO:
    """
    Replace name, brand and state of a device.

    Rejected while the device is in use.
    """
    try:
        return await replace_device_use_case.execute(
            device_id=device_id, device_dto=device_dto
        )
    except Exception as e:
        raise _to_http_exception(
            e, "devices.replace.failed", device_id=str(device_id)
        )


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_device(
    device_id: UUID4,
    delete_device_use_case: DeleteDeviceUseCase = Depends(
        Provide["delete_device_use_case"]
    ),
) -> None:
    """
    Delete a device. In-use devices cannot be deleted.
    """
    try:
        await delete_device_use_case.execute(device_id=device_id)
    except Exception as e:
        raise _to_http_exception(e, "devices.delete.failed", device_id=str(device_id))
