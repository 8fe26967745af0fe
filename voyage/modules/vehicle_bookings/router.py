"""API endpoints for Vehicle Bookings module."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.vehicle_bookings.schemas import (
    GroupClientVehicleBookingCreate,
    VehicleBookingCreate,
    VehicleBookingResponse,
    VehicleBookingUpdate,
)
from voyage.modules.vehicle_bookings.service import VehicleBookingService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/vehicle-bookings", tags=["Vehicle Bookings"])
group_client_router = APIRouter(
    prefix="/group-client-vehicle-bookings", tags=["Group Client Vehicle Bookings"]
)


@router.get("/booking/{booking_id}", response_model=ApiResponse[list[VehicleBookingResponse]])
async def list_vehicle_bookings(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.read")),
):
    """List vehicles hired for a booking."""
    vehicle_bookings = await VehicleBookingService(db).list_vehicle_bookings(booking_id, current_user)
    return ApiResponse(
        success=True, data=[VehicleBookingResponse.model_validate(v) for v in vehicle_bookings]
    )


@router.post("", response_model=ApiResponse[VehicleBookingResponse], status_code=status.HTTP_201_CREATED)
async def create_vehicle_booking(
    data: VehicleBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.write")),
):
    """Create a vehicle booking with its itinerary and hotel legs."""
    vehicle_booking = await VehicleBookingService(db).create_vehicle_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Vehicle booking created successfully",
        data=VehicleBookingResponse.model_validate(vehicle_booking),
    )


@router.get("/{vehicle_booking_id}", response_model=ApiResponse[VehicleBookingResponse])
async def get_vehicle_booking(
    vehicle_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.read")),
):
    vehicle_booking = await VehicleBookingService(db).get_vehicle_booking(vehicle_booking_id, current_user)
    return ApiResponse(success=True, data=VehicleBookingResponse.model_validate(vehicle_booking))


@router.put("/{vehicle_booking_id}", response_model=ApiResponse[VehicleBookingResponse])
async def update_vehicle_booking(
    vehicle_booking_id: int,
    data: VehicleBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.write")),
):
    """Update a vehicle booking; ``itineraries`` and ``hotel_legs`` lists replace the legs."""
    vehicle_booking = await VehicleBookingService(db).update_vehicle_booking(
        vehicle_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Vehicle booking updated successfully",
        data=VehicleBookingResponse.model_validate(vehicle_booking),
    )


@router.delete("/{vehicle_booking_id}", response_model=ApiResponse[None])
async def delete_vehicle_booking(
    vehicle_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.delete")),
):
    await VehicleBookingService(db).delete_vehicle_booking(vehicle_booking_id, current_user)
    return ApiResponse(success=True, message="Vehicle booking deleted successfully", data=None)


# Group client vehicle bookings


@group_client_router.get(
    "/group-client-booking/{group_client_booking_id}",
    response_model=ApiResponse[list[VehicleBookingResponse]],
)
async def list_group_client_vehicle_bookings(
    group_client_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.read")),
):
    """List vehicles hired for one party of a group booking."""
    vehicle_bookings = await VehicleBookingService(db).list_group_client_vehicle_bookings(
        group_client_booking_id, current_user
    )
    return ApiResponse(
        success=True, data=[VehicleBookingResponse.model_validate(v) for v in vehicle_bookings]
    )


@group_client_router.post(
    "", response_model=ApiResponse[VehicleBookingResponse], status_code=status.HTTP_201_CREATED
)
async def create_group_client_vehicle_booking(
    data: GroupClientVehicleBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.write")),
):
    vehicle_booking = await VehicleBookingService(db).create_vehicle_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Vehicle booking created successfully",
        data=VehicleBookingResponse.model_validate(vehicle_booking),
    )


@group_client_router.get("/{vehicle_booking_id}", response_model=ApiResponse[VehicleBookingResponse])
async def get_group_client_vehicle_booking(
    vehicle_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.read")),
):
    vehicle_booking = await VehicleBookingService(db).get_vehicle_booking(vehicle_booking_id, current_user)
    return ApiResponse(success=True, data=VehicleBookingResponse.model_validate(vehicle_booking))


@group_client_router.put("/{vehicle_booking_id}", response_model=ApiResponse[VehicleBookingResponse])
async def update_group_client_vehicle_booking(
    vehicle_booking_id: int,
    data: VehicleBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.write")),
):
    vehicle_booking = await VehicleBookingService(db).update_vehicle_booking(
        vehicle_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Vehicle booking updated successfully",
        data=VehicleBookingResponse.model_validate(vehicle_booking),
    )


@group_client_router.delete("/{vehicle_booking_id}", response_model=ApiResponse[None])
async def delete_group_client_vehicle_booking(
    vehicle_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("vehicle_bookings.delete")),
):
    await VehicleBookingService(db).delete_vehicle_booking(vehicle_booking_id, current_user)
    return ApiResponse(success=True, message="Vehicle booking deleted successfully", data=None)
