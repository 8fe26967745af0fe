"""API endpoints for Journey Bookings module."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.journey_bookings.schemas import (
    JourneyBookingCreate,
    JourneyBookingResponse,
    JourneyBookingUpdate,
)
from voyage.modules.journey_bookings.service import JourneyBookingService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/journey-bookings", tags=["Journey Bookings"])


@router.get("/booking/{booking_id}", response_model=ApiResponse[list[JourneyBookingResponse]])
async def list_journey_bookings(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("journey_bookings.read")),
):
    """List train, bus and flight legs of a booking."""
    journey_bookings = await JourneyBookingService(db).list_journey_bookings(booking_id, current_user)
    return ApiResponse(
        success=True, data=[JourneyBookingResponse.model_validate(j) for j in journey_bookings]
    )


@router.post("", response_model=ApiResponse[JourneyBookingResponse], status_code=status.HTTP_201_CREATED)
async def create_journey_booking(
    data: JourneyBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("journey_bookings.write")),
):
    journey_booking = await JourneyBookingService(db).create_journey_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Journey booking created successfully",
        data=JourneyBookingResponse.model_validate(journey_booking),
    )


@router.get("/{journey_booking_id}", response_model=ApiResponse[JourneyBookingResponse])
async def get_journey_booking(
    journey_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("journey_bookings.read")),
):
    journey_booking = await JourneyBookingService(db).get_journey_booking(journey_booking_id, current_user)
    return ApiResponse(success=True, data=JourneyBookingResponse.model_validate(journey_booking))


@router.put("/{journey_booking_id}", response_model=ApiResponse[JourneyBookingResponse])
async def update_journey_booking(
    journey_booking_id: int,
    data: JourneyBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("journey_bookings.write")),
):
    journey_booking = await JourneyBookingService(db).update_journey_booking(
        journey_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Journey booking updated successfully",
        data=JourneyBookingResponse.model_validate(journey_booking),
    )


@router.delete("/{journey_booking_id}", response_model=ApiResponse[None])
async def delete_journey_booking(
    journey_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("journey_bookings.delete")),
):
    await JourneyBookingService(db).delete_journey_booking(journey_booking_id, current_user)
    return ApiResponse(success=True, message="Journey booking deleted successfully", data=None)
