"""API endpoints for Hotel Bookings module."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.hotel_bookings.schemas import (
    HotelBookingCreate,
    HotelBookingResponse,
    HotelBookingUpdate,
)
from voyage.modules.hotel_bookings.service import HotelBookingService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/hotel-bookings", tags=["Hotel Bookings"])


@router.get("/booking/{booking_id}", response_model=ApiResponse[list[HotelBookingResponse]])
async def list_hotel_bookings(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotel_bookings.read")),
):
    """List hotel stays of a booking."""
    hotel_bookings = await HotelBookingService(db).list_hotel_bookings(booking_id, current_user)
    return ApiResponse(
        success=True, data=[HotelBookingResponse.model_validate(h) for h in hotel_bookings]
    )


@router.post("", response_model=ApiResponse[HotelBookingResponse], status_code=status.HTTP_201_CREATED)
async def create_hotel_booking(
    data: HotelBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotel_bookings.write")),
):
    """Create a hotel booking. Nights default to the days between check-in and check-out."""
    hotel_booking = await HotelBookingService(db).create_hotel_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Hotel booking created successfully",
        data=HotelBookingResponse.model_validate(hotel_booking),
    )


@router.get("/{hotel_booking_id}", response_model=ApiResponse[HotelBookingResponse])
async def get_hotel_booking(
    hotel_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotel_bookings.read")),
):
    hotel_booking = await HotelBookingService(db).get_hotel_booking(hotel_booking_id, current_user)
    return ApiResponse(success=True, data=HotelBookingResponse.model_validate(hotel_booking))


@router.put("/{hotel_booking_id}", response_model=ApiResponse[HotelBookingResponse])
async def update_hotel_booking(
    hotel_booking_id: int,
    data: HotelBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotel_bookings.write")),
):
    hotel_booking = await HotelBookingService(db).update_hotel_booking(
        hotel_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Hotel booking updated successfully",
        data=HotelBookingResponse.model_validate(hotel_booking),
    )


@router.delete("/{hotel_booking_id}", response_model=ApiResponse[None])
async def delete_hotel_booking(
    hotel_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotel_bookings.delete")),
):
    await HotelBookingService(db).delete_hotel_booking(hotel_booking_id, current_user)
    return ApiResponse(success=True, message="Hotel booking deleted successfully", data=None)
