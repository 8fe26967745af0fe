"""API endpoints for Bookings module."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.bookings.models import BookingType
from voyage.modules.bookings.schemas import (
    BookingCreate,
    BookingDetailResponse,
    BookingResponse,
    BookingUpdate,
)
from voyage.modules.bookings.service import BookingService
from voyage.shared.schemas.base import ApiResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/bookings", tags=["Bookings"])


async def _list(
    booking_type: BookingType,
    db: AsyncSession,
    current_user: User,
    search: str | None,
    from_date: date | None,
    to_date: date | None,
    tour_title: str | None,
    client_name: str | None,
    sort_by: str | None,
    sort_order: SortOrder,
    page: int,
    limit: int,
) -> ApiResponse:
    bookings, total = await BookingService(db).list_bookings(
        current_user,
        booking_type=booking_type,
        search=search,
        from_date=from_date,
        to_date=to_date,
        tour_title=tour_title,
        client_name=client_name,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[BookingResponse.model_validate(b) for b in bookings],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("", response_model=ApiResponse[PaginatedResponse[BookingResponse]])
async def list_bookings(
    search: str | None = Query(None, description="Search by number, branch, client or tour"),
    from_date: date | None = Query(None, description="Booking date from (inclusive)"),
    to_date: date | None = Query(None, description="Booking date to (inclusive)"),
    tour_title: str | None = Query(None),
    client_name: str | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.DESC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.read")),
):
    """List confirmed bookings."""
    return await _list(
        BookingType.CONFIRM, db, current_user, search, from_date, to_date,
        tour_title, client_name, sort_by, sort_order, page, limit,
    )


@router.get("/enquiries", response_model=ApiResponse[PaginatedResponse[BookingResponse]])
async def list_enquiries(
    search: str | None = Query(None, description="Search by number, branch, client or tour"),
    from_date: date | None = Query(None, description="Booking date from (inclusive)"),
    to_date: date | None = Query(None, description="Booking date to (inclusive)"),
    tour_title: str | None = Query(None),
    client_name: str | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.DESC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.read")),
):
    """List tour enquiries that are not confirmed yet."""
    return await _list(
        BookingType.ENQUIRY, db, current_user, search, from_date, to_date,
        tour_title, client_name, sort_by, sort_order, page, limit,
    )


@router.post("", response_model=ApiResponse[BookingDetailResponse], status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.write")),
):
    """Create an enquiry or booking. Agency admins must choose the branch."""
    booking = await BookingService(db).create_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Booking created successfully",
        data=BookingDetailResponse.model_validate(booking),
    )


@router.get("/{booking_id}", response_model=ApiResponse[BookingDetailResponse])
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.read")),
):
    booking = await BookingService(db).get_booking(booking_id, current_user)
    return ApiResponse(success=True, data=BookingDetailResponse.model_validate(booking))


@router.put("/{booking_id}", response_model=ApiResponse[BookingDetailResponse])
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.write")),
):
    """Update a booking; a ``details`` list replaces the itinerary days."""
    booking = await BookingService(db).update_booking(booking_id, data, current_user)
    return ApiResponse(
        success=True,
        message="Booking updated successfully",
        data=BookingDetailResponse.model_validate(booking),
    )


@router.delete("/{booking_id}", response_model=ApiResponse[None])
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("bookings.delete")),
):
    await BookingService(db).delete_booking(booking_id, current_user)
    return ApiResponse(success=True, message="Booking deleted successfully", data=None)
