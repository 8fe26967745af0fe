"""API endpoints for Group Bookings module."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.group_bookings.schemas import (
    GroupBookingCreate,
    GroupBookingDetailResponse,
    GroupBookingResponse,
    GroupBookingUpdate,
    GroupClientBookingCreate,
    GroupClientBookingResponse,
    GroupClientBookingUpdate,
)
from voyage.modules.group_bookings.service import GroupBookingService
from voyage.shared.schemas.base import ApiResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/group-bookings", tags=["Group Bookings"])
client_bookings_router = APIRouter(prefix="/group-client-bookings", tags=["Group Bookings"])


@router.get("", response_model=ApiResponse[PaginatedResponse[GroupBookingResponse]])
async def list_group_bookings(
    search: str | None = Query(None, description="Search by number, branch or tour"),
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.DESC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.read")),
):
    group_bookings, total = await GroupBookingService(db).list_group_bookings(
        current_user,
        search=search,
        from_date=from_date,
        to_date=to_date,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[GroupBookingResponse.model_validate(g) for g in group_bookings],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.post(
    "", response_model=ApiResponse[GroupBookingDetailResponse], status_code=status.HTTP_201_CREATED
)
async def create_group_booking(
    data: GroupBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.write")),
):
    group_booking = await GroupBookingService(db).create_group_booking(data, current_user)
    return ApiResponse(
        success=True,
        message="Group booking created successfully",
        data=GroupBookingDetailResponse.model_validate(group_booking),
    )


@router.get("/{group_booking_id}", response_model=ApiResponse[GroupBookingDetailResponse])
async def get_group_booking(
    group_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.read")),
):
    group_booking = await GroupBookingService(db).get_group_booking(group_booking_id, current_user)
    return ApiResponse(success=True, data=GroupBookingDetailResponse.model_validate(group_booking))


@router.put("/{group_booking_id}", response_model=ApiResponse[GroupBookingDetailResponse])
async def update_group_booking(
    group_booking_id: int,
    data: GroupBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.write")),
):
    group_booking = await GroupBookingService(db).update_group_booking(
        group_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Group booking updated successfully",
        data=GroupBookingDetailResponse.model_validate(group_booking),
    )


@router.delete("/{group_booking_id}", response_model=ApiResponse[None])
async def delete_group_booking(
    group_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.delete")),
):
    await GroupBookingService(db).delete_group_booking(group_booking_id, current_user)
    return ApiResponse(success=True, message="Group booking deleted successfully", data=None)


@router.get(
    "/{group_booking_id}/clients", response_model=ApiResponse[list[GroupClientBookingResponse]]
)
async def list_client_bookings(
    group_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.read")),
):
    client_bookings = await GroupBookingService(db).list_client_bookings(group_booking_id, current_user)
    return ApiResponse(
        success=True,
        data=[GroupClientBookingResponse.model_validate(c) for c in client_bookings],
    )


@router.post(
    "/{group_booking_id}/clients",
    response_model=ApiResponse[GroupClientBookingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_client_booking(
    group_booking_id: int,
    data: GroupClientBookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.write")),
):
    """Book a client's party into the group."""
    client_booking = await GroupBookingService(db).add_client_booking(
        group_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Client added to group booking",
        data=GroupClientBookingResponse.model_validate(client_booking),
    )


@client_bookings_router.get("/{client_booking_id}", response_model=ApiResponse[GroupClientBookingResponse])
async def get_client_booking(
    client_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.read")),
):
    client_booking = await GroupBookingService(db).get_client_booking(client_booking_id, current_user)
    return ApiResponse(success=True, data=GroupClientBookingResponse.model_validate(client_booking))


@client_bookings_router.put("/{client_booking_id}", response_model=ApiResponse[GroupClientBookingResponse])
async def update_client_booking(
    client_booking_id: int,
    data: GroupClientBookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.write")),
):
    """Update a client's party; a ``members`` list replaces the travellers."""
    client_booking = await GroupBookingService(db).update_client_booking(
        client_booking_id, data, current_user
    )
    return ApiResponse(
        success=True,
        message="Group client booking updated successfully",
        data=GroupClientBookingResponse.model_validate(client_booking),
    )


@client_bookings_router.delete("/{client_booking_id}", response_model=ApiResponse[None])
async def delete_client_booking(
    client_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("group_bookings.delete")),
):
    await GroupBookingService(db).delete_client_booking(client_booking_id, current_user)
    return ApiResponse(success=True, message="Group client booking deleted successfully", data=None)
