"""API endpoints for Hotels module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.hotels.schemas import HotelCreate, HotelResponse, HotelUpdate
from voyage.modules.hotels.service import HotelService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/hotels", tags=["Hotels"])


@router.get("", response_model=ApiResponse[PaginatedResponse[HotelResponse]])
async def list_hotels(
    search: str | None = Query(None, description="Search by name, contact person, email or phone"),
    city_id: int | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.read")),
):
    hotels, total = await HotelService(db).list_hotels(
        current_user.agency_id, search, city_id, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[HotelResponse.model_validate(h) for h in hotels],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_hotels(
    city_id: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.read")),
):
    hotels = await HotelService(db).list_all_hotels(current_user.agency_id, city_id)
    return ApiResponse(success=True, data=[OptionResponse(id=h.id, name=h.hotel_name) for h in hotels])


@router.post("", response_model=ApiResponse[HotelResponse], status_code=status.HTTP_201_CREATED)
async def create_hotel(
    data: HotelCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.write")),
):
    hotel = await HotelService(db).create_hotel(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Hotel created successfully",
        data=HotelResponse.model_validate(hotel),
    )


@router.get("/{hotel_id}", response_model=ApiResponse[HotelResponse])
async def get_hotel(
    hotel_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.read")),
):
    hotel = await HotelService(db).get_hotel_by_id(hotel_id, current_user.agency_id)
    return ApiResponse(success=True, data=HotelResponse.model_validate(hotel))


@router.put("/{hotel_id}", response_model=ApiResponse[HotelResponse])
async def update_hotel(
    hotel_id: int,
    data: HotelUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.write")),
):
    hotel = await HotelService(db).update_hotel(hotel_id, current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Hotel updated successfully",
        data=HotelResponse.model_validate(hotel),
    )


@router.delete("/{hotel_id}", response_model=ApiResponse[None])
async def delete_hotel(
    hotel_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("hotels.delete")),
):
    await HotelService(db).delete_hotel(hotel_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Hotel deleted successfully", data=None)
