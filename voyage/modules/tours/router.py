"""API endpoints for Tours module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.tours.schemas import TourCreate, TourResponse, TourUpdate
from voyage.modules.tours.service import TourService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/tours", tags=["Tours"])


@router.get("", response_model=ApiResponse[PaginatedResponse[TourResponse]])
async def list_tours(
    search: str | None = Query(None, description="Search by title, type or destination"),
    sector_id: int | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.read")),
):
    tours, total = await TourService(db).list_tours(
        current_user.agency_id, search, sector_id, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[TourResponse.model_validate(t) for t in tours],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_tours(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.read")),
):
    tours = await TourService(db).list_all_tours(current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=t.id, name=t.tour_title) for t in tours])


@router.post("", response_model=ApiResponse[TourResponse], status_code=status.HTTP_201_CREATED)
async def create_tour(
    data: TourCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.write")),
):
    tour = await TourService(db).create_tour(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Tour created successfully",
        data=TourResponse.model_validate(tour),
    )


@router.get("/{tour_id}", response_model=ApiResponse[TourResponse])
async def get_tour(
    tour_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.read")),
):
    tour = await TourService(db).get_tour_by_id(tour_id, current_user.agency_id)
    return ApiResponse(success=True, data=TourResponse.model_validate(tour))


@router.put("/{tour_id}", response_model=ApiResponse[TourResponse])
async def update_tour(
    tour_id: int,
    data: TourUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.write")),
):
    tour = await TourService(db).update_tour(tour_id, current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Tour updated successfully",
        data=TourResponse.model_validate(tour),
    )


@router.delete("/{tour_id}", response_model=ApiResponse[None])
async def delete_tour(
    tour_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("tours.delete")),
):
    await TourService(db).delete_tour(tour_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Tour deleted successfully", data=None)
