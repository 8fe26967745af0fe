"""API endpoints for Agencies module (platform administration)."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.agencies.schemas import (
    AgencyCreate,
    AgencyDetailResponse,
    AgencyResponse,
    AgencyUpdate,
)
from voyage.modules.agencies.service import AgencyService
from voyage.shared.schemas.base import ApiResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/agencies", tags=["Agencies"])


@router.get("", response_model=ApiResponse[PaginatedResponse[AgencyResponse]])
async def list_agencies(
    search: str | None = Query(None, description="Search by business name, contact person, email, city"),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agencies.read", agency_scoped=False)),
):
    """List agencies with their current subscription."""
    agencies, total = await AgencyService(db).list_agencies(search, sort_by, sort_order, page, limit)
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[AgencyResponse.model_validate(a) for a in agencies],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[AgencyDetailResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_agency(
    data: AgencyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agencies.write", agency_scoped=False)),
):
    """Onboard an agency with its first subscription and admin user."""
    agency = await AgencyService(db).create_agency(data, current_user.id)
    return ApiResponse(
        success=True,
        message="Agency created successfully",
        data=AgencyDetailResponse.model_validate(agency),
    )


@router.get("/{agency_id}", response_model=ApiResponse[AgencyDetailResponse])
async def get_agency(
    agency_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agencies.read", agency_scoped=False)),
):
    """Get agency with users and subscription history."""
    agency = await AgencyService(db).get_agency_by_id(agency_id, with_relations=True)
    return ApiResponse(success=True, data=AgencyDetailResponse.model_validate(agency))


@router.put("/{agency_id}", response_model=ApiResponse[AgencyDetailResponse])
async def update_agency(
    agency_id: int,
    data: AgencyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agencies.write", agency_scoped=False)),
):
    """Update agency details."""
    agency = await AgencyService(db).update_agency(agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Agency updated successfully",
        data=AgencyDetailResponse.model_validate(agency),
    )


@router.delete("/{agency_id}", response_model=ApiResponse[None])
async def delete_agency(
    agency_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agencies.delete", agency_scoped=False)),
):
    """Delete an agency that has no branches yet."""
    await AgencyService(db).delete_agency(agency_id, current_user.id)
    return ApiResponse(success=True, message="Agency deleted successfully", data=None)
