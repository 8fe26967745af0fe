"""API for dashboard (agency main page)."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.dashboard.schemas import DashboardResponse, UpcomingFollowUp
from voyage.modules.dashboard.service import DashboardService
from voyage.shared.schemas.base import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

DashboardUser = Depends(require_permission("dashboard.read"))


@router.get("", response_model=ApiResponse[DashboardResponse])
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = DashboardUser,
):
    """Headline counts for the main page."""
    data = await DashboardService(db).get_summary(current_user)
    return ApiResponse(data=DashboardResponse(**data))


@router.get("/follow-ups", response_model=ApiResponse[PaginatedResponse[UpcomingFollowUp]])
async def list_upcoming_follow_ups(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = DashboardUser,
):
    """Follow-ups due in the next seven days."""
    items, total = await DashboardService(db).list_upcoming_follow_ups(
        current_user, page=page, limit=limit
    )
    return ApiResponse(
        data=PaginatedResponse.create(
            items=[UpcomingFollowUp(**item) for item in items],
            total=total,
            page=page,
            limit=limit,
        )
    )
