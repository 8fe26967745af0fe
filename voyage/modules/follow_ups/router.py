"""API endpoints for Follow-ups module."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.follow_ups.schemas import FollowUpCreate, FollowUpResponse
from voyage.modules.follow_ups.service import FollowUpService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/follow-ups", tags=["Follow-ups"])


@router.post("", response_model=ApiResponse[FollowUpResponse], status_code=status.HTTP_201_CREATED)
async def add_follow_up(
    data: FollowUpCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("follow_ups.write")),
):
    """Add a follow-up to a booking or group booking."""
    follow_up = await FollowUpService(db).add_follow_up(data, current_user)
    return ApiResponse(
        success=True,
        message="Follow-up added successfully",
        data=FollowUpResponse.model_validate(follow_up),
    )


@router.get("/booking/{booking_id}", response_model=ApiResponse[list[FollowUpResponse]])
async def list_booking_follow_ups(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("follow_ups.read")),
):
    follow_ups = await FollowUpService(db).list_follow_ups(current_user, booking_id=booking_id)
    return ApiResponse(success=True, data=[FollowUpResponse.model_validate(f) for f in follow_ups])


@router.get("/group-booking/{group_booking_id}", response_model=ApiResponse[list[FollowUpResponse]])
async def list_group_booking_follow_ups(
    group_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("follow_ups.read")),
):
    follow_ups = await FollowUpService(db).list_follow_ups(
        current_user, group_booking_id=group_booking_id
    )
    return ApiResponse(success=True, data=[FollowUpResponse.model_validate(f) for f in follow_ups])
