"""API endpoints for Branches module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.branches.schemas import BranchCreate, BranchResponse, BranchUpdate
from voyage.modules.branches.service import BranchService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/branches", tags=["Branches"])


@router.get("", response_model=ApiResponse[PaginatedResponse[BranchResponse]])
async def list_branches(
    search: str | None = Query(None, description="Search by branch name or contact"),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.read")),
):
    """List branches of the current agency."""
    branches, total = await BranchService(db).list_branches(
        current_user.agency_id, search, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[BranchResponse.model_validate(b) for b in branches],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_branches(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.read")),
):
    branches = await BranchService(db).list_all_branches(current_user.agency_id)
    return ApiResponse(
        success=True,
        data=[OptionResponse(id=b.id, name=b.branch_name) for b in branches],
    )


@router.post("", response_model=ApiResponse[BranchResponse], status_code=status.HTTP_201_CREATED)
async def create_branch(
    data: BranchCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.write")),
):
    """Create a branch, within the package's branch limit."""
    branch = await BranchService(db).create_branch(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Branch created successfully",
        data=BranchResponse.model_validate(branch),
    )


@router.get("/{branch_id}", response_model=ApiResponse[BranchResponse])
async def get_branch(
    branch_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.read")),
):
    branch = await BranchService(db).get_branch_by_id(branch_id, current_user.agency_id)
    return ApiResponse(success=True, data=BranchResponse.model_validate(branch))


@router.put("/{branch_id}", response_model=ApiResponse[BranchResponse])
async def update_branch(
    branch_id: int,
    data: BranchUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.write")),
):
    branch = await BranchService(db).update_branch(
        branch_id, current_user.agency_id, data, current_user.id
    )
    return ApiResponse(
        success=True,
        message="Branch updated successfully",
        data=BranchResponse.model_validate(branch),
    )


@router.delete("/{branch_id}", response_model=ApiResponse[None])
async def delete_branch(
    branch_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("branches.delete")),
):
    await BranchService(db).delete_branch(branch_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Branch deleted successfully", data=None)
