"""API endpoints for Staff module."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User, UserRole
from voyage.core.database.session import get_db
from voyage.modules.staff.excel_export import export_staff
from voyage.modules.staff.schemas import PasswordChange, StaffCreate, StaffResponse, StaffUpdate, StatusUpdate
from voyage.modules.staff.service import StaffService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/users", tags=["Staff"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=ApiResponse[PaginatedResponse[StaffResponse]])
async def list_staff(
    search: str | None = Query(None, description="Search by name, email or mobile"),
    role: UserRole | None = Query(None),
    is_active: bool | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.read")),
):
    """List staff. Users without agency-wide access see their branch only."""
    users, total = await StaffService(db).list_staff(
        current_user, search, role, is_active, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[StaffResponse.model_validate(u) for u in users],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_staff(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.read")),
):
    users = await StaffService(db).list_all_staff(current_user)
    return ApiResponse(success=True, data=[OptionResponse(id=u.id, name=u.name) for u in users])


@router.get("/export")
async def export_staff_xlsx(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.export")),
):
    """Download the staff list as an Excel workbook."""
    users = await StaffService(db).list_all_staff(current_user)
    return Response(
        content=export_staff(users),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="staff.xlsx"'},
    )


@router.post("", response_model=ApiResponse[StaffResponse], status_code=status.HTTP_201_CREATED)
async def create_staff(
    data: StaffCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.write")),
):
    """Create a staff member, within the package's users-per-branch limit."""
    user = await StaffService(db).create_staff(data, current_user)
    return ApiResponse(
        success=True,
        message="User created successfully",
        data=StaffResponse.model_validate(user),
    )


@router.get("/{user_id}", response_model=ApiResponse[StaffResponse])
async def get_staff(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.read")),
):
    user = await StaffService(db).get_staff_by_id(user_id, current_user)
    return ApiResponse(success=True, data=StaffResponse.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[StaffResponse])
async def update_staff(
    user_id: int,
    data: StaffUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.write")),
):
    user = await StaffService(db).update_staff(user_id, data, current_user)
    return ApiResponse(
        success=True,
        message="User updated successfully",
        data=StaffResponse.model_validate(user),
    )


@router.put("/{user_id}/password", response_model=ApiResponse[None])
async def change_staff_password(
    user_id: int,
    data: PasswordChange,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.write")),
):
    await StaffService(db).change_password(user_id, data.password, current_user)
    return ApiResponse(success=True, message="Password changed successfully", data=None)


@router.patch("/{user_id}/status", response_model=ApiResponse[StaffResponse])
async def set_staff_status(
    user_id: int,
    data: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.write")),
):
    """Activate or deactivate a staff member."""
    user = await StaffService(db).set_active(user_id, data.is_active, current_user)
    return ApiResponse(
        success=True,
        message="User activated" if user.is_active else "User deactivated",
        data=StaffResponse.model_validate(user),
    )


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_staff(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("users.delete")),
):
    await StaffService(db).delete_staff(user_id, current_user)
    return ApiResponse(success=True, message="User deleted successfully", data=None)
