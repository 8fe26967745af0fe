"""API endpoints for Packages module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.packages.schemas import PackageCreate, PackageResponse, PackageUpdate
from voyage.modules.packages.service import PackageService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/packages", tags=["Packages"])


@router.get("", response_model=ApiResponse[PaginatedResponse[PackageResponse]])
async def list_packages(
    search: str | None = Query(None, description="Search by package name"),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.read", agency_scoped=False)),
):
    """List subscription packages."""
    service = PackageService(db)
    packages, total = await service.list_packages(search, sort_by, sort_order, page, limit)
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[PackageResponse.model_validate(p) for p in packages],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_packages(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.read", agency_scoped=False)),
):
    """Id/name pairs of every package."""
    packages = await PackageService(db).list_all_packages()
    return ApiResponse(
        success=True,
        data=[OptionResponse(id=p.id, name=p.package_name) for p in packages],
    )


@router.post(
    "",
    response_model=ApiResponse[PackageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_package(
    data: PackageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.write", agency_scoped=False)),
):
    """Create a package. Super admin only."""
    package = await PackageService(db).create_package(data, current_user.id)
    return ApiResponse(
        success=True,
        message="Package created successfully",
        data=PackageResponse.model_validate(package),
    )


@router.get("/{package_id}", response_model=ApiResponse[PackageResponse])
async def get_package(
    package_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.read", agency_scoped=False)),
):
    """Get package by ID."""
    package = await PackageService(db).get_package_by_id(package_id)
    return ApiResponse(success=True, data=PackageResponse.model_validate(package))


@router.put("/{package_id}", response_model=ApiResponse[PackageResponse])
async def update_package(
    package_id: int,
    data: PackageUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.write", agency_scoped=False)),
):
    """Update a package."""
    package = await PackageService(db).update_package(package_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Package updated successfully",
        data=PackageResponse.model_validate(package),
    )


@router.delete("/{package_id}", response_model=ApiResponse[None])
async def delete_package(
    package_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("packages.delete", agency_scoped=False)),
):
    """Delete a package that no subscription uses."""
    await PackageService(db).delete_package(package_id, current_user.id)
    return ApiResponse(success=True, message="Package deleted successfully", data=None)
