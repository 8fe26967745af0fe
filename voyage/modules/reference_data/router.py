"""API endpoints for name-only reference data, one router per kind."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.reference_data.schemas import ReferenceCreate, ReferenceResponse, ReferenceUpdate
from voyage.modules.reference_data.service import REFERENCE_KINDS, ReferenceKind, ReferenceService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder


def build_reference_router(kind: ReferenceKind) -> APIRouter:
    """CRUD router for one kind of reference data, guarded by ``<slug>.*`` permissions."""
    router = APIRouter(prefix=f"/{kind.slug}", tags=[kind.tag])
    read = require_permission(f"{kind.slug}.read")
    write = require_permission(f"{kind.slug}.write")
    delete = require_permission(f"{kind.slug}.delete")

    @router.get("", response_model=ApiResponse[PaginatedResponse[ReferenceResponse]])
    async def list_items(
        search: str | None = Query(None),
        sort_by: str | None = Query(None),
        sort_order: SortOrder = Query(SortOrder.ASC),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=500),
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(read),
    ):
        items, total = await ReferenceService(db, kind).list_items(
            current_user.agency_id, search, sort_by, sort_order, page, limit
        )
        return ApiResponse(
            success=True,
            data=PaginatedResponse.create(
                items=[ReferenceResponse.model_validate(i) for i in items],
                total=total,
                page=page,
                limit=limit,
            ),
        )

    @router.get("/all", response_model=ApiResponse[list[OptionResponse]])
    async def list_all_items(
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(read),
    ):
        items = await ReferenceService(db, kind).list_all(current_user.agency_id)
        return ApiResponse(success=True, data=[OptionResponse(id=i.id, name=i.name) for i in items])

    @router.post("", response_model=ApiResponse[ReferenceResponse], status_code=status.HTTP_201_CREATED)
    async def create_item(
        data: ReferenceCreate,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(write),
    ):
        item = await ReferenceService(db, kind).create(current_user.agency_id, data, current_user.id)
        return ApiResponse(
            success=True,
            message=f"{kind.label} created successfully",
            data=ReferenceResponse.model_validate(item),
        )

    @router.get("/{item_id}", response_model=ApiResponse[ReferenceResponse])
    async def get_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(read),
    ):
        item = await ReferenceService(db, kind).get(item_id, current_user.agency_id)
        return ApiResponse(success=True, data=ReferenceResponse.model_validate(item))

    @router.put("/{item_id}", response_model=ApiResponse[ReferenceResponse])
    async def update_item(
        item_id: int,
        data: ReferenceUpdate,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(write),
    ):
        item = await ReferenceService(db, kind).update(
            item_id, current_user.agency_id, data, current_user.id
        )
        return ApiResponse(
            success=True,
            message=f"{kind.label} updated successfully",
            data=ReferenceResponse.model_validate(item),
        )

    @router.delete("/{item_id}", response_model=ApiResponse[None])
    async def delete_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(delete),
    ):
        await ReferenceService(db, kind).delete(item_id, current_user.agency_id, current_user.id)
        return ApiResponse(success=True, message=f"{kind.label} deleted successfully", data=None)

    return router


routers = [build_reference_router(kind) for kind in REFERENCE_KINDS]
