"""API endpoints for Clients module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.clients.schemas import (
    ClientCreate,
    ClientDetailResponse,
    ClientResponse,
    ClientUpdate,
)
from voyage.modules.clients.service import ClientService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=ApiResponse[PaginatedResponse[ClientResponse]])
async def list_clients(
    search: str | None = Query(None, description="Search by name, mobile, email or address"),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    """List clients of the current agency."""
    clients, total = await ClientService(db).list_clients(
        current_user.agency_id, search, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[ClientResponse.model_validate(c) for c in clients],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_clients(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    clients = await ClientService(db).list_all_clients(current_user.agency_id)
    return ApiResponse(
        success=True,
        data=[OptionResponse(id=c.id, name=f"{c.client_name} ({c.mobile1})") for c in clients],
    )


@router.post("", response_model=ApiResponse[ClientDetailResponse], status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Create a client with family and friends."""
    client = await ClientService(db).create_client(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Client created successfully",
        data=ClientDetailResponse.model_validate(client),
    )


@router.get("/{client_id}", response_model=ApiResponse[ClientDetailResponse])
async def get_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    client = await ClientService(db).get_client_by_id(client_id, current_user.agency_id)
    return ApiResponse(success=True, data=ClientDetailResponse.model_validate(client))


@router.put("/{client_id}", response_model=ApiResponse[ClientDetailResponse])
async def update_client(
    client_id: int,
    data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Update a client; a ``family_friends`` list replaces the existing members."""
    client = await ClientService(db).update_client(
        client_id, current_user.agency_id, data, current_user.id
    )
    return ApiResponse(
        success=True,
        message="Client updated successfully",
        data=ClientDetailResponse.model_validate(client),
    )


@router.delete("/{client_id}", response_model=ApiResponse[None])
async def delete_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("clients.delete")),
):
    await ClientService(db).delete_client(client_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Client deleted successfully", data=None)
