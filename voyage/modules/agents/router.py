"""API endpoints for Agents module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.agents.schemas import AgentCreate, AgentResponse, AgentUpdate
from voyage.modules.agents.service import AgentService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get("", response_model=ApiResponse[PaginatedResponse[AgentResponse]])
async def list_agents(
    search: str | None = Query(None, description="Search by name, contact person, mobile or email"),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.read")),
):
    agents, total = await AgentService(db).list_agents(
        current_user.agency_id, search, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[AgentResponse.model_validate(a) for a in agents],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_agents(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.read")),
):
    agents = await AgentService(db).list_all_agents(current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=a.id, name=a.agent_name) for a in agents])


@router.post("", response_model=ApiResponse[AgentResponse], status_code=status.HTTP_201_CREATED)
async def create_agent(
    data: AgentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.write")),
):
    agent = await AgentService(db).create_agent(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Agent created successfully",
        data=AgentResponse.model_validate(agent),
    )


@router.get("/{agent_id}", response_model=ApiResponse[AgentResponse])
async def get_agent(
    agent_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.read")),
):
    agent = await AgentService(db).get_agent_by_id(agent_id, current_user.agency_id)
    return ApiResponse(success=True, data=AgentResponse.model_validate(agent))


@router.put("/{agent_id}", response_model=ApiResponse[AgentResponse])
async def update_agent(
    agent_id: int,
    data: AgentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.write")),
):
    agent = await AgentService(db).update_agent(agent_id, current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Agent updated successfully",
        data=AgentResponse.model_validate(agent),
    )


@router.delete("/{agent_id}", response_model=ApiResponse[None])
async def delete_agent(
    agent_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("agents.delete")),
):
    await AgentService(db).delete_agent(agent_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Agent deleted successfully", data=None)
