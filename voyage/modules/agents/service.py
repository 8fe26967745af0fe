"""Service for Agents module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.modules.agents.models import Agent
from voyage.modules.agents.schemas import AgentCreate, AgentUpdate
from voyage.modules.locations.models import City, Country, State
from voyage.modules.reference_data.models import Bank
from voyage.modules.vehicle_bookings.models import VehicleBooking
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import (
    apply_sort,
    contains,
    ensure_not_referenced,
    ensure_references,
    ensure_unique,
    get_owned,
    paginate,
)

SORTABLE = {
    "id": Agent.id,
    "agent_name": Agent.agent_name,
    "contact_person_name": Agent.contact_person_name,
    "created_at": Agent.created_at,
}


class AgentService:
    """Service for local agents and transporters."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _check_references(self, agency_id: int, values: dict) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                "country_id": (Country, values.get("country_id")),
                "state_id": (State, values.get("state_id")),
                "city_id": (City, values.get("city_id")),
                "bank1_id": (Bank, values.get("bank1_id")),
                "bank2_id": (Bank, values.get("bank2_id")),
            },
        )

    async def create_agent(self, agency_id: int, data: AgentCreate, created_by_id: int) -> Agent:
        values = data.model_dump()
        await self._check_references(agency_id, values)
        await ensure_unique(
            self.db, Agent.agent_name, data.agent_name, "Agent", Agent.agency_id == agency_id
        )

        agent = Agent(agency_id=agency_id, **values)
        self.db.add(agent)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Agent",
            entity_id=agent.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=agent.agent_name,
        )
        await self.db.commit()
        return await self.get_agent_by_id(agent.id, agency_id)

    async def get_agent_by_id(self, agent_id: int, agency_id: int) -> Agent:
        return await get_owned(self.db, Agent, agent_id, agency_id, "Agent", selectinload(Agent.city))

    async def list_agents(
        self,
        agency_id: int,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Agent], int]:
        query = select(Agent).where(Agent.agency_id == agency_id).options(selectinload(Agent.city))
        condition = contains(
            search, Agent.agent_name, Agent.contact_person_name, Agent.mobile1, Agent.email1
        )
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_agents(self, agency_id: int) -> list[Agent]:
        result = await self.db.execute(
            select(Agent).where(Agent.agency_id == agency_id).order_by(Agent.agent_name)
        )
        return list(result.scalars().all())

    async def update_agent(
        self, agent_id: int, agency_id: int, data: AgentUpdate, updated_by_id: int
    ) -> Agent:
        agent = await self.get_agent_by_id(agent_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("agent_name") is None:
            changes.pop("agent_name", None)
        await self._check_references(agency_id, changes)
        if "agent_name" in changes and changes["agent_name"] != agent.agent_name:
            await ensure_unique(
                self.db,
                Agent.agent_name,
                changes["agent_name"],
                "Agent",
                Agent.agency_id == agency_id,
                exclude_id=agent_id,
            )

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(agent, field) != value:
                old_values[field] = getattr(agent, field)
                setattr(agent, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Agent",
                entity_id=agent_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_agent_by_id(agent_id, agency_id)

    async def delete_agent(self, agent_id: int, agency_id: int, deleted_by_id: int) -> None:
        agent = await self.get_agent_by_id(agent_id, agency_id)
        await ensure_not_referenced(self.db, agent_id, "agent", VehicleBooking.agent_id)
        await self.db.delete(agent)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Agent",
            entity_id=agent_id,
            user_id=deleted_by_id,
            agency_id=agency_id,
            entity_identifier=agent.agent_name,
        )
        await self.db.commit()
