"""Service for Clients module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.modules.bookings.models import Booking
from voyage.modules.clients.models import Client, FamilyFriend
from voyage.modules.clients.schemas import ClientCreate, ClientUpdate
from voyage.modules.group_bookings.models import GroupClientBooking
from voyage.modules.locations.models import City, State
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import (
    apply_sort,
    contains,
    ensure_not_referenced,
    ensure_references,
    get_owned,
    paginate,
)
from voyage.shared.utils.sync import sync_children

SORTABLE = {
    "id": Client.id,
    "client_name": Client.client_name,
    "mobile1": Client.mobile1,
    "created_at": Client.created_at,
}


class ClientService:
    """Service for clients and their family and friends."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _check_locations(self, agency_id: int, values: dict) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                "state_id": (State, values.get("state_id")),
                "city_id": (City, values.get("city_id")),
            },
        )

    async def create_client(self, agency_id: int, data: ClientCreate, created_by_id: int) -> Client:
        """Create a client together with family and friends."""
        values = data.model_dump(exclude={"family_friends"})
        await self._check_locations(agency_id, values)

        client = Client(agency_id=agency_id, **values)
        client.family_friends = [
            FamilyFriend(**member.model_dump(exclude={"id"})) for member in data.family_friends
        ]
        self.db.add(client)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Client",
            entity_id=client.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=client.client_name,
            new_values={"client_name": client.client_name, "mobile1": client.mobile1},
        )
        await self.db.commit()
        return await self.get_client_by_id(client.id, agency_id)

    async def get_client_by_id(self, client_id: int, agency_id: int) -> Client:
        return await get_owned(
            self.db,
            Client,
            client_id,
            agency_id,
            "Client",
            selectinload(Client.family_friends),
            selectinload(Client.city),
        )

    async def list_clients(
        self,
        agency_id: int,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Client], int]:
        query = select(Client).where(Client.agency_id == agency_id).options(selectinload(Client.city))
        condition = contains(
            search,
            Client.client_name,
            Client.mobile1,
            Client.mobile2,
            Client.email,
            Client.address1,
            Client.address2,
        )
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_clients(self, agency_id: int) -> list[Client]:
        result = await self.db.execute(
            select(Client).where(Client.agency_id == agency_id).order_by(Client.client_name)
        )
        return list(result.scalars().all())

    async def update_client(
        self, client_id: int, agency_id: int, data: ClientUpdate, updated_by_id: int
    ) -> Client:
        """Update client fields and, when sent, reconcile family and friends."""
        client = await self.get_client_by_id(client_id, agency_id)
        changes = data.model_dump(exclude_unset=True, exclude={"family_friends"})
        for required in ("client_name", "mobile1"):
            if changes.get(required) is None:
                changes.pop(required, None)
        await self._check_locations(agency_id, changes)

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(client, field) != value:
                old_values[field] = getattr(client, field)
                setattr(client, field, value)
                new_values[field] = value

        if data.family_friends is not None:
            sync_children(client.family_friends, data.family_friends, FamilyFriend, "Family member")
            new_values["family_friends"] = len(data.family_friends)

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Client",
                entity_id=client_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_client_by_id(client_id, agency_id)

    async def delete_client(self, client_id: int, agency_id: int, deleted_by_id: int) -> None:
        client = await self.get_client_by_id(client_id, agency_id)
        await ensure_not_referenced(
            self.db, client_id, "client", Booking.client_id, GroupClientBooking.client_id
        )
        await self.db.delete(client)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Client",
            entity_id=client_id,
            user_id=deleted_by_id,
            agency_id=agency_id,
            entity_identifier=client.client_name,
        )
        await self.db.commit()
