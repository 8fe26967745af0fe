"""Generic service for name-only reference data (banks, sectors, services...)."""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.audit.service import AuditAction, AuditService
from voyage.modules.agents.models import Agent
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.receipts.models import BookingReceipt
from voyage.modules.reference_data.models import (
    Accommodation,
    Bank,
    Fair,
    NamedReference,
    Sector,
    Service,
    Vehicle,
)
from voyage.modules.reference_data.schemas import ReferenceCreate, ReferenceUpdate
from voyage.modules.tours.models import Tour
from voyage.modules.vehicle_bookings.models import VehicleBooking
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import (
    apply_sort,
    contains,
    ensure_not_referenced,
    ensure_unique,
    get_owned,
    paginate,
)


@dataclass(frozen=True)
class ReferenceKind:
    """One kind of reference data: its model, URL slug and inbound foreign keys."""

    model: type[NamedReference]
    label: str
    slug: str
    references: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def tag(self) -> str:
        return self.slug.replace("_", " ").title()


REFERENCE_KINDS: tuple[ReferenceKind, ...] = (
    ReferenceKind(Bank, "Bank", "banks", (Agent.bank1_id, Agent.bank2_id, BookingReceipt.bank_id)),
    ReferenceKind(Sector, "Sector", "sectors", (Tour.sector_id,)),
    ReferenceKind(Service, "Service", "services"),
    ReferenceKind(Fair, "Fair", "fairs"),
    ReferenceKind(Vehicle, "Vehicle", "vehicles", (VehicleBooking.vehicle_id,)),
    ReferenceKind(Accommodation, "Accommodation", "accommodations", (HotelBooking.accommodation_id,)),
)


class ReferenceService:
    """CRUD for one kind of name-only reference data, scoped to an agency."""

    def __init__(self, db: AsyncSession, kind: ReferenceKind):
        self.db = db
        self.kind = kind
        self.model = kind.model
        self.audit = AuditService(db)

    async def create(self, agency_id: int, data: ReferenceCreate, user_id: int) -> NamedReference:
        await ensure_unique(
            self.db, self.model.name, data.name, self.kind.label, self.model.agency_id == agency_id
        )
        obj = self.model(agency_id=agency_id, name=data.name)
        self.db.add(obj)
        await self.db.flush()
        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type=self.kind.label,
            entity_id=obj.id,
            user_id=user_id,
            agency_id=agency_id,
            entity_identifier=obj.name,
        )
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def get(self, obj_id: int, agency_id: int) -> NamedReference:
        return await get_owned(self.db, self.model, obj_id, agency_id, self.kind.label)

    async def list_items(
        self,
        agency_id: int,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[NamedReference], int]:
        query = select(self.model).where(self.model.agency_id == agency_id)
        condition = contains(search, self.model.name)
        if condition is not None:
            query = query.where(condition)
        sortable = {"id": self.model.id, "name": self.model.name, "created_at": self.model.created_at}
        query = apply_sort(query, sort_by, sort_order, sortable)
        return await paginate(self.db, query, page, limit)

    async def list_all(self, agency_id: int) -> list[NamedReference]:
        result = await self.db.execute(
            select(self.model).where(self.model.agency_id == agency_id).order_by(self.model.name)
        )
        return list(result.scalars().all())

    async def update(
        self, obj_id: int, agency_id: int, data: ReferenceUpdate, user_id: int
    ) -> NamedReference:
        obj = await self.get(obj_id, agency_id)
        if data.name != obj.name:
            await ensure_unique(
                self.db,
                self.model.name,
                data.name,
                self.kind.label,
                self.model.agency_id == agency_id,
                exclude_id=obj_id,
            )
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type=self.kind.label,
                entity_id=obj_id,
                user_id=user_id,
                agency_id=agency_id,
                old_values={"name": obj.name},
                new_values={"name": data.name},
            )
            obj.name = data.name
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj_id: int, agency_id: int, user_id: int) -> None:
        obj = await self.get(obj_id, agency_id)
        await ensure_not_referenced(self.db, obj_id, self.kind.label.lower(), *self.kind.references)
        await self.db.delete(obj)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type=self.kind.label,
            entity_id=obj_id,
            user_id=user_id,
            agency_id=agency_id,
            entity_identifier=obj.name,
        )
        await self.db.commit()
