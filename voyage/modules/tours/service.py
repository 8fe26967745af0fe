"""Service for Tours module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.modules.bookings.models import Booking
from voyage.modules.group_bookings.models import GroupBooking
from voyage.modules.reference_data.models import Sector
from voyage.modules.tours.models import Tour
from voyage.modules.tours.schemas import TourCreate, TourUpdate
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
    "id": Tour.id,
    "tour_title": Tour.tour_title,
    "destination": Tour.destination,
    "days": Tour.days,
    "created_at": Tour.created_at,
}


class TourService:
    """Service for the agency's tour catalogue."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def create_tour(self, agency_id: int, data: TourCreate, created_by_id: int) -> Tour:
        await ensure_references(self.db, agency_id, {"sector_id": (Sector, data.sector_id)})
        await ensure_unique(self.db, Tour.tour_title, data.tour_title, "Tour", Tour.agency_id == agency_id)

        tour = Tour(agency_id=agency_id, **data.model_dump())
        self.db.add(tour)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Tour",
            entity_id=tour.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=tour.tour_title,
            new_values=data.model_dump(),
        )
        await self.db.commit()
        return await self.get_tour_by_id(tour.id, agency_id)

    async def get_tour_by_id(self, tour_id: int, agency_id: int) -> Tour:
        return await get_owned(self.db, Tour, tour_id, agency_id, "Tour", selectinload(Tour.sector))

    async def list_tours(
        self,
        agency_id: int,
        search: str | None = None,
        sector_id: int | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Tour], int]:
        query = select(Tour).where(Tour.agency_id == agency_id).options(selectinload(Tour.sector))
        if sector_id is not None:
            query = query.where(Tour.sector_id == sector_id)
        condition = contains(search, Tour.tour_title, Tour.tour_type, Tour.destination)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_tours(self, agency_id: int) -> list[Tour]:
        result = await self.db.execute(
            select(Tour).where(Tour.agency_id == agency_id).order_by(Tour.tour_title)
        )
        return list(result.scalars().all())

    async def update_tour(self, tour_id: int, agency_id: int, data: TourUpdate, updated_by_id: int) -> Tour:
        tour = await self.get_tour_by_id(tour_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("tour_title") is None:
            changes.pop("tour_title", None)
        await ensure_references(self.db, agency_id, {"sector_id": (Sector, changes.get("sector_id"))})
        if "tour_title" in changes and changes["tour_title"] != tour.tour_title:
            await ensure_unique(
                self.db,
                Tour.tour_title,
                changes["tour_title"],
                "Tour",
                Tour.agency_id == agency_id,
                exclude_id=tour_id,
            )

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(tour, field) != value:
                old_values[field] = getattr(tour, field)
                setattr(tour, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Tour",
                entity_id=tour_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_tour_by_id(tour_id, agency_id)

    async def delete_tour(self, tour_id: int, agency_id: int, deleted_by_id: int) -> None:
        tour = await self.get_tour_by_id(tour_id, agency_id)
        await ensure_not_referenced(self.db, tour_id, "tour", Booking.tour_id, GroupBooking.tour_id)
        await self.db.delete(tour)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Tour",
            entity_id=tour_id,
            user_id=deleted_by_id,
            agency_id=agency_id,
            entity_identifier=tour.tour_title,
        )
        await self.db.commit()
