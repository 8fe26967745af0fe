"""Service for Hotels module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.hotels.models import Hotel
from voyage.modules.hotels.schemas import HotelCreate, HotelUpdate
from voyage.modules.locations.models import City, Country, State
from voyage.modules.vehicle_bookings.models import VehicleHotelBooking
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
    "id": Hotel.id,
    "hotel_name": Hotel.hotel_name,
    "contact_person": Hotel.contact_person,
    "created_at": Hotel.created_at,
}


class HotelService:
    """Service for the agency's hotel directory."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _check_locations(self, agency_id: int, values: dict) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                "hotel_country_id": (Country, values.get("hotel_country_id")),
                "hotel_state_id": (State, values.get("hotel_state_id")),
                "hotel_city_id": (City, values.get("hotel_city_id")),
                "office_country_id": (Country, values.get("office_country_id")),
                "office_state_id": (State, values.get("office_state_id")),
                "office_city_id": (City, values.get("office_city_id")),
            },
        )

    async def _ensure_unique(
        self, agency_id: int, name: str, city_id: int | None, exclude_id: int | None = None
    ) -> None:
        """Hotel names repeat across cities (chains) but not within one."""
        city_scope = Hotel.hotel_city_id.is_(None) if city_id is None else Hotel.hotel_city_id == city_id
        await ensure_unique(
            self.db,
            Hotel.hotel_name,
            name,
            "Hotel",
            Hotel.agency_id == agency_id,
            city_scope,
            exclude_id=exclude_id,
        )

    async def create_hotel(self, agency_id: int, data: HotelCreate, created_by_id: int) -> Hotel:
        values = data.model_dump()
        await self._check_locations(agency_id, values)
        await self._ensure_unique(agency_id, data.hotel_name, data.hotel_city_id)

        hotel = Hotel(agency_id=agency_id, **values)
        self.db.add(hotel)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Hotel",
            entity_id=hotel.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=hotel.hotel_name,
        )
        await self.db.commit()
        return await self.get_hotel_by_id(hotel.id, agency_id)

    async def get_hotel_by_id(self, hotel_id: int, agency_id: int) -> Hotel:
        return await get_owned(
            self.db, Hotel, hotel_id, agency_id, "Hotel", selectinload(Hotel.hotel_city)
        )

    async def list_hotels(
        self,
        agency_id: int,
        search: str | None = None,
        city_id: int | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Hotel], int]:
        query = (
            select(Hotel)
            .where(Hotel.agency_id == agency_id)
            .options(selectinload(Hotel.hotel_city))
        )
        if city_id is not None:
            query = query.where(Hotel.hotel_city_id == city_id)
        condition = contains(
            search, Hotel.hotel_name, Hotel.contact_person, Hotel.email1, Hotel.hotel_contact_no1
        )
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_hotels(self, agency_id: int, city_id: int | None = None) -> list[Hotel]:
        query = select(Hotel).where(Hotel.agency_id == agency_id)
        if city_id is not None:
            query = query.where(Hotel.hotel_city_id == city_id)
        result = await self.db.execute(query.order_by(Hotel.hotel_name))
        return list(result.scalars().all())

    async def update_hotel(
        self, hotel_id: int, agency_id: int, data: HotelUpdate, updated_by_id: int
    ) -> Hotel:
        hotel = await self.get_hotel_by_id(hotel_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("hotel_name") is None:
            changes.pop("hotel_name", None)
        await self._check_locations(agency_id, changes)

        name = changes.get("hotel_name", hotel.hotel_name)
        city_id = changes.get("hotel_city_id", hotel.hotel_city_id)
        if name != hotel.hotel_name or city_id != hotel.hotel_city_id:
            await self._ensure_unique(agency_id, name, city_id, exclude_id=hotel_id)

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(hotel, field) != value:
                old_values[field] = getattr(hotel, field)
                setattr(hotel, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Hotel",
                entity_id=hotel_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_hotel_by_id(hotel_id, agency_id)

    async def delete_hotel(self, hotel_id: int, agency_id: int, deleted_by_id: int) -> None:
        hotel = await self.get_hotel_by_id(hotel_id, agency_id)
        await ensure_not_referenced(
            self.db, hotel_id, "hotel", HotelBooking.hotel_id, VehicleHotelBooking.hotel_id
        )
        await self.db.delete(hotel)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Hotel",
            entity_id=hotel_id,
            user_id=deleted_by_id,
            agency_id=agency_id,
            entity_identifier=hotel.hotel_name,
        )
        await self.db.commit()
