"""Service for Locations module: countries, states and cities of an agency."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.exceptions import ValidationError
from voyage.modules.agents.models import Agent
from voyage.modules.bookings.models import BookingDetail
from voyage.modules.clients.models import Client
from voyage.modules.group_bookings.models import GroupBookingDetail
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City, Country, State
from voyage.modules.locations.schemas import (
    CityCreate,
    CityUpdate,
    CountryCreate,
    CountryUpdate,
    StateCreate,
    StateUpdate,
)
from voyage.modules.vehicle_bookings.models import VehicleBooking, VehicleHotelBooking, VehicleItinerary
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import (
    apply_sort,
    contains,
    ensure_not_referenced,
    ensure_unique,
    get_owned,
    paginate,
)

COUNTRY_SORTABLE = {"id": Country.id, "country_name": Country.country_name}
STATE_SORTABLE = {"id": State.id, "state_name": State.state_name, "country_name": Country.country_name}
CITY_SORTABLE = {"id": City.id, "city_name": City.city_name, "state_name": State.state_name}

COUNTRY_REFERENCES = (State.country_id, Hotel.hotel_country_id, Hotel.office_country_id, Agent.country_id)
STATE_REFERENCES = (
    City.state_id,
    Client.state_id,
    Hotel.hotel_state_id,
    Hotel.office_state_id,
    Agent.state_id,
)
CITY_REFERENCES = (
    Client.city_id,
    Hotel.hotel_city_id,
    Hotel.office_city_id,
    Agent.city_id,
    BookingDetail.city_id,
    GroupBookingDetail.city_id,
    HotelBooking.city_id,
    VehicleBooking.city_id,
    VehicleItinerary.city_id,
    VehicleHotelBooking.city_id,
)


class LocationService:
    """Geographic hierarchy used by addresses and itineraries."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _apply(self, obj, changes: dict, entity_type: str, agency_id: int, user_id: int) -> None:
        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if value is not None and getattr(obj, field) != value:
                old_values[field] = getattr(obj, field)
                setattr(obj, field, value)
                new_values[field] = value
        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type=entity_type,
                entity_id=obj.id,
                user_id=user_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )

    async def _created(self, obj, entity_type: str, name: str, agency_id: int, user_id: int) -> None:
        self.db.add(obj)
        await self.db.flush()
        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type=entity_type,
            entity_id=obj.id,
            user_id=user_id,
            agency_id=agency_id,
            entity_identifier=name,
        )

    async def _deleted(self, obj, entity_type: str, name: str, agency_id: int, user_id: int) -> None:
        await self.db.delete(obj)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type=entity_type,
            entity_id=obj.id,
            user_id=user_id,
            agency_id=agency_id,
            entity_identifier=name,
        )
        await self.db.commit()

    async def _parent_in_agency(self, model, parent_id: int, agency_id: int, field: str) -> None:
        result = await self.db.execute(
            select(model.id).where(model.id == parent_id, model.agency_id == agency_id)
        )
        if result.first() is None:
            raise ValidationError(f"{model.__name__} with id={parent_id} does not exist", field=field)

    # Countries

    async def create_country(self, agency_id: int, data: CountryCreate, user_id: int) -> Country:
        await ensure_unique(
            self.db, Country.country_name, data.country_name, "Country", Country.agency_id == agency_id
        )
        country = Country(agency_id=agency_id, country_name=data.country_name)
        await self._created(country, "Country", country.country_name, agency_id, user_id)
        await self.db.commit()
        await self.db.refresh(country)
        return country

    async def get_country(self, country_id: int, agency_id: int) -> Country:
        return await get_owned(self.db, Country, country_id, agency_id, "Country")

    async def list_countries(
        self,
        agency_id: int,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Country], int]:
        query = select(Country).where(Country.agency_id == agency_id)
        condition = contains(search, Country.country_name)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, COUNTRY_SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_countries(self, agency_id: int) -> list[Country]:
        result = await self.db.execute(
            select(Country).where(Country.agency_id == agency_id).order_by(Country.country_name)
        )
        return list(result.scalars().all())

    async def update_country(
        self, country_id: int, agency_id: int, data: CountryUpdate, user_id: int
    ) -> Country:
        country = await self.get_country(country_id, agency_id)
        await ensure_unique(
            self.db,
            Country.country_name,
            data.country_name,
            "Country",
            Country.agency_id == agency_id,
            exclude_id=country_id,
        )
        await self._apply(country, data.model_dump(), "Country", agency_id, user_id)
        await self.db.commit()
        await self.db.refresh(country)
        return country

    async def delete_country(self, country_id: int, agency_id: int, user_id: int) -> None:
        country = await self.get_country(country_id, agency_id)
        await ensure_not_referenced(self.db, country_id, "country", *COUNTRY_REFERENCES)
        await self._deleted(country, "Country", country.country_name, agency_id, user_id)

    # States

    async def create_state(self, agency_id: int, data: StateCreate, user_id: int) -> State:
        await self._parent_in_agency(Country, data.country_id, agency_id, "country_id")
        await ensure_unique(
            self.db, State.state_name, data.state_name, "State", State.country_id == data.country_id
        )
        state = State(agency_id=agency_id, **data.model_dump())
        await self._created(state, "State", state.state_name, agency_id, user_id)
        await self.db.commit()
        return await self.get_state(state.id, agency_id)

    async def get_state(self, state_id: int, agency_id: int) -> State:
        return await get_owned(
            self.db, State, state_id, agency_id, "State", selectinload(State.country)
        )

    async def list_states(
        self,
        agency_id: int,
        search: str | None = None,
        country_id: int | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[State], int]:
        query = (
            select(State)
            .join(Country, Country.id == State.country_id)
            .where(State.agency_id == agency_id)
            .options(selectinload(State.country))
        )
        if country_id is not None:
            query = query.where(State.country_id == country_id)
        condition = contains(search, State.state_name, Country.country_name)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, STATE_SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_states(self, agency_id: int) -> list[State]:
        result = await self.db.execute(
            select(State).where(State.agency_id == agency_id).order_by(State.state_name)
        )
        return list(result.scalars().all())

    async def list_states_of_country(self, country_id: int, agency_id: int) -> list[State]:
        result = await self.db.execute(
            select(State)
            .where(State.agency_id == agency_id, State.country_id == country_id)
            .order_by(State.state_name)
        )
        return list(result.scalars().all())

    async def update_state(self, state_id: int, agency_id: int, data: StateUpdate, user_id: int) -> State:
        state = await self.get_state(state_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        country_id = changes.get("country_id") or state.country_id
        if country_id != state.country_id:
            await self._parent_in_agency(Country, country_id, agency_id, "country_id")
        await ensure_unique(
            self.db,
            State.state_name,
            changes.get("state_name") or state.state_name,
            "State",
            State.country_id == country_id,
            exclude_id=state_id,
        )
        await self._apply(state, changes, "State", agency_id, user_id)
        await self.db.commit()
        return await self.get_state(state_id, agency_id)

    async def delete_state(self, state_id: int, agency_id: int, user_id: int) -> None:
        state = await self.get_state(state_id, agency_id)
        await ensure_not_referenced(self.db, state_id, "state", *STATE_REFERENCES)
        await self._deleted(state, "State", state.state_name, agency_id, user_id)

    # Cities

    async def create_city(self, agency_id: int, data: CityCreate, user_id: int) -> City:
        await self._parent_in_agency(State, data.state_id, agency_id, "state_id")
        await ensure_unique(self.db, City.city_name, data.city_name, "City", City.state_id == data.state_id)
        city = City(agency_id=agency_id, **data.model_dump())
        await self._created(city, "City", city.city_name, agency_id, user_id)
        await self.db.commit()
        return await self.get_city(city.id, agency_id)

    async def get_city(self, city_id: int, agency_id: int) -> City:
        return await get_owned(self.db, City, city_id, agency_id, "City", selectinload(City.state))

    async def list_cities(
        self,
        agency_id: int,
        search: str | None = None,
        state_id: int | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[City], int]:
        query = (
            select(City)
            .join(State, State.id == City.state_id)
            .where(City.agency_id == agency_id)
            .options(selectinload(City.state))
        )
        if state_id is not None:
            query = query.where(City.state_id == state_id)
        condition = contains(search, City.city_name, State.state_name)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, CITY_SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_cities_of_state(self, state_id: int, agency_id: int) -> list[City]:
        result = await self.db.execute(
            select(City)
            .where(City.agency_id == agency_id, City.state_id == state_id)
            .order_by(City.city_name)
        )
        return list(result.scalars().all())

    async def list_all_cities(self, agency_id: int) -> list[City]:
        result = await self.db.execute(
            select(City).where(City.agency_id == agency_id).order_by(City.city_name)
        )
        return list(result.scalars().all())

    async def update_city(self, city_id: int, agency_id: int, data: CityUpdate, user_id: int) -> City:
        city = await self.get_city(city_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        state_id = changes.get("state_id") or city.state_id
        if state_id != city.state_id:
            await self._parent_in_agency(State, state_id, agency_id, "state_id")
        await ensure_unique(
            self.db,
            City.city_name,
            changes.get("city_name") or city.city_name,
            "City",
            City.state_id == state_id,
            exclude_id=city_id,
        )
        await self._apply(city, changes, "City", agency_id, user_id)
        await self.db.commit()
        return await self.get_city(city_id, agency_id)

    async def delete_city(self, city_id: int, agency_id: int, user_id: int) -> None:
        city = await self.get_city(city_id, agency_id)
        await ensure_not_referenced(self.db, city_id, "city", *CITY_REFERENCES)
        await self._deleted(city, "City", city.city_name, agency_id, user_id)
