"""Service for Vehicle Bookings module."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import NotFoundError
from voyage.modules.agents.models import Agent
from voyage.modules.bookings.models import Booking
from voyage.modules.bookings.service import (
    check_itinerary_cities,
    get_visible_booking,
    visible_bookings,
)
from voyage.modules.group_bookings.models import GroupBooking, GroupClientBooking
from voyage.modules.group_bookings.service import GroupBookingService, visible_group_bookings
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City
from voyage.modules.reference_data.models import Vehicle
from voyage.modules.vehicle_bookings.models import VehicleBooking, VehicleHotelBooking, VehicleItinerary
from voyage.modules.vehicle_bookings.schemas import (
    HotelLegIn,
    VehicleBookingCreate,
    VehicleBookingUpdate,
)
from voyage.shared.utils.query import ensure_references
from voyage.shared.utils.sync import sync_children

logger = logging.getLogger(__name__)

CHILDREN = {"itineraries", "hotel_legs"}


def _visible_vehicle_booking_condition(user: User):
    bookings = visible_bookings(user).with_only_columns(Booking.id)
    group_client_bookings = select(GroupClientBooking.id).where(
        GroupClientBooking.group_booking_id.in_(
            visible_group_bookings(user).with_only_columns(GroupBooking.id)
        )
    )
    return or_(
        VehicleBooking.booking_id.in_(bookings),
        VehicleBooking.group_client_booking_id.in_(group_client_bookings),
    )


class VehicleBookingService:
    """Service for vehicles hired for a booking, with route and overnight stops."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _check_references(
        self, agency_id: int, data: VehicleBookingCreate | VehicleBookingUpdate
    ) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                "vehicle_id": (Vehicle, data.vehicle_id),
                "agent_id": (Agent, data.agent_id),
                "city_id": (City, data.city_id),
            },
        )
        if data.itineraries:
            await check_itinerary_cities(self.db, agency_id, data.itineraries)
        for index, leg in enumerate(data.hotel_legs or []):
            await self._check_leg(agency_id, index, leg)

    async def _check_leg(self, agency_id: int, index: int, leg: HotelLegIn) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                f"hotel_legs.{index}.city_id": (City, leg.city_id),
                f"hotel_legs.{index}.hotel_id": (Hotel, leg.hotel_id),
            },
        )

    async def create_vehicle_booking(self, data: VehicleBookingCreate, user: User) -> VehicleBooking:
        """Create a vehicle booking with its legs; the vehicle HRV number is allocated here."""
        if data.booking_id is not None:
            await get_visible_booking(self.db, user, data.booking_id)
            parent = f"booking {data.booking_id}"
        else:
            await GroupBookingService(self.db).get_client_booking(data.group_client_booking_id, user)
            parent = f"group client booking {data.group_client_booking_id}"
        await self._check_references(user.agency_id, data)

        vehicle_booking = VehicleBooking(
            agency_id=user.agency_id,
            vehicle_hrv_number=await DocumentNumberGenerator(self.db).generate(
                DocumentSeries.VEHICLE_HRV, user.agency_id, on=data.vehicle_booking_date
            ),
            **data.model_dump(exclude=CHILDREN),
        )
        vehicle_booking.itineraries = [
            VehicleItinerary(**item.model_dump(exclude={"id"})) for item in data.itineraries
        ]
        vehicle_booking.hotel_legs = [
            VehicleHotelBooking(**leg.model_dump(exclude={"id"})) for leg in data.hotel_legs
        ]
        self.db.add(vehicle_booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="VehicleBooking",
            entity_id=vehicle_booking.id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=vehicle_booking.vehicle_hrv_number,
            new_values={
                "booking_id": data.booking_id,
                "group_client_booking_id": data.group_client_booking_id,
                "vehicle_id": data.vehicle_id,
            },
        )
        await self.db.commit()
        logger.info("Vehicle booking %s created for %s", vehicle_booking.vehicle_hrv_number, parent)
        return await self.get_vehicle_booking(vehicle_booking.id, user)

    async def get_vehicle_booking(self, vehicle_booking_id: int, user: User) -> VehicleBooking:
        result = await self.db.execute(
            select(VehicleBooking)
            .where(VehicleBooking.id == vehicle_booking_id, _visible_vehicle_booking_condition(user))
            .options(
                selectinload(VehicleBooking.vehicle),
                selectinload(VehicleBooking.agent),
                selectinload(VehicleBooking.itineraries),
                selectinload(VehicleBooking.hotel_legs),
            )
            .execution_options(populate_existing=True)
        )
        vehicle_booking = result.scalar_one_or_none()
        if not vehicle_booking:
            raise NotFoundError("Vehicle booking", vehicle_booking_id)
        return vehicle_booking

    async def list_vehicle_bookings(self, booking_id: int, user: User) -> list[VehicleBooking]:
        await get_visible_booking(self.db, user, booking_id)
        return await self._list(VehicleBooking.booking_id == booking_id)

    async def list_group_client_vehicle_bookings(
        self, group_client_booking_id: int, user: User
    ) -> list[VehicleBooking]:
        await GroupBookingService(self.db).get_client_booking(group_client_booking_id, user)
        return await self._list(VehicleBooking.group_client_booking_id == group_client_booking_id)

    async def _list(self, condition) -> list[VehicleBooking]:
        result = await self.db.execute(
            select(VehicleBooking)
            .where(condition)
            .options(
                selectinload(VehicleBooking.vehicle),
                selectinload(VehicleBooking.agent),
                selectinload(VehicleBooking.itineraries),
                selectinload(VehicleBooking.hotel_legs),
            )
            .order_by(VehicleBooking.from_date, VehicleBooking.id)
        )
        return list(result.scalars().all())

    async def update_vehicle_booking(
        self, vehicle_booking_id: int, data: VehicleBookingUpdate, user: User
    ) -> VehicleBooking:
        """Replace the vehicle details and sync the itinerary and hotel legs by id."""
        vehicle_booking = await self.get_vehicle_booking(vehicle_booking_id, user)
        await self._check_references(user.agency_id, data)

        for field, value in data.model_dump(exclude=CHILDREN).items():
            setattr(vehicle_booking, field, value)
        if data.itineraries is not None:
            sync_children(
                vehicle_booking.itineraries, data.itineraries, VehicleItinerary, "Vehicle itinerary"
            )
        if data.hotel_legs is not None:
            sync_children(
                vehicle_booking.hotel_legs, data.hotel_legs, VehicleHotelBooking, "Vehicle hotel booking"
            )

        await self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="VehicleBooking",
            entity_id=vehicle_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=vehicle_booking.vehicle_hrv_number,
            new_values={
                "vehicle_id": data.vehicle_id,
                "itineraries": None if data.itineraries is None else len(data.itineraries),
                "hotel_legs": None if data.hotel_legs is None else len(data.hotel_legs),
            },
        )
        await self.db.commit()
        return await self.get_vehicle_booking(vehicle_booking_id, user)

    async def delete_vehicle_booking(self, vehicle_booking_id: int, user: User) -> None:
        vehicle_booking = await self.get_vehicle_booking(vehicle_booking_id, user)
        await self.db.delete(vehicle_booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="VehicleBooking",
            entity_id=vehicle_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=vehicle_booking.vehicle_hrv_number,
        )
        await self.db.commit()
