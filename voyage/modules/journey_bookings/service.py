"""Service for Journey Bookings module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.exceptions import NotFoundError
from voyage.modules.bookings.models import Booking
from voyage.modules.bookings.service import get_visible_booking, visible_bookings
from voyage.modules.journey_bookings.models import JourneyBooking
from voyage.modules.journey_bookings.schemas import JourneyBookingCreate, JourneyBookingUpdate


class JourneyBookingService:
    """Service for train, bus and flight legs of a booking."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def create_journey_booking(self, data: JourneyBookingCreate, user: User) -> JourneyBooking:
        await get_visible_booking(self.db, user, data.booking_id)
        journey_booking = JourneyBooking(agency_id=user.agency_id, **data.model_dump())
        journey_booking.mode = data.mode.value
        self.db.add(journey_booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="JourneyBooking",
            entity_id=journey_booking.id,
            user_id=user.id,
            agency_id=user.agency_id,
            new_values={"booking_id": data.booking_id, "mode": journey_booking.mode},
        )
        await self.db.commit()
        return await self.get_journey_booking(journey_booking.id, user)

    async def get_journey_booking(self, journey_booking_id: int, user: User) -> JourneyBooking:
        visible = visible_bookings(user).with_only_columns(Booking.id)
        result = await self.db.execute(
            select(JourneyBooking)
            .where(JourneyBooking.id == journey_booking_id, JourneyBooking.booking_id.in_(visible))
            .execution_options(populate_existing=True)
        )
        journey_booking = result.scalar_one_or_none()
        if not journey_booking:
            raise NotFoundError("Journey booking", journey_booking_id)
        return journey_booking

    async def list_journey_bookings(self, booking_id: int, user: User) -> list[JourneyBooking]:
        await get_visible_booking(self.db, user, booking_id)
        result = await self.db.execute(
            select(JourneyBooking)
            .where(JourneyBooking.booking_id == booking_id)
            .order_by(JourneyBooking.from_departure_date, JourneyBooking.id)
        )
        return list(result.scalars().all())

    async def update_journey_booking(
        self, journey_booking_id: int, data: JourneyBookingUpdate, user: User
    ) -> JourneyBooking:
        journey_booking = await self.get_journey_booking(journey_booking_id, user)
        for field, value in data.model_dump().items():
            setattr(journey_booking, field, value)
        journey_booking.mode = data.mode.value

        await self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="JourneyBooking",
            entity_id=journey_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            new_values={"mode": journey_booking.mode, "pnr_number": journey_booking.pnr_number},
        )
        await self.db.commit()
        return await self.get_journey_booking(journey_booking_id, user)

    async def delete_journey_booking(self, journey_booking_id: int, user: User) -> None:
        journey_booking = await self.get_journey_booking(journey_booking_id, user)
        await self.db.delete(journey_booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="JourneyBooking",
            entity_id=journey_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
        )
        await self.db.commit()
