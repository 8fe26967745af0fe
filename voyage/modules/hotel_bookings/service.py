"""Service for Hotel Bookings module."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import NotFoundError, ValidationError
from voyage.modules.bookings.models import Booking
from voyage.modules.bookings.service import get_visible_booking, visible_bookings
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.hotel_bookings.schemas import HotelBookingCreate, HotelBookingUpdate
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City
from voyage.modules.reference_data.models import Accommodation
from voyage.shared.utils.query import ensure_references

logger = logging.getLogger(__name__)


class HotelBookingService:
    """Service for hotel stays (HRVs) of a booking."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _check_references(self, agency_id: int, values: dict) -> None:
        await ensure_references(
            self.db,
            agency_id,
            {
                "hotel_id": (Hotel, values.get("hotel_id")),
                "city_id": (City, values.get("city_id")),
                "accommodation_id": (Accommodation, values.get("accommodation_id")),
            },
        )

    async def create_hotel_booking(self, data: HotelBookingCreate, user: User) -> HotelBooking:
        """Create a hotel booking; its HRV number is allocated in the same transaction."""
        booking = await get_visible_booking(self.db, user, data.booking_id)
        values = data.model_dump()
        await self._check_references(user.agency_id, values)

        hotel_booking = HotelBooking(
            agency_id=user.agency_id,
            hrv_number=await DocumentNumberGenerator(self.db).generate(
                DocumentSeries.HOTEL_HRV, user.agency_id, on=data.hotel_booking_date
            ),
            **values,
        )
        self.db.add(hotel_booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="HotelBooking",
            entity_id=hotel_booking.id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=hotel_booking.hrv_number,
            new_values={"booking_id": booking.id, "hotel_id": data.hotel_id},
        )
        await self.db.commit()
        logger.info("Hotel booking %s created for booking %s", hotel_booking.hrv_number, booking.id)
        return await self.get_hotel_booking(hotel_booking.id, user)

    async def get_hotel_booking(self, hotel_booking_id: int, user: User) -> HotelBooking:
        visible = visible_bookings(user).with_only_columns(Booking.id)
        result = await self.db.execute(
            select(HotelBooking)
            .where(HotelBooking.id == hotel_booking_id, HotelBooking.booking_id.in_(visible))
            .options(selectinload(HotelBooking.hotel))
            .execution_options(populate_existing=True)
        )
        hotel_booking = result.scalar_one_or_none()
        if not hotel_booking:
            raise NotFoundError("Hotel booking", hotel_booking_id)
        return hotel_booking

    async def list_hotel_bookings(self, booking_id: int, user: User) -> list[HotelBooking]:
        await get_visible_booking(self.db, user, booking_id)
        result = await self.db.execute(
            select(HotelBooking)
            .where(HotelBooking.booking_id == booking_id)
            .options(selectinload(HotelBooking.hotel))
            .order_by(HotelBooking.check_in_date, HotelBooking.id)
        )
        return list(result.scalars().all())

    async def update_hotel_booking(
        self, hotel_booking_id: int, data: HotelBookingUpdate, user: User
    ) -> HotelBooking:
        hotel_booking = await self.get_hotel_booking(hotel_booking_id, user)
        changes = data.model_dump(exclude_unset=True)
        for required in (
            "party_coming_from",
            "check_in_date",
            "check_out_date",
            "hotel_id",
            "rooms",
            "extra_bed",
        ):
            if changes.get(required) is None:
                changes.pop(required, None)
        await self._check_references(user.agency_id, changes)

        check_in: date = changes.get("check_in_date", hotel_booking.check_in_date)
        check_out: date = changes.get("check_out_date", hotel_booking.check_out_date)
        if check_out < check_in:
            raise ValidationError("check_out_date cannot be before check_in_date", field="check_out_date")
        if changes.get("nights") is None and ("check_in_date" in changes or "check_out_date" in changes):
            changes["nights"] = (check_out - check_in).days
        elif "nights" in changes and changes["nights"] is None:
            changes.pop("nights")

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(hotel_booking, field) != value:
                old_values[field] = getattr(hotel_booking, field)
                setattr(hotel_booking, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="HotelBooking",
                entity_id=hotel_booking_id,
                user_id=user.id,
                agency_id=user.agency_id,
                entity_identifier=hotel_booking.hrv_number,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_hotel_booking(hotel_booking_id, user)

    async def delete_hotel_booking(self, hotel_booking_id: int, user: User) -> None:
        hotel_booking = await self.get_hotel_booking(hotel_booking_id, user)
        await self.db.delete(hotel_booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="HotelBooking",
            entity_id=hotel_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=hotel_booking.hrv_number,
        )
        await self.db.commit()
