"""HotelBooking model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class HotelBooking(AgencyScopedModel):
    """Hotel stay reserved for a booking, identified by its HRV number."""

    __tablename__ = "hotel_bookings"

    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("bookings.id"), nullable=False, index=True
    )
    hrv_number: Mapped[str] = mapped_column(String(30), nullable=False)
    hotel_booking_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    party_coming_from: Mapped[str] = mapped_column(String(200), nullable=False)

    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    nights: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)
    hotel_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("hotels.id"), nullable=False, index=True
    )
    plan: Mapped[str | None] = mapped_column(String(20), nullable=True)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    accommodation_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("accommodations.id"), nullable=True
    )
    tariff_package: Mapped[str | None] = mapped_column(String(200), nullable=True)
    accommodation_note: Mapped[str | None] = mapped_column(Text, nullable=True)

    extra_bed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    beds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    extra_bed_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    booking_confirmed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    confirmation_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    billing_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    special_requirement: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    bill_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    hotel: Mapped["Hotel"] = relationship("Hotel")
    city: Mapped["City | None"] = relationship("City")

    __table_args__ = (
        UniqueConstraint("agency_id", "hrv_number", name="uq_hotel_bookings_agency_hrv"),
    )


# Import at the end to avoid circular imports
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City
