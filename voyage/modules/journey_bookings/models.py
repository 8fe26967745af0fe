"""JourneyBooking model."""

from datetime import date, datetime
from enum import StrEnum

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from voyage.core.database.base import AgencyScopedModel


class JourneyMode(StrEnum):
    TRAIN = "Train"
    BUS = "Bus"
    FLIGHT = "Flight"


class JourneyBooking(AgencyScopedModel):
    """Train, bus or flight leg of a booking."""

    __tablename__ = "journey_bookings"

    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("bookings.id"), nullable=False, index=True
    )
    mode: Mapped[str] = mapped_column(String(20), nullable=False)
    from_place: Mapped[str | None] = mapped_column(String(200), nullable=True)
    to_place: Mapped[str | None] = mapped_column(String(200), nullable=True)
    journey_booking_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    from_departure_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    to_arrival_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    food_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    travel_class: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pnr_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Mode specific
    train_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    train_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    bus_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    flight_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    bill_description: Mapped[str | None] = mapped_column(Text, nullable=True)
