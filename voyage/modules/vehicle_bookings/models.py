"""VehicleBooking with its itinerary and hotel legs."""

from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel, BaseModel


class VehicleBooking(AgencyScopedModel):
    """
    Vehicle hired for a booking or for one party of a group booking.

    Exactly one of ``booking_id`` and ``group_client_booking_id`` is set.
    """

    __tablename__ = "vehicle_bookings"

    booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("bookings.id"), nullable=True, index=True
    )
    group_client_booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("group_client_bookings.id"), nullable=True, index=True
    )
    vehicle_hrv_number: Mapped[str] = mapped_column(String(30), nullable=False)
    vehicle_booking_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    vehicle_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("vehicles.id"), nullable=True, index=True
    )
    number_of_vehicles: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)
    agent_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("agents.id"), nullable=True, index=True
    )
    pickup_place: Mapped[str | None] = mapped_column(String(255), nullable=True)

    terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    special_request: Mapped[str | None] = mapped_column(Text, nullable=True)
    vehicle_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    special_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    bill_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    vehicle: Mapped["Vehicle | None"] = relationship("Vehicle")
    agent: Mapped["Agent | None"] = relationship("Agent")
    itineraries: Mapped[list["VehicleItinerary"]] = relationship(
        "VehicleItinerary",
        back_populates="vehicle_booking",
        cascade="all, delete-orphan",
        order_by="VehicleItinerary.day",
    )
    hotel_legs: Mapped[list["VehicleHotelBooking"]] = relationship(
        "VehicleHotelBooking",
        back_populates="vehicle_booking",
        cascade="all, delete-orphan",
        order_by="VehicleHotelBooking.check_in_date",
    )

    __table_args__ = (
        UniqueConstraint("agency_id", "vehicle_hrv_number", name="uq_vehicle_bookings_agency_hrv"),
    )


class VehicleItinerary(BaseModel):
    """Day-by-day route of a vehicle booking."""

    __tablename__ = "vehicle_itineraries"

    vehicle_booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("vehicle_bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    travel_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)

    vehicle_booking: Mapped["VehicleBooking"] = relationship(
        "VehicleBooking", back_populates="itineraries"
    )


class VehicleHotelBooking(BaseModel):
    """Overnight stop on a vehicle tour."""

    __tablename__ = "vehicle_hotel_bookings"

    vehicle_booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("vehicle_bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)
    hotel_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("hotels.id"), nullable=True)
    check_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    check_out_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_rooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    plan: Mapped[str | None] = mapped_column(String(20), nullable=True)
    number_of_nights: Mapped[int | None] = mapped_column(Integer, nullable=True)

    vehicle_booking: Mapped["VehicleBooking"] = relationship(
        "VehicleBooking", back_populates="hotel_legs"
    )


# Import at the end to avoid circular imports
from voyage.modules.agents.models import Agent
from voyage.modules.reference_data.models import Vehicle
