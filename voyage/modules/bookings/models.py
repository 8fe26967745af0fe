"""Booking (tour enquiry or confirmed booking) and BookingDetail models."""

from datetime import date
from enum import StrEnum

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel, BaseModel


class BookingType(StrEnum):
    ENQUIRY = "Enquiry"
    CONFIRM = "Confirm"


class Booking(AgencyScopedModel):
    """
    A client's tour request.

    Starts as an ``Enquiry`` and becomes a ``Confirm`` booking once the client
    commits. Hotel, journey and vehicle sub-bookings and receipts hang off it.
    """

    __tablename__ = "bookings"

    booking_number: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    booking_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingType.ENQUIRY.value, index=True
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    journey_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    departure_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    branch_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("branches.id"), nullable=False, index=True
    )
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("clients.id"), nullable=False, index=True
    )
    tour_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("tours.id"), nullable=True, index=True
    )

    budget_field: Mapped[str | None] = mapped_column(String(100), nullable=True)
    number_of_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    number_of_children_5_to_11: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_children_under_5: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    booking_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_journey: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hotel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_vehicle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_package: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Latest follow-up, copied from the follow-up history
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    branch: Mapped["Branch"] = relationship("Branch")
    client: Mapped["Client"] = relationship("Client")
    tour: Mapped["Tour | None"] = relationship("Tour")
    details: Mapped[list["BookingDetail"]] = relationship(
        "BookingDetail",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingDetail.day",
    )

    __table_args__ = (
        UniqueConstraint("agency_id", "booking_number", name="uq_bookings_agency_number"),
    )


class BookingDetail(BaseModel):
    """One day of a booking's itinerary."""

    __tablename__ = "booking_details"

    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    travel_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="details")


# Import at the end to avoid circular imports
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.tours.models import Tour
