"""GroupBooking models: the group, its itinerary and the clients travelling in it."""

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel, BaseModel


class GroupBooking(AgencyScopedModel):
    """Group departure of a tour that several clients book into."""

    __tablename__ = "group_bookings"

    group_booking_number: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    group_booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    journey_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    branch_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("branches.id"), nullable=False, index=True
    )
    tour_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("tours.id"), nullable=True, index=True
    )
    booking_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_journey: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hotel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_vehicle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    branch: Mapped["Branch"] = relationship("Branch")
    tour: Mapped["Tour | None"] = relationship("Tour")
    details: Mapped[list["GroupBookingDetail"]] = relationship(
        "GroupBookingDetail",
        back_populates="group_booking",
        cascade="all, delete-orphan",
        order_by="GroupBookingDetail.day",
    )
    client_bookings: Mapped[list["GroupClientBooking"]] = relationship(
        "GroupClientBooking", back_populates="group_booking", order_by="GroupClientBooking.id"
    )

    __table_args__ = (
        UniqueConstraint("agency_id", "group_booking_number", name="uq_group_bookings_agency_number"),
    )


class GroupBookingDetail(BaseModel):
    __tablename__ = "group_booking_details"

    group_booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("group_bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    travel_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)

    group_booking: Mapped["GroupBooking"] = relationship("GroupBooking", back_populates="details")


class GroupClientBooking(AgencyScopedModel):
    """One client's party within a group booking."""

    __tablename__ = "group_client_bookings"

    group_booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("group_bookings.id"), nullable=False, index=True
    )
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("clients.id"), nullable=False, index=True
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    number_of_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    number_of_children_5_to_11: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_children_under_5: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_member: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    tour_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_journey: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hotel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_vehicle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    group_booking: Mapped["GroupBooking"] = relationship("GroupBooking", back_populates="client_bookings")
    client: Mapped["Client"] = relationship("Client")
    members: Mapped[list["GroupClientMember"]] = relationship(
        "GroupClientMember",
        back_populates="group_client_booking",
        cascade="all, delete-orphan",
        order_by="GroupClientMember.id",
    )

    def recount_members(self) -> None:
        self.total_member = (
            self.number_of_adults + self.number_of_children_5_to_11 + self.number_of_children_under_5
        )


class GroupClientMember(BaseModel):
    """Traveller in a client's party, with identity documents."""

    __tablename__ = "group_client_members"

    group_client_booking_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("group_client_bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    relation: Mapped[str | None] = mapped_column(String(50), nullable=True)
    aadhar_no: Mapped[str | None] = mapped_column(String(12), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    anniversary_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    food_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    passport_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)

    group_client_booking: Mapped["GroupClientBooking"] = relationship(
        "GroupClientBooking", back_populates="members"
    )


# Import at the end to avoid circular imports
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.tours.models import Tour
