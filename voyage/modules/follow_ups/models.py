"""FollowUp model."""

from datetime import date

from sqlalchemy import BigInteger, CheckConstraint, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class FollowUp(AgencyScopedModel):
    """A conversation with the client about a booking or a group booking."""

    __tablename__ = "follow_ups"

    booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=True, index=True
    )
    group_booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("group_bookings.id", ondelete="CASCADE"), nullable=True, index=True
    )
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    follow_up_date: Mapped[date] = mapped_column(Date, nullable=False)
    next_follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    remarks: Mapped[str] = mapped_column(String(2000), nullable=False)

    user: Mapped["User"] = relationship("User")
    booking: Mapped["Booking | None"] = relationship("Booking")

    __table_args__ = (
        CheckConstraint(
            "(booking_id IS NULL) != (group_booking_id IS NULL)",
            name="ck_follow_ups_single_parent",
        ),
    )


# Import at the end to avoid circular imports
from voyage.core.auth.models import User
from voyage.modules.bookings.models import Booking
