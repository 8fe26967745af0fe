"""Service for dashboard summary (agency main page)."""

from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.auth.models import User
from voyage.modules.bookings.models import Booking, BookingType
from voyage.modules.bookings.service import visible_bookings
from voyage.modules.clients.models import Client
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.group_bookings.service import visible_group_bookings
from voyage.shared.utils.query import paginate

UPCOMING_DAYS = 7


class DashboardService:
    """Aggregates data for main page: counts and the follow-up calendar."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, query) -> int:
        result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        return result.scalar() or 0

    def _upcoming_follow_ups(self, user: User, today: date):
        return (
            select(FollowUp)
            .join(Booking, Booking.id == FollowUp.booking_id)
            .where(
                FollowUp.booking_id.in_(visible_bookings(user).with_only_columns(Booking.id)),
                FollowUp.next_follow_up_date >= today,
                FollowUp.next_follow_up_date <= today + timedelta(days=UPCOMING_DAYS),
            )
        )

    async def get_summary(self, user: User) -> dict:
        """
        Build dashboard summary.

        Counts cover the user's branch unless they work agency-wide; clients
        are shared by the whole agency.
        """
        bookings = visible_bookings(user)
        return {
            "enquiries_count": await self._count(
                bookings.where(Booking.booking_type == BookingType.ENQUIRY.value)
            ),
            "bookings_count": await self._count(
                bookings.where(Booking.booking_type == BookingType.CONFIRM.value)
            ),
            "group_bookings_count": await self._count(visible_group_bookings(user)),
            "clients_count": await self._count(
                select(Client.id).where(Client.agency_id == user.agency_id)
            ),
            "upcoming_follow_ups_count": await self._count(
                self._upcoming_follow_ups(user, date.today())
            ),
        }

    async def list_upcoming_follow_ups(
        self, user: User, page: int = 1, limit: int = 10
    ) -> tuple[list[dict], int]:
        """Booking follow-ups due from today to a week ahead, soonest first."""
        query = (
            self._upcoming_follow_ups(user, date.today())
            .options(selectinload(FollowUp.user), selectinload(FollowUp.booking))
            .order_by(FollowUp.next_follow_up_date, FollowUp.id)
        )
        follow_ups, total = await paginate(self.db, query, page, limit)
        items = [
            {
                "id": f.id,
                "booking_id": f.booking_id,
                "booking_number": f.booking.booking_number,
                "next_follow_up_date": f.next_follow_up_date,
                "remarks": f.remarks,
                "user_name": f.user.name,
            }
            for f in follow_ups
        ]
        return items, total
