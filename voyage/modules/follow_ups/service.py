"""Service for Follow-ups module."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.exceptions import NotFoundError
from voyage.modules.bookings.models import Booking
from voyage.modules.bookings.service import get_visible_booking
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.follow_ups.schemas import FollowUpCreate
from voyage.modules.group_bookings.models import GroupBooking
from voyage.modules.group_bookings.service import visible_group_bookings

logger = logging.getLogger(__name__)


class FollowUpService:
    """Service for follow-up conversations on bookings and group bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _get_parent(
        self, user: User, booking_id: int | None, group_booking_id: int | None
    ) -> Booking | GroupBooking:
        if booking_id is not None:
            return await get_visible_booking(self.db, user, booking_id)

        result = await self.db.execute(
            visible_group_bookings(user).where(GroupBooking.id == group_booking_id)
        )
        parent = result.scalar_one_or_none()
        if not parent:
            raise NotFoundError("Group booking", group_booking_id)
        return parent

    async def add_follow_up(self, data: FollowUpCreate, user: User) -> FollowUp:
        """
        Record a follow-up and copy its remarks and next date onto the parent.

        The parent's ``remarks``/``follow_up_date`` always reflect the latest
        conversation, which is what the enquiry lists show.
        """
        parent = await self._get_parent(user, data.booking_id, data.group_booking_id)

        follow_up = FollowUp(
            agency_id=user.agency_id,
            user_id=user.id,
            **data.model_dump(),
        )
        self.db.add(follow_up)
        parent.remarks = data.remarks
        parent.follow_up_date = data.next_follow_up_date
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.ADD_FOLLOW_UP,
            entity_type="Booking" if data.booking_id is not None else "GroupBooking",
            entity_id=parent.id,
            user_id=user.id,
            agency_id=user.agency_id,
            new_values={
                "follow_up_id": follow_up.id,
                "next_follow_up_date": data.next_follow_up_date,
            },
        )
        await self.db.commit()
        logger.info("Follow-up %s added by user %s", follow_up.id, user.id)
        return await self._get_follow_up(follow_up.id)

    async def _get_follow_up(self, follow_up_id: int) -> FollowUp:
        result = await self.db.execute(
            select(FollowUp)
            .where(FollowUp.id == follow_up_id)
            .options(selectinload(FollowUp.user))
        )
        return result.scalar_one()

    async def list_follow_ups(
        self, user: User, booking_id: int | None = None, group_booking_id: int | None = None
    ) -> list[FollowUp]:
        """Follow-ups of one booking or group booking, newest first."""
        await self._get_parent(user, booking_id, group_booking_id)
        query = select(FollowUp).options(selectinload(FollowUp.user))
        if booking_id is not None:
            query = query.where(FollowUp.booking_id == booking_id)
        else:
            query = query.where(FollowUp.group_booking_id == group_booking_id)
        result = await self.db.execute(query.order_by(FollowUp.follow_up_date.desc(), FollowUp.id.desc()))
        return list(result.scalars().all())
