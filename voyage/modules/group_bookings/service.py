"""Service for Group Bookings module."""

import logging
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import ConflictError, NotFoundError, ValidationError
from voyage.modules.bookings.service import check_itinerary_cities, resolve_branch
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.group_bookings.models import (
    GroupBooking,
    GroupBookingDetail,
    GroupClientBooking,
    GroupClientMember,
)
from voyage.modules.group_bookings.schemas import (
    GroupBookingCreate,
    GroupBookingUpdate,
    GroupClientBookingCreate,
    GroupClientBookingUpdate,
)
from voyage.modules.receipts.models import BookingReceipt
from voyage.modules.tours.models import Tour
from voyage.modules.vehicle_bookings.models import VehicleBooking
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, ensure_references, paginate
from voyage.shared.utils.sync import sync_children

logger = logging.getLogger(__name__)

SORTABLE = {
    "id": GroupBooking.id,
    "group_booking_number": GroupBooking.group_booking_number,
    "group_booking_date": GroupBooking.group_booking_date,
    "journey_date": GroupBooking.journey_date,
    "branch_name": Branch.branch_name,
    "tour_title": Tour.tour_title,
}


def visible_group_bookings(user: User):
    """Group bookings of the user's agency, narrowed to their branch unless agency-wide."""
    query = select(GroupBooking).where(GroupBooking.agency_id == user.agency_id)
    if user.branch_scope is not None:
        query = query.where(GroupBooking.branch_id == user.branch_scope)
    return query


def _apply_changes(obj, changes: dict) -> tuple[dict, dict]:
    old_values = {}
    new_values = {}
    for field, value in changes.items():
        if getattr(obj, field) != value:
            old_values[field] = getattr(obj, field)
            setattr(obj, field, value)
            new_values[field] = value
    return old_values, new_values


class GroupBookingService:
    """Service for group departures and the client parties booked into them."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)
        self.numbers = DocumentNumberGenerator(db)

    # Group bookings

    async def create_group_booking(self, data: GroupBookingCreate, user: User) -> GroupBooking:
        agency_id = user.agency_id
        branch_id = await resolve_branch(self.db, user, data.branch_id)
        await ensure_references(self.db, agency_id, {"tour_id": (Tour, data.tour_id)})
        await check_itinerary_cities(self.db, agency_id, data.details)

        group_booking = GroupBooking(
            agency_id=agency_id,
            branch_id=branch_id,
            group_booking_number=await self.numbers.generate(
                DocumentSeries.GROUP_BOOKING, agency_id, on=data.group_booking_date
            ),
            **data.model_dump(exclude={"branch_id", "details"}),
        )
        group_booking.details = [
            GroupBookingDetail(**d.model_dump(exclude={"id"})) for d in data.details
        ]
        self.db.add(group_booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="GroupBooking",
            entity_id=group_booking.id,
            user_id=user.id,
            agency_id=agency_id,
            entity_identifier=group_booking.group_booking_number,
            new_values={"branch_id": branch_id, "tour_id": group_booking.tour_id},
        )
        await self.db.commit()
        logger.info(
            "Group booking %s created for agency %s", group_booking.group_booking_number, agency_id
        )
        return await self.get_group_booking(group_booking.id, user)

    async def get_group_booking(self, group_booking_id: int, user: User) -> GroupBooking:
        """Get a group booking with itinerary and client parties loaded."""
        result = await self.db.execute(
            visible_group_bookings(user)
            .where(GroupBooking.id == group_booking_id)
            .options(
                selectinload(GroupBooking.branch),
                selectinload(GroupBooking.tour),
                selectinload(GroupBooking.details),
                selectinload(GroupBooking.client_bookings).selectinload(GroupClientBooking.client),
                selectinload(GroupBooking.client_bookings).selectinload(GroupClientBooking.members),
            )
            .execution_options(populate_existing=True)
        )
        group_booking = result.scalar_one_or_none()
        if not group_booking:
            raise NotFoundError("Group booking", group_booking_id)
        return group_booking

    async def list_group_bookings(
        self,
        user: User,
        search: str | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[GroupBooking], int]:
        query = (
            visible_group_bookings(user)
            .join(Branch, Branch.id == GroupBooking.branch_id)
            .outerjoin(Tour, Tour.id == GroupBooking.tour_id)
            .options(selectinload(GroupBooking.branch), selectinload(GroupBooking.tour))
        )
        condition = contains(
            search, GroupBooking.group_booking_number, Branch.branch_name, Tour.tour_title
        )
        if condition is not None:
            query = query.where(condition)
        if from_date:
            query = query.where(GroupBooking.group_booking_date >= from_date)
        if to_date:
            query = query.where(GroupBooking.group_booking_date <= to_date)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def update_group_booking(
        self, group_booking_id: int, data: GroupBookingUpdate, user: User
    ) -> GroupBooking:
        group_booking = await self.get_group_booking(group_booking_id, user)
        agency_id = user.agency_id
        changes = data.model_dump(exclude_unset=True, exclude={"details"})
        for required in ("group_booking_date", "branch_id"):
            if changes.get(required) is None:
                changes.pop(required, None)

        if "branch_id" in changes and changes["branch_id"] != group_booking.branch_id:
            if not user.is_agency_admin:
                raise ValidationError("Only an agency admin can move a group booking", field="branch_id")
            await ensure_references(self.db, agency_id, {"branch_id": (Branch, changes["branch_id"])})
        await ensure_references(self.db, agency_id, {"tour_id": (Tour, changes.get("tour_id"))})

        old_values, new_values = _apply_changes(group_booking, changes)
        if data.details is not None:
            await check_itinerary_cities(self.db, agency_id, data.details)
            sync_children(group_booking.details, data.details, GroupBookingDetail, "Group booking detail")
            new_values["details"] = len(data.details)

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="GroupBooking",
                entity_id=group_booking_id,
                user_id=user.id,
                agency_id=agency_id,
                entity_identifier=group_booking.group_booking_number,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_group_booking(group_booking_id, user)

    async def delete_group_booking(self, group_booking_id: int, user: User) -> None:
        """Delete a group booking that no client has booked into."""
        group_booking = await self.get_group_booking(group_booking_id, user)
        if group_booking.client_bookings:
            raise ConflictError(
                "Cannot delete this group booking because clients are booked into it. "
                "Please remove those first."
            )

        await self.db.execute(delete(FollowUp).where(FollowUp.group_booking_id == group_booking_id))
        await self.db.delete(group_booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="GroupBooking",
            entity_id=group_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=group_booking.group_booking_number,
        )
        await self.db.commit()

    # Client parties

    async def add_client_booking(
        self, group_booking_id: int, data: GroupClientBookingCreate, user: User
    ) -> GroupClientBooking:
        """Book a client's party into a group; total members is derived from the counts."""
        await self.get_group_booking(group_booking_id, user)
        await ensure_references(self.db, user.agency_id, {"client_id": (Client, data.client_id)})

        client_booking = GroupClientBooking(
            agency_id=user.agency_id,
            group_booking_id=group_booking_id,
            **data.model_dump(exclude={"members"}),
        )
        client_booking.members = [GroupClientMember(**m.model_dump(exclude={"id"})) for m in data.members]
        client_booking.recount_members()
        self.db.add(client_booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="GroupClientBooking",
            entity_id=client_booking.id,
            user_id=user.id,
            agency_id=user.agency_id,
            new_values={
                "group_booking_id": group_booking_id,
                "client_id": data.client_id,
                "total_member": client_booking.total_member,
            },
        )
        await self.db.commit()
        return await self.get_client_booking(client_booking.id, user)

    async def get_client_booking(self, client_booking_id: int, user: User) -> GroupClientBooking:
        visible = visible_group_bookings(user).with_only_columns(GroupBooking.id)
        result = await self.db.execute(
            select(GroupClientBooking)
            .where(
                GroupClientBooking.id == client_booking_id,
                GroupClientBooking.group_booking_id.in_(visible),
            )
            .options(
                selectinload(GroupClientBooking.client),
                selectinload(GroupClientBooking.members),
            )
            .execution_options(populate_existing=True)
        )
        client_booking = result.scalar_one_or_none()
        if not client_booking:
            raise NotFoundError("Group client booking", client_booking_id)
        return client_booking

    async def list_client_bookings(self, group_booking_id: int, user: User) -> list[GroupClientBooking]:
        await self.get_group_booking(group_booking_id, user)
        result = await self.db.execute(
            select(GroupClientBooking)
            .where(GroupClientBooking.group_booking_id == group_booking_id)
            .options(
                selectinload(GroupClientBooking.client),
                selectinload(GroupClientBooking.members),
            )
            .order_by(GroupClientBooking.id)
        )
        return list(result.scalars().all())

    async def update_client_booking(
        self, client_booking_id: int, data: GroupClientBookingUpdate, user: User
    ) -> GroupClientBooking:
        client_booking = await self.get_client_booking(client_booking_id, user)
        changes = data.model_dump(exclude_unset=True, exclude={"members"})
        for required in (
            "client_id",
            "booking_date",
            "number_of_adults",
            "number_of_children_5_to_11",
            "number_of_children_under_5",
        ):
            if changes.get(required) is None:
                changes.pop(required, None)
        await ensure_references(self.db, user.agency_id, {"client_id": (Client, changes.get("client_id"))})

        old_values, new_values = _apply_changes(client_booking, changes)
        client_booking.recount_members()
        if data.members is not None:
            sync_children(client_booking.members, data.members, GroupClientMember, "Group member")
            new_values["members"] = len(data.members)

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="GroupClientBooking",
                entity_id=client_booking_id,
                user_id=user.id,
                agency_id=user.agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_client_booking(client_booking_id, user)

    async def delete_client_booking(self, client_booking_id: int, user: User) -> None:
        """Delete a client party that has no vehicle bookings and no receipts."""
        client_booking = await self.get_client_booking(client_booking_id, user)
        for model, label in ((VehicleBooking, "vehicle bookings"), (BookingReceipt, "receipts")):
            result = await self.db.execute(
                select(func.count())
                .select_from(model)
                .where(model.group_client_booking_id == client_booking_id)
            )
            if result.scalar_one():
                raise ConflictError(
                    f"Cannot delete this client booking because it has {label}. "
                    "Please remove those first."
                )

        await self.db.delete(client_booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="GroupClientBooking",
            entity_id=client_booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
        )
        await self.db.commit()
