"""Service for Bookings module: tour enquiries and confirmed bookings."""

import logging
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import ConflictError, NotFoundError, ValidationError
from voyage.modules.bookings.models import Booking, BookingDetail, BookingType
from voyage.modules.bookings.schemas import BookingCreate, BookingUpdate, ItineraryDayIn
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.journey_bookings.models import JourneyBooking
from voyage.modules.locations.models import City
from voyage.modules.receipts.models import BookingReceipt
from voyage.modules.tours.models import Tour
from voyage.modules.vehicle_bookings.models import VehicleBooking
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, ensure_references, paginate
from voyage.shared.utils.sync import sync_children

logger = logging.getLogger(__name__)

SORTABLE = {
    "id": Booking.id,
    "booking_number": Booking.booking_number,
    "booking_date": Booking.booking_date,
    "journey_date": Booking.journey_date,
    "follow_up_date": Booking.follow_up_date,
    "client_name": Client.client_name,
    "branch_name": Branch.branch_name,
    "tour_title": Tour.tour_title,
}


async def resolve_branch(db: AsyncSession, user: User, branch_id: int | None) -> int:
    """
    Branch a new booking belongs to.

    Agency admins work across branches and must name one; everybody else
    books into their own branch.
    """
    if user.is_agency_admin:
        if branch_id is None:
            raise ValidationError("Branch is required", field="branch_id")
        await ensure_references(db, user.agency_id, {"branch_id": (Branch, branch_id)})
        return branch_id
    if user.branch_id is None:
        raise ValidationError("User is not assigned to a branch", field="branch_id")
    return user.branch_id


async def check_itinerary_cities(db: AsyncSession, agency_id: int, days: list[ItineraryDayIn]) -> None:
    for index, item in enumerate(days):
        await ensure_references(db, agency_id, {f"details.{index}.city_id": (City, item.city_id)})


def visible_bookings(user: User):
    """Bookings of the user's agency, narrowed to their branch unless agency-wide."""
    query = select(Booking).where(Booking.agency_id == user.agency_id)
    if user.branch_scope is not None:
        query = query.where(Booking.branch_id == user.branch_scope)
    return query


async def get_visible_booking(db: AsyncSession, user: User, booking_id: int) -> Booking:
    """Parent booking of a sub-booking or receipt, within the user's reach."""
    result = await db.execute(visible_bookings(user).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise NotFoundError("Booking", booking_id)
    return booking


class BookingService:
    """Service for tour enquiries and bookings with their itineraries."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)
        self.numbers = DocumentNumberGenerator(db)

    async def create_booking(self, data: BookingCreate, user: User) -> Booking:
        """Create a booking; its number is allocated in the same transaction."""
        agency_id = user.agency_id
        branch_id = await resolve_branch(self.db, user, data.branch_id)
        await ensure_references(
            self.db,
            agency_id,
            {"client_id": (Client, data.client_id), "tour_id": (Tour, data.tour_id)},
        )
        await check_itinerary_cities(self.db, agency_id, data.details)

        booking = Booking(
            agency_id=agency_id,
            branch_id=branch_id,
            booking_number=await self.numbers.generate(
                DocumentSeries.BOOKING, agency_id, on=data.booking_date
            ),
            **data.model_dump(exclude={"branch_id", "details"}),
        )
        booking.booking_type = data.booking_type.value
        booking.details = [BookingDetail(**d.model_dump(exclude={"id"})) for d in data.details]
        self.db.add(booking)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Booking",
            entity_id=booking.id,
            user_id=user.id,
            agency_id=agency_id,
            entity_identifier=booking.booking_number,
            new_values={
                "booking_type": booking.booking_type,
                "client_id": booking.client_id,
                "branch_id": branch_id,
            },
        )
        await self.db.commit()
        logger.info("Booking %s created for agency %s", booking.booking_number, agency_id)
        return await self.get_booking(booking.id, user)

    async def get_booking(self, booking_id: int, user: User) -> Booking:
        """Get a booking with client, branch, tour and itinerary loaded."""
        result = await self.db.execute(
            visible_bookings(user)
            .where(Booking.id == booking_id)
            .options(
                selectinload(Booking.client),
                selectinload(Booking.branch),
                selectinload(Booking.tour),
                selectinload(Booking.details),
            )
            .execution_options(populate_existing=True)
        )
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking", booking_id)
        return booking

    async def list_bookings(
        self,
        user: User,
        booking_type: BookingType = BookingType.CONFIRM,
        search: str | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        tour_title: str | None = None,
        client_name: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Booking], int]:
        """List bookings of one type with search, filters and sorting."""
        query = (
            visible_bookings(user)
            .join(Client, Client.id == Booking.client_id)
            .join(Branch, Branch.id == Booking.branch_id)
            .outerjoin(Tour, Tour.id == Booking.tour_id)
            .where(Booking.booking_type == booking_type.value)
            .options(
                selectinload(Booking.client),
                selectinload(Booking.branch),
                selectinload(Booking.tour),
            )
        )
        condition = contains(
            search, Booking.booking_number, Branch.branch_name, Client.client_name, Tour.tour_title
        )
        if condition is not None:
            query = query.where(condition)
        if from_date:
            query = query.where(Booking.booking_date >= from_date)
        if to_date:
            query = query.where(Booking.booking_date <= to_date)
        if tour_title:
            query = query.where(Tour.tour_title.ilike(f"%{tour_title}%"))
        if client_name:
            query = query.where(Client.client_name.ilike(f"%{client_name}%"))
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def update_booking(self, booking_id: int, data: BookingUpdate, user: User) -> Booking:
        """Update a booking and, when sent, reconcile its itinerary days."""
        booking = await self.get_booking(booking_id, user)
        agency_id = user.agency_id
        changes = data.model_dump(exclude_unset=True, exclude={"details"})
        for required in (
            "booking_type",
            "booking_date",
            "client_id",
            "branch_id",
            "number_of_adults",
            "number_of_children_5_to_11",
            "number_of_children_under_5",
        ):
            if changes.get(required) is None:
                changes.pop(required, None)

        if "branch_id" in changes and changes["branch_id"] != booking.branch_id:
            if not user.is_agency_admin:
                raise ValidationError("Only an agency admin can move a booking", field="branch_id")
            await ensure_references(self.db, agency_id, {"branch_id": (Branch, changes["branch_id"])})
        await ensure_references(
            self.db,
            agency_id,
            {"client_id": (Client, changes.get("client_id")), "tour_id": (Tour, changes.get("tour_id"))},
        )
        if "booking_type" in changes:
            changes["booking_type"] = changes["booking_type"].value

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(booking, field) != value:
                old_values[field] = getattr(booking, field)
                setattr(booking, field, value)
                new_values[field] = value

        if data.details is not None:
            await check_itinerary_cities(self.db, agency_id, data.details)
            sync_children(booking.details, data.details, BookingDetail, "Booking detail")
            new_values["details"] = len(data.details)

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Booking",
                entity_id=booking_id,
                user_id=user.id,
                agency_id=agency_id,
                entity_identifier=booking.booking_number,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_booking(booking_id, user)

    async def delete_booking(self, booking_id: int, user: User) -> None:
        """Delete a booking that has no sub-bookings and no receipts."""
        booking = await self.get_booking(booking_id, user)

        for model, label in (
            (HotelBooking, "hotel bookings"),
            (JourneyBooking, "journey bookings"),
            (VehicleBooking, "vehicle bookings"),
            (BookingReceipt, "receipts"),
        ):
            result = await self.db.execute(
                select(func.count()).select_from(model).where(model.booking_id == booking_id)
            )
            if result.scalar_one():
                raise ConflictError(
                    f"Cannot delete this booking because it has {label}. Please remove those first."
                )

        await self.db.execute(delete(FollowUp).where(FollowUp.booking_id == booking_id))
        await self.db.delete(booking)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Booking",
            entity_id=booking_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=booking.booking_number,
        )
        await self.db.commit()
