"""Service for Agencies module."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User, UserRole
from voyage.core.auth.password import hash_password
from voyage.core.exceptions import ConflictError, DuplicateError, NotFoundError, ValidationError
from voyage.modules.agencies.models import Agency
from voyage.modules.agencies.schemas import AgencyCreate, AgencyUpdate
from voyage.modules.branches.models import Branch
from voyage.modules.packages.models import Package
from voyage.modules.subscriptions.models import Subscription
from voyage.modules.subscriptions.service import SubscriptionService, build_subscription
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, paginate

logger = logging.getLogger(__name__)

SORTABLE = {
    "id": Agency.id,
    "business_name": Agency.business_name,
    "contact_person_name": Agency.contact_person_name,
    "state": Agency.state,
    "created_at": Agency.created_at,
}


class AgencyService:
    """Service for onboarding and maintaining agencies."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    def _with_subscription(self):
        return selectinload(Agency.current_subscription).selectinload(Subscription.package)

    async def create_agency(self, data: AgencyCreate, created_by_id: int) -> Agency:
        """
        Onboard an agency in one transaction: the agency, its first
        subscription and its admin user.
        """
        result = await self.db.execute(
            select(Package).where(Package.id == data.subscription.package_id)
        )
        package = result.scalar_one_or_none()
        if not package:
            raise ValidationError(
                f"Package with id={data.subscription.package_id} does not exist",
                field="subscription.package_id",
            )

        existing = await self.db.execute(select(User.id).where(User.email == data.user.email))
        if existing.first():
            raise DuplicateError("User", "email", data.user.email)

        agency = Agency(**data.model_dump(exclude={"subscription", "user"}))
        self.db.add(agency)
        await self.db.flush()

        subscription = build_subscription(agency.id, package, data.subscription.start_date)
        await SubscriptionService(self.db).issue_invoice_number(subscription)
        self.db.add(subscription)
        await self.db.flush()
        agency.current_subscription = subscription

        admin = User(
            email=data.user.email,
            password_hash=hash_password(data.user.password),
            name=data.user.name,
            role=UserRole.ADMIN.value,
            is_active=True,
            agency_id=agency.id,
        )
        self.db.add(admin)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Agency",
            entity_id=agency.id,
            user_id=created_by_id,
            agency_id=agency.id,
            entity_identifier=agency.business_name,
            new_values={
                "business_name": agency.business_name,
                "package_id": package.id,
                "start_date": subscription.start_date,
                "end_date": subscription.end_date,
                "admin_email": admin.email,
            },
        )

        await self.db.commit()
        logger.info("Onboarded agency %s (%s)", agency.id, agency.business_name)
        return await self.get_agency_by_id(agency.id, with_relations=True)

    async def get_agency_by_id(self, agency_id: int, with_relations: bool = False) -> Agency:
        """Get agency by ID."""
        query = select(Agency).where(Agency.id == agency_id).options(self._with_subscription())
        if with_relations:
            query = query.options(
                selectinload(Agency.users),
                selectinload(Agency.subscriptions).selectinload(Subscription.package),
            )
        result = await self.db.execute(query.execution_options(populate_existing=True))
        agency = result.scalar_one_or_none()
        if not agency:
            raise NotFoundError("Agency", agency_id)
        return agency

    async def list_agencies(
        self,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Agency], int]:
        """List agencies with their current subscription."""
        query = select(Agency).options(self._with_subscription())
        condition = contains(
            search,
            Agency.business_name,
            Agency.contact_person_name,
            Agency.contact_person_email,
            Agency.city,
        )
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def update_agency(self, agency_id: int, data: AgencyUpdate, updated_by_id: int) -> Agency:
        """Update agency details."""
        agency = await self.get_agency_by_id(agency_id)
        old_values = {}
        new_values = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if getattr(agency, field) != value:
                old_values[field] = getattr(agency, field)
                setattr(agency, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Agency",
                entity_id=agency_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )

        await self.db.commit()
        return await self.get_agency_by_id(agency_id, with_relations=True)

    async def delete_agency(self, agency_id: int, deleted_by_id: int) -> None:
        """
        Delete an agency with its users and subscriptions.

        Agencies that already have branches (and therefore operational data)
        cannot be deleted.
        """
        agency = await self.get_agency_by_id(agency_id, with_relations=True)

        branches = await self.db.execute(
            select(func.count()).select_from(Branch).where(Branch.agency_id == agency_id)
        )
        if branches.scalar_one():
            raise ConflictError(
                "Cannot delete this agency because it has branches and related data. "
                "Please remove those first."
            )

        agency.current_subscription = None
        await self.db.flush()
        for user in list(agency.users):
            await self.db.delete(user)
        await self.db.delete(agency)

        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Agency",
            entity_id=agency_id,
            user_id=deleted_by_id,
            entity_identifier=agency.business_name,
        )
        await self.db.commit()
        logger.info("Deleted agency %s", agency_id)
