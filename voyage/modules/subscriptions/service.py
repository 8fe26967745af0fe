"""Service for Subscriptions module."""

import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import (
    AppException,
    AuthorizationError,
    NotFoundError,
    SubscriptionExpiredError,
)
from voyage.modules.agencies.models import Agency
from voyage.modules.packages.models import Package
from voyage.modules.subscriptions.models import Subscription
from voyage.shared.utils.dates import add_months

logger = logging.getLogger(__name__)


def build_subscription(agency_id: int, package: Package, start_date: date) -> Subscription:
    """New subscription for one package period starting on ``start_date``."""
    return Subscription(
        agency_id=agency_id,
        package_id=package.id,
        start_date=start_date,
        end_date=add_months(start_date, package.period_in_months),
        cost=package.cost,
    )


async def current_package(db: AsyncSession, agency_id: int) -> Package:
    """Package of the agency's running subscription, used to enforce its limits."""
    result = await db.execute(
        select(Package)
        .join(Subscription, Subscription.package_id == Package.id)
        .join(Agency, Agency.current_subscription_id == Subscription.id)
        .where(Agency.id == agency_id)
    )
    package = result.scalar_one_or_none()
    if package is None:
        raise SubscriptionExpiredError("Agency has no active subscription")
    return package


class SubscriptionService:
    """Service for agency subscriptions and their invoices."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)
        self.numbers = DocumentNumberGenerator(db)

    async def _get_package(self, package_id: int) -> Package:
        result = await self.db.execute(select(Package).where(Package.id == package_id))
        package = result.scalar_one_or_none()
        if not package:
            raise NotFoundError("Package", package_id)
        return package

    async def issue_invoice_number(self, subscription: Subscription) -> None:
        """Attach a SUB/ invoice number once; later calls keep the first number."""
        if subscription.invoice_number is None:
            subscription.invoice_number = await self.numbers.generate(
                DocumentSeries.SUBSCRIPTION_INVOICE
            )
        subscription.invoice_date = date.today()

    async def renew(self, agency_id: int, package_id: int, renewed_by_id: int) -> Subscription:
        """
        Renew an agency's subscription.

        The new period starts the day after the current one ends, lasts the
        package period and costs the package's current price. It becomes the
        agency's current subscription.
        """
        result = await self.db.execute(
            select(Agency)
            .where(Agency.id == agency_id)
            .options(selectinload(Agency.current_subscription))
        )
        agency = result.scalar_one_or_none()
        if not agency:
            raise NotFoundError("Agency", agency_id)
        if agency.current_subscription is None:
            raise AppException(
                "No current subscription exists for this agency. Cannot renew.",
                status_code=400,
            )

        package = await self._get_package(package_id)
        start_date = agency.current_subscription.end_date + timedelta(days=1)

        subscription = build_subscription(agency.id, package, start_date)
        await self.issue_invoice_number(subscription)
        self.db.add(subscription)
        await self.db.flush()

        agency.current_subscription = subscription

        await self.audit.log(
            action=AuditAction.RENEW_SUBSCRIPTION,
            entity_type="Subscription",
            entity_id=subscription.id,
            user_id=renewed_by_id,
            agency_id=agency.id,
            entity_identifier=subscription.invoice_number,
            new_values={
                "package_id": package.id,
                "start_date": subscription.start_date,
                "end_date": subscription.end_date,
                "cost": subscription.cost,
            },
        )

        await self.db.commit()
        logger.info(
            "Agency %s renewed to %s (%s to %s)",
            agency.id,
            package.package_name,
            subscription.start_date,
            subscription.end_date,
        )
        return await self.get_subscription_by_id(subscription.id)

    async def get_subscription_by_id(self, subscription_id: int) -> Subscription:
        """Get subscription with agency and package loaded."""
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.id == subscription_id)
            .options(selectinload(Subscription.agency), selectinload(Subscription.package))
            .execution_options(populate_existing=True)
        )
        subscription = result.scalar_one_or_none()
        if not subscription:
            raise NotFoundError("Subscription", subscription_id)
        return subscription

    async def list_for_agency(self, agency_id: int) -> list[Subscription]:
        """Subscription history of an agency, oldest first."""
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.agency_id == agency_id)
            .options(selectinload(Subscription.package))
            .order_by(Subscription.start_date)
        )
        return list(result.scalars().all())

    async def prepare_invoice(self, subscription_id: int, user) -> Subscription:
        """Load a subscription for its invoice, numbering it on first issue.

        Agency admins may only fetch invoices of their own agency.
        """
        subscription = await self.get_subscription_by_id(subscription_id)
        if not user.is_super_admin and subscription.agency_id != user.agency_id:
            raise AuthorizationError("Not authorized to view this invoice")

        first_issue = subscription.invoice_number is None
        await self.issue_invoice_number(subscription)
        if first_issue:
            await self.audit.log(
                action=AuditAction.ISSUE_INVOICE,
                entity_type="Subscription",
                entity_id=subscription.id,
                user_id=user.id,
                agency_id=subscription.agency_id,
                entity_identifier=subscription.invoice_number,
            )
        await self.db.commit()
        return subscription
