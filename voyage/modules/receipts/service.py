"""Service for Receipts module: booking receipts and their tax invoices."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.documents import DocumentNumberGenerator, DocumentSeries
from voyage.core.exceptions import NotFoundError
from voyage.modules.bookings.models import Booking
from voyage.modules.bookings.service import get_visible_booking, visible_bookings
from voyage.modules.clients.models import Client
from voyage.modules.group_bookings.models import GroupBooking, GroupClientBooking
from voyage.modules.group_bookings.service import GroupBookingService, visible_group_bookings
from voyage.modules.receipts.models import BookingReceipt
from voyage.modules.receipts.schemas import ReceiptCreate, ReceiptFields, ReceiptUpdate
from voyage.modules.reference_data.models import Bank
from voyage.shared.utils.money import percent_of, round_money
from voyage.shared.utils.query import ensure_references

logger = logging.getLogger(__name__)

TAXES = ("cgst", "sgst", "igst")


def compute_taxes(data: ReceiptFields) -> dict[str, Decimal | None]:
    """
    Tax and total columns for a receipt.

    Non-GST receipts carry no tax. For GST receipts a missing amount is
    derived from its percentage of ``amount``.
    """
    amount = round_money(data.amount)
    values: dict[str, Decimal | None] = {}
    for tax in TAXES:
        percent = getattr(data, f"{tax}_percent") if data.is_gst else None
        tax_amount = getattr(data, f"{tax}_amount") if data.is_gst else None
        if tax_amount is None:
            tax_amount = percent_of(amount, percent)
        values[f"{tax}_percent"] = percent
        values[f"{tax}_amount"] = round_money(tax_amount)
    values["total_amount"] = amount + sum(values[f"{tax}_amount"] for tax in TAXES)
    return values


def _visible_receipt_condition(user: User):
    bookings = visible_bookings(user).with_only_columns(Booking.id)
    group_client_bookings = select(GroupClientBooking.id).where(
        GroupClientBooking.group_booking_id.in_(
            visible_group_bookings(user).with_only_columns(GroupBooking.id)
        )
    )
    return or_(
        BookingReceipt.booking_id.in_(bookings),
        BookingReceipt.group_client_booking_id.in_(group_client_bookings),
    )


class ReceiptService:
    """Service for money received against bookings and group client bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)
        self.numbers = DocumentNumberGenerator(db)

    async def create_receipt(self, data: ReceiptCreate, user: User) -> BookingReceipt:
        """Record a receipt; its number is allocated in the same transaction."""
        if data.booking_id is not None:
            await get_visible_booking(self.db, user, data.booking_id)
        else:
            await GroupBookingService(self.db).get_client_booking(data.group_client_booking_id, user)
        await ensure_references(self.db, user.agency_id, {"bank_id": (Bank, data.bank_id)})

        values = data.model_dump()
        values.update(compute_taxes(data))
        receipt = BookingReceipt(
            agency_id=user.agency_id,
            receipt_number=await self.numbers.generate(
                DocumentSeries.RECEIPT, user.agency_id, on=data.receipt_date
            ),
            **values,
        )
        receipt.payment_mode = data.payment_mode.value
        self.db.add(receipt)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="BookingReceipt",
            entity_id=receipt.id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=receipt.receipt_number,
            new_values={"amount": receipt.amount, "total_amount": receipt.total_amount},
        )
        await self.db.commit()
        logger.info("Receipt %s recorded for agency %s", receipt.receipt_number, user.agency_id)
        return await self.get_receipt(receipt.id, user)

    async def get_receipt(self, receipt_id: int, user: User) -> BookingReceipt:
        result = await self.db.execute(
            select(BookingReceipt)
            .where(BookingReceipt.id == receipt_id, _visible_receipt_condition(user))
            .options(selectinload(BookingReceipt.bank))
            .execution_options(populate_existing=True)
        )
        receipt = result.scalar_one_or_none()
        if not receipt:
            raise NotFoundError("Booking receipt", receipt_id)
        return receipt

    async def list_booking_receipts(self, booking_id: int, user: User) -> list[BookingReceipt]:
        await get_visible_booking(self.db, user, booking_id)
        return await self._list(BookingReceipt.booking_id == booking_id)

    async def list_group_client_receipts(
        self, group_client_booking_id: int, user: User
    ) -> list[BookingReceipt]:
        await GroupBookingService(self.db).get_client_booking(group_client_booking_id, user)
        return await self._list(BookingReceipt.group_client_booking_id == group_client_booking_id)

    async def _list(self, condition) -> list[BookingReceipt]:
        result = await self.db.execute(
            select(BookingReceipt)
            .where(condition)
            .options(selectinload(BookingReceipt.bank))
            .order_by(BookingReceipt.receipt_date, BookingReceipt.id)
        )
        return list(result.scalars().all())

    async def update_receipt(self, receipt_id: int, data: ReceiptUpdate, user: User) -> BookingReceipt:
        receipt = await self.get_receipt(receipt_id, user)
        await ensure_references(self.db, user.agency_id, {"bank_id": (Bank, data.bank_id)})

        old_values = {"amount": receipt.amount, "total_amount": receipt.total_amount}
        values = data.model_dump()
        values.update(compute_taxes(data))
        for field, value in values.items():
            setattr(receipt, field, value)
        receipt.payment_mode = data.payment_mode.value

        await self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="BookingReceipt",
            entity_id=receipt_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=receipt.receipt_number,
            old_values=old_values,
            new_values={"amount": receipt.amount, "total_amount": receipt.total_amount},
        )
        await self.db.commit()
        return await self.get_receipt(receipt_id, user)

    async def delete_receipt(self, receipt_id: int, user: User) -> None:
        receipt = await self.get_receipt(receipt_id, user)
        await self.db.delete(receipt)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="BookingReceipt",
            entity_id=receipt_id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=receipt.receipt_number,
        )
        await self.db.commit()

    async def prepare_invoice(self, receipt_id: int, user: User) -> BookingReceipt:
        """Load a receipt for its tax invoice, numbering it on first issue.

        The invoice number is kept across later downloads; the invoice date
        is stamped on every download.
        """
        receipt = await self.get_receipt(receipt_id, user)

        first_issue = receipt.invoice_number is None
        if first_issue:
            receipt.invoice_number = await self.numbers.generate(
                DocumentSeries.RECEIPT_INVOICE, user.agency_id
            )
        receipt.invoice_date = date.today()
        if first_issue:
            await self.audit.log(
                action=AuditAction.ISSUE_INVOICE,
                entity_type="BookingReceipt",
                entity_id=receipt.id,
                user_id=user.id,
                agency_id=user.agency_id,
                entity_identifier=receipt.invoice_number,
            )
        await self.db.commit()

        result = await self.db.execute(
            select(BookingReceipt)
            .where(BookingReceipt.id == receipt_id)
            .options(
                selectinload(BookingReceipt.agency),
                selectinload(BookingReceipt.booking)
                .selectinload(Booking.client)
                .selectinload(Client.city),
                selectinload(BookingReceipt.group_client_booking)
                .selectinload(GroupClientBooking.client)
                .selectinload(Client.city),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
