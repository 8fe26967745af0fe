"""BookingReceipt model."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class PaymentMode(StrEnum):
    CASH = "Cash"
    CHEQUE = "Cheque"
    NEFT_IMPS = "NEFT/IMPS"
    UPI = "UPI"
    CARD = "Card"


class BookingReceipt(AgencyScopedModel):
    """
    Money received against a booking or a group client booking.

    GST receipts carry tax amounts and can be issued as a tax invoice; the
    invoice number is allocated the first time the invoice is produced.
    """

    __tablename__ = "booking_receipts"

    booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("bookings.id"), nullable=True, index=True
    )
    group_client_booking_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("group_client_bookings.id"), nullable=True, index=True
    )

    receipt_number: Mapped[str] = mapped_column(String(30), nullable=False)
    receipt_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_mode: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    bank_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("banks.id"), nullable=True)
    cheque_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    cheque_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    utr_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    neft_imps_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Tax
    is_gst: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cgst_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    cgst_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    sgst_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    sgst_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    igst_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    igst_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    invoice_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    invoice_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    agency: Mapped["Agency"] = relationship("Agency")
    booking: Mapped["Booking | None"] = relationship("Booking")
    group_client_booking: Mapped["GroupClientBooking | None"] = relationship("GroupClientBooking")
    bank: Mapped["Bank | None"] = relationship("Bank")

    __table_args__ = (
        UniqueConstraint("agency_id", "receipt_number", name="uq_booking_receipts_agency_number"),
        UniqueConstraint("agency_id", "invoice_number", name="uq_booking_receipts_agency_invoice"),
    )

    @property
    def client(self) -> "Client":
        """Client billed by this receipt; the parent must be loaded with its client."""
        if self.booking is not None:
            return self.booking.client
        return self.group_client_booking.client


# Import at the end to avoid circular imports
from voyage.modules.agencies.models import Agency
from voyage.modules.bookings.models import Booking
from voyage.modules.clients.models import Client
from voyage.modules.group_bookings.models import GroupClientBooking
from voyage.modules.reference_data.models import Bank
