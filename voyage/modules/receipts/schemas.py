"""Schemas for Receipts module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from voyage.modules.receipts.models import PaymentMode


class ReceiptFields(BaseModel):
    receipt_date: date = Field(default_factory=date.today)
    payment_mode: PaymentMode
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    bank_id: int | None = None
    cheque_date: date | None = None
    cheque_number: str | None = Field(None, max_length=20)
    utr_number: str | None = Field(None, max_length=50)
    neft_imps_number: str | None = Field(None, max_length=50)
    description: str | None = None

    is_gst: bool = False
    cgst_percent: Decimal | None = Field(None, ge=0, le=100)
    cgst_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    sgst_percent: Decimal | None = Field(None, ge=0, le=100)
    sgst_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    igst_percent: Decimal | None = Field(None, ge=0, le=100)
    igst_amount: Decimal | None = Field(None, ge=0, decimal_places=2)

    @model_validator(mode="after")
    def check_payment(self):
        if self.payment_mode == PaymentMode.CHEQUE and not self.cheque_number:
            raise ValueError("cheque_number is required for cheque payments")
        intra_state = self.cgst_percent or self.cgst_amount or self.sgst_percent or self.sgst_amount
        if self.is_gst and intra_state and (self.igst_percent or self.igst_amount):
            raise ValueError("Use either CGST and SGST or IGST, not both")
        return self


class ReceiptCreate(ReceiptFields):
    """Receipt against exactly one booking or group client booking."""

    booking_id: int | None = None
    group_client_booking_id: int | None = None

    @model_validator(mode="after")
    def check_parent(self):
        if (self.booking_id is None) == (self.group_client_booking_id is None):
            raise ValueError("Provide either booking_id or group_client_booking_id")
        return self


class ReceiptUpdate(ReceiptFields):
    """Replaces the payment details; taxes and total are recomputed."""


class ReceiptBank(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ReceiptResponse(BaseModel):
    id: int
    booking_id: int | None
    group_client_booking_id: int | None
    receipt_number: str
    receipt_date: date
    payment_mode: str
    amount: Decimal
    bank_id: int | None
    bank: ReceiptBank | None = None
    cheque_date: date | None
    cheque_number: str | None
    utr_number: str | None
    neft_imps_number: str | None
    description: str | None
    is_gst: bool
    cgst_percent: Decimal | None
    cgst_amount: Decimal
    sgst_percent: Decimal | None
    sgst_amount: Decimal
    igst_percent: Decimal | None
    igst_amount: Decimal
    total_amount: Decimal
    invoice_number: str | None
    invoice_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
