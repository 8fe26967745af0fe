"""Schemas for Subscriptions module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel


class SubscriptionRenew(BaseModel):
    """Schema for renewing an agency subscription."""

    agency_id: int
    package_id: int


class PackageSummary(BaseModel):
    id: int
    package_name: str
    period_in_months: int

    model_config = {"from_attributes": True}


class SubscriptionResponse(BaseModel):
    """Schema for subscription response."""

    id: int
    agency_id: int
    package_id: int
    package: PackageSummary | None = None
    start_date: date
    end_date: date
    cost: Decimal
    invoice_number: str | None
    invoice_date: date | None
    created_at: datetime

    model_config = {"from_attributes": True}
