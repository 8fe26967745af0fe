"""Schemas for Agencies module."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.modules.subscriptions.schemas import SubscriptionResponse
from voyage.shared.utils.validators import validate_gstin


class AgencyFields(BaseModel):
    business_name: str = Field(..., min_length=1, max_length=200)
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    state: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=1, max_length=10)
    contact_person_name: str = Field(..., min_length=1, max_length=200)
    contact_person_phone: str = Field(..., min_length=1, max_length=20)
    contact_person_email: EmailStr
    gstin: str | None = None
    letterhead: str | None = Field(None, max_length=255)
    logo: str | None = Field(None, max_length=255)

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str | None) -> str | None:
        return validate_gstin(v)


class AgencySubscriptionCreate(BaseModel):
    package_id: int
    start_date: date


class AgencyAdminCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class AgencyCreate(AgencyFields):
    """Agency with its first subscription and admin user."""

    subscription: AgencySubscriptionCreate
    user: AgencyAdminCreate


class AgencyUpdate(BaseModel):
    """Schema for updating agency details."""

    business_name: str | None = Field(None, min_length=1, max_length=200)
    address_line1: str | None = Field(None, min_length=1, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    state: str | None = Field(None, min_length=1, max_length=100)
    city: str | None = Field(None, min_length=1, max_length=100)
    pincode: str | None = Field(None, min_length=1, max_length=10)
    contact_person_name: str | None = Field(None, min_length=1, max_length=200)
    contact_person_phone: str | None = Field(None, min_length=1, max_length=20)
    contact_person_email: EmailStr | None = None
    gstin: str | None = None
    letterhead: str | None = Field(None, max_length=255)
    logo: str | None = Field(None, max_length=255)

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str | None) -> str | None:
        return validate_gstin(v)


class AgencyUserSummary(BaseModel):
    id: int
    name: str
    email: str
    role: str
    is_active: bool

    model_config = {"from_attributes": True}


class AgencyResponse(BaseModel):
    """Agency with its current subscription."""

    id: int
    business_name: str
    address_line1: str
    address_line2: str | None
    state: str
    city: str
    pincode: str
    contact_person_name: str
    contact_person_phone: str
    contact_person_email: str
    gstin: str | None
    letterhead: str | None
    logo: str | None
    current_subscription: SubscriptionResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AgencyDetailResponse(AgencyResponse):
    """Agency with users and subscription history."""

    users: list[AgencyUserSummary] = []
    subscriptions: list[SubscriptionResponse] = []
