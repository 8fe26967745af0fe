"""Schemas for Branches module."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class BranchCreate(BaseModel):
    branch_name: str = Field(..., min_length=1, max_length=200)
    address: str | None = Field(None, max_length=500)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: EmailStr | None = None
    contact_mobile: str | None = Field(None, max_length=20)


class BranchUpdate(BaseModel):
    branch_name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, max_length=500)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: EmailStr | None = None
    contact_mobile: str | None = Field(None, max_length=20)


class BranchResponse(BaseModel):
    id: int
    agency_id: int
    branch_name: str
    address: str | None
    contact_name: str | None
    contact_email: str | None
    contact_mobile: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
