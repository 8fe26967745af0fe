"""Schemas for Packages module."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PackageCreate(BaseModel):
    """Schema for creating a package."""

    package_name: str = Field(..., min_length=1, max_length=100)
    number_of_branches: int = Field(..., ge=1)
    users_per_branch: int = Field(..., ge=1)
    period_in_months: int = Field(..., ge=1, le=120)
    cost: Decimal = Field(..., ge=0, decimal_places=2)


class PackageUpdate(BaseModel):
    """Schema for updating a package."""

    package_name: str | None = Field(None, min_length=1, max_length=100)
    number_of_branches: int | None = Field(None, ge=1)
    users_per_branch: int | None = Field(None, ge=1)
    period_in_months: int | None = Field(None, ge=1, le=120)
    cost: Decimal | None = Field(None, ge=0, decimal_places=2)


class PackageResponse(BaseModel):
    """Schema for package response."""

    id: int
    package_name: str
    number_of_branches: int
    users_per_branch: int
    period_in_months: int
    cost: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
