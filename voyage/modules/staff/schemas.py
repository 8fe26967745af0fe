"""Schemas for Staff module."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.core.auth.models import UserRole

STAFF_ROLES = (UserRole.ADMIN, UserRole.BRANCH_ADMIN, UserRole.USER)


def _staff_role(v: UserRole | None) -> UserRole | None:
    if v is not None and v not in STAFF_ROLES:
        raise ValueError("Role must be one of: admin, branch_admin, user")
    return v


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.USER
    branch_id: int | None = None
    communication_email: EmailStr | None = None
    mobile1: str | None = Field(None, max_length=20)
    mobile2: str | None = Field(None, max_length=20)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        return _staff_role(v)


class StaffUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    role: UserRole | None = None
    branch_id: int | None = None
    communication_email: EmailStr | None = None
    mobile1: str | None = Field(None, max_length=20)
    mobile2: str | None = Field(None, max_length=20)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole | None) -> UserRole | None:
        return _staff_role(v)


class PasswordChange(BaseModel):
    password: str = Field(..., min_length=6, max_length=128)


class StatusUpdate(BaseModel):
    is_active: bool


class StaffBranch(BaseModel):
    id: int
    branch_name: str

    model_config = {"from_attributes": True}


class StaffResponse(BaseModel):
    id: int
    agency_id: int | None
    branch_id: int | None
    name: str
    email: str
    communication_email: str | None
    mobile1: str | None
    mobile2: str | None
    role: str
    is_active: bool
    last_login_at: datetime | None
    branch: StaffBranch | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
