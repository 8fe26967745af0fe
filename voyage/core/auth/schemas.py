from datetime import date, datetime

from pydantic import EmailStr, Field

from voyage.shared.schemas import BaseSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class TokenResponse(BaseSchema):
    """Token response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseSchema):
    """Refresh token request schema."""

    refresh_token: str


class UserResponse(BaseSchema):
    """User response schema."""

    id: int
    email: str
    name: str
    role: str
    is_active: bool
    agency_id: int | None
    branch_id: int | None
    last_login_at: datetime | None
    created_at: datetime


class LoginResponse(BaseSchema):
    """Login response with user and tokens."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class SubscriptionSummary(BaseSchema):
    start_date: date
    end_date: date
    package_name: str | None = None


class AgencySummary(BaseSchema):
    id: int
    business_name: str
    subscription: SubscriptionSummary | None = None


class ProfileResponse(UserResponse):
    """Current user with agency, branch and subscription summary."""

    branch_name: str | None = None
    agency: AgencySummary | None = None


class RoleResponse(BaseSchema):
    value: str
    label: str
