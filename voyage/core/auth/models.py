from datetime import datetime
from enum import StrEnum

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import BaseModel


class UserRole(StrEnum):
    """User roles in the system."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    BRANCH_ADMIN = "branch_admin"
    USER = "user"


ROLE_LABELS: dict[UserRole, str] = {
    UserRole.SUPER_ADMIN: "Super Admin",
    UserRole.ADMIN: "Admin",
    UserRole.BRANCH_ADMIN: "Branch Admin",
    UserRole.USER: "User",
}


class User(BaseModel):
    """
    Platform user.

    Super admins run the platform and have no agency. Every other user is staff
    of exactly one agency and, except for the agency admin, of one branch.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    communication_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mobile1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    mobile2: Mapped[str | None] = mapped_column(String(20), nullable=True)

    role: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    agency_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("agencies.id"), nullable=True, index=True
    )
    branch_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("branches.id"), nullable=True, index=True
    )

    agency: Mapped["Agency | None"] = relationship("Agency", back_populates="users")
    branch: Mapped["Branch | None"] = relationship("Branch", back_populates="users")

    def has_role(self, *roles: UserRole) -> bool:
        """Check if user has any of the specified roles."""
        return self.role in [r.value for r in roles]

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value

    @property
    def is_agency_admin(self) -> bool:
        """Agency-wide admin: sees every branch and picks the branch on bookings."""
        return self.role == UserRole.ADMIN.value

    @property
    def branch_scope(self) -> int | None:
        """Branch that limits what this user sees, or None for agency-wide access."""
        if self.is_agency_admin:
            return None
        return self.branch_id


# Import at the end to avoid circular imports
from voyage.modules.agencies.models import Agency
from voyage.modules.branches.models import Branch
