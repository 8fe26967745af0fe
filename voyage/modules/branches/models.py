"""Branch model."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class Branch(AgencyScopedModel):
    """Office of an agency. Staff and bookings are attached to a branch."""

    __tablename__ = "branches"

    branch_name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)

    agency: Mapped["Agency"] = relationship("Agency", back_populates="branches")
    users: Mapped[list["User"]] = relationship("User", back_populates="branch")

    __table_args__ = (
        UniqueConstraint("agency_id", "branch_name", name="uq_branches_agency_name"),
    )


# Import at the end to avoid circular imports
from voyage.modules.agencies.models import Agency
from voyage.core.auth.models import User
