"""Agency (tenant) model."""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import BaseModel


class Agency(BaseModel):
    """A travel agency using the platform. Almost every other row belongs to one."""

    __tablename__ = "agencies"

    business_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    address_line1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    pincode: Mapped[str] = mapped_column(String(10), nullable=False)
    contact_person_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_person_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    contact_person_email: Mapped[str] = mapped_column(String(255), nullable=False)
    gstin: Mapped[str | None] = mapped_column(String(15), nullable=True)
    letterhead: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Cycle with subscriptions.agency_id, created after both tables
    current_subscription_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey(
            "subscriptions.id",
            use_alter=True,
            name="fk_agencies_current_subscription_id",
            ondelete="SET NULL",
        ),
        nullable=True,
    )

    current_subscription: Mapped["Subscription | None"] = relationship(
        "Subscription", foreign_keys=[current_subscription_id], post_update=True
    )
    subscriptions: Mapped[list["Subscription"]] = relationship(
        "Subscription",
        back_populates="agency",
        foreign_keys="Subscription.agency_id",
        order_by="Subscription.start_date",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    users: Mapped[list["User"]] = relationship("User", back_populates="agency")
    branches: Mapped[list["Branch"]] = relationship("Branch", back_populates="agency")


# Import at the end to avoid circular imports
from voyage.modules.subscriptions.models import Subscription
from voyage.core.auth.models import User
from voyage.modules.branches.models import Branch
