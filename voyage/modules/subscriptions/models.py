"""Subscription model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import BaseModel


class Subscription(BaseModel):
    """One paid period of a package for an agency."""

    __tablename__ = "subscriptions"

    agency_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    package_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("packages.id"), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    invoice_number: Mapped[str | None] = mapped_column(String(30), nullable=True, unique=True)
    invoice_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    agency: Mapped["Agency"] = relationship(
        "Agency", back_populates="subscriptions", foreign_keys=[agency_id]
    )
    package: Mapped["Package"] = relationship("Package")

    def is_running(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date


# Import at the end to avoid circular imports
from voyage.modules.agencies.models import Agency
from voyage.modules.packages.models import Package
