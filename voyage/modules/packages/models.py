"""Subscription package model."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from voyage.core.database.base import BaseModel


class Package(BaseModel):
    """Subscription plan sold to agencies: limits, duration and price."""

    __tablename__ = "packages"

    package_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    number_of_branches: Mapped[int] = mapped_column(Integer, nullable=False)
    users_per_branch: Mapped[int] = mapped_column(Integer, nullable=False)
    period_in_months: Mapped[int] = mapped_column(Integer, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
