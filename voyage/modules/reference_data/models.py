"""Name-only reference data kept per agency."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from voyage.core.database.base import AgencyScopedModel


class NamedReference(AgencyScopedModel):
    """A single ``name`` column, unique within the agency."""

    __abstract__ = True

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    @declared_attr.directive
    def __table_args__(cls):
        return (
            UniqueConstraint("agency_id", "name", name=f"uq_{cls.__tablename__}_agency_name"),
        )


class Bank(NamedReference):
    __tablename__ = "banks"


class Sector(NamedReference):
    __tablename__ = "sectors"


class Service(NamedReference):
    """Travel service offered by the agency (visa, insurance, forex...)."""

    __tablename__ = "services"


class Fair(NamedReference):
    """Trade fair or event the agency organises travel to."""

    __tablename__ = "fairs"


class Vehicle(NamedReference):
    __tablename__ = "vehicles"


class Accommodation(NamedReference):
    """Room or accommodation type used on hotel bookings."""

    __tablename__ = "accommodations"
