"""Tour model."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class Tour(AgencyScopedModel):
    """Tour product that enquiries and bookings are made for."""

    __tablename__ = "tours"

    tour_title: Mapped[str] = mapped_column(String(200), nullable=False)
    tour_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    destination: Mapped[str | None] = mapped_column(String(200), nullable=True)
    days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nights: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sector_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("sectors.id"), nullable=True, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    sector: Mapped["Sector | None"] = relationship("Sector")

    __table_args__ = (
        UniqueConstraint("agency_id", "tour_title", name="uq_tours_agency_title"),
    )


# Import at the end to avoid circular imports
from voyage.modules.reference_data.models import Sector
