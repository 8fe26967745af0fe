"""Agent model."""

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class Agent(AgencyScopedModel):
    """Local agent or transporter, typically the supplier on vehicle bookings."""

    __tablename__ = "agents"

    agent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    address_line1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_line3: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("countries.id"), nullable=True)
    state_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("states.id"), nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)

    contact_person_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    mobile1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    mobile2: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    landline_number1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    landline_number2: Mapped[str | None] = mapped_column(String(20), nullable=True)

    bank1_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("banks.id"), nullable=True)
    bank_account_number1: Mapped[str | None] = mapped_column(String(50), nullable=True)
    branch1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    beneficiary_name1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ifsc_code1: Mapped[str | None] = mapped_column(String(11), nullable=True)
    swift_code1: Mapped[str | None] = mapped_column(String(11), nullable=True)
    bank2_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("banks.id"), nullable=True)
    bank_account_number2: Mapped[str | None] = mapped_column(String(50), nullable=True)
    branch2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    beneficiary_name2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ifsc_code2: Mapped[str | None] = mapped_column(String(11), nullable=True)
    swift_code2: Mapped[str | None] = mapped_column(String(11), nullable=True)

    city: Mapped["City | None"] = relationship("City")

    __table_args__ = (
        UniqueConstraint("agency_id", "agent_name", name="uq_agents_agency_name"),
    )


# Import at the end to avoid circular imports
from voyage.modules.locations.models import City
