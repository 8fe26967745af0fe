"""Hotel model."""

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class Hotel(AgencyScopedModel):
    """Hotel the agency books rooms with, with its own and its sales office address."""

    __tablename__ = "hotels"

    hotel_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Hotel address
    hotel_address_line1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hotel_address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hotel_address_line3: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hotel_pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)
    hotel_country_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("countries.id"), nullable=True
    )
    hotel_state_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("states.id"), nullable=True
    )
    hotel_city_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("cities.id"), nullable=True, index=True
    )

    # Office address
    office_address_line1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    office_address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    office_address_line3: Mapped[str | None] = mapped_column(String(255), nullable=True)
    office_pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)
    office_country_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("countries.id"), nullable=True
    )
    office_state_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("states.id"), nullable=True
    )
    office_city_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("cities.id"), nullable=True
    )

    # Contacts
    contact_person: Mapped[str | None] = mapped_column(String(200), nullable=True)
    hotel_contact_no1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    hotel_contact_no2: Mapped[str | None] = mapped_column(String(20), nullable=True)
    office_contact_no1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    office_contact_no2: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)

    # Bank accounts
    bank_name1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    bank_account_number1: Mapped[str | None] = mapped_column(String(50), nullable=True)
    branch1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    beneficiary_name1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ifsc_code1: Mapped[str | None] = mapped_column(String(11), nullable=True)
    swift_code1: Mapped[str | None] = mapped_column(String(11), nullable=True)
    bank_name2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    bank_account_number2: Mapped[str | None] = mapped_column(String(50), nullable=True)
    branch2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    beneficiary_name2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ifsc_code2: Mapped[str | None] = mapped_column(String(11), nullable=True)
    swift_code2: Mapped[str | None] = mapped_column(String(11), nullable=True)

    hotel_city: Mapped["City | None"] = relationship("City", foreign_keys=[hotel_city_id])

    __table_args__ = (
        UniqueConstraint("agency_id", "hotel_name", "hotel_city_id", name="uq_hotels_agency_name_city"),
    )


# Import at the end to avoid circular imports
from voyage.modules.locations.models import City
