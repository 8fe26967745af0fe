"""Client and FamilyFriend models."""

from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel, BaseModel


class Client(AgencyScopedModel):
    """Customer of the agency."""

    __tablename__ = "clients"

    client_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    marriage_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    refer_by: Mapped[str | None] = mapped_column(String(200), nullable=True)

    address1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("states.id"), nullable=True)
    city_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("cities.id"), nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)

    mobile1: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    mobile2: Mapped[str | None] = mapped_column(String(20), nullable=True)

    gstin: Mapped[str | None] = mapped_column(String(15), nullable=True)
    passport_no: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pan_no: Mapped[str | None] = mapped_column(String(10), nullable=True)
    aadhar_no: Mapped[str | None] = mapped_column(String(12), nullable=True)

    city: Mapped["City | None"] = relationship("City")
    state: Mapped["State | None"] = relationship("State")
    family_friends: Mapped[list["FamilyFriend"]] = relationship(
        "FamilyFriend",
        back_populates="client",
        cascade="all, delete-orphan",
        order_by="FamilyFriend.id",
    )


class FamilyFriend(BaseModel):
    """Family member or friend travelling with a client."""

    __tablename__ = "family_friends"

    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    relation: Mapped[str | None] = mapped_column(String(50), nullable=True)
    aadhar_no: Mapped[str | None] = mapped_column(String(12), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    anniversary_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    food_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    client: Mapped["Client"] = relationship("Client", back_populates="family_friends")


# Import at the end to avoid circular imports
from voyage.modules.locations.models import City, State
