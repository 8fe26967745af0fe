"""Country, State and City models."""

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voyage.core.database.base import AgencyScopedModel


class Country(AgencyScopedModel):
    __tablename__ = "countries"

    country_name: Mapped[str] = mapped_column(String(100), nullable=False)

    states: Mapped[list["State"]] = relationship("State", back_populates="country")

    __table_args__ = (
        UniqueConstraint("agency_id", "country_name", name="uq_countries_agency_name"),
    )


class State(AgencyScopedModel):
    __tablename__ = "states"

    country_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("countries.id"), nullable=False, index=True
    )
    state_name: Mapped[str] = mapped_column(String(100), nullable=False)

    country: Mapped["Country"] = relationship("Country", back_populates="states")
    cities: Mapped[list["City"]] = relationship("City", back_populates="state")

    __table_args__ = (
        UniqueConstraint("country_id", "state_name", name="uq_states_country_name"),
    )


class City(AgencyScopedModel):
    __tablename__ = "cities"

    state_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("states.id"), nullable=False, index=True
    )
    city_name: Mapped[str] = mapped_column(String(100), nullable=False)

    state: Mapped["State"] = relationship("State", back_populates="cities")

    __table_args__ = (
        UniqueConstraint("state_id", "city_name", name="uq_cities_state_name"),
    )
