"""Agency reference data: locations, banks and lookups, hotels, agents, tours, clients

Revision ID: 002_reference_data
Revises: 001_platform
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002_reference_data"
down_revision: Union[str, None] = "001_platform"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NAMED_REFERENCES = ("banks", "sectors", "services", "fairs", "vehicles", "accommodations")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _agency_owned(table: str) -> list:
    """id, agency_id and timestamps of a table owned by an agency."""
    return [
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("agency_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agency_id"], ["agencies.id"], name=f"fk_{table}_agency_id"),
    ]


def upgrade() -> None:
    # Locations
    op.create_table(
        "countries",
        *_agency_owned("countries"),
        sa.Column("country_name", sa.String(100), nullable=False),
        sa.UniqueConstraint("agency_id", "country_name", name="uq_countries_agency_name"),
    )
    op.create_table(
        "states",
        *_agency_owned("states"),
        sa.Column("country_id", sa.BigInteger(), sa.ForeignKey("countries.id"), nullable=False),
        sa.Column("state_name", sa.String(100), nullable=False),
        sa.UniqueConstraint("country_id", "state_name", name="uq_states_country_name"),
    )
    op.create_index("ix_states_country_id", "states", ["country_id"])
    op.create_table(
        "cities",
        *_agency_owned("cities"),
        sa.Column("state_id", sa.BigInteger(), sa.ForeignKey("states.id"), nullable=False),
        sa.Column("city_name", sa.String(100), nullable=False),
        sa.UniqueConstraint("state_id", "city_name", name="uq_cities_state_name"),
    )
    op.create_index("ix_cities_state_id", "cities", ["state_id"])

    # Name-only lookups
    for table in NAMED_REFERENCES:
        op.create_table(
            table,
            *_agency_owned(table),
            sa.Column("name", sa.String(200), nullable=False),
            sa.UniqueConstraint("agency_id", "name", name=f"uq_{table}_agency_name"),
        )

    op.create_table(
        "hotels",
        *_agency_owned("hotels"),
        sa.Column("hotel_name", sa.String(200), nullable=False),
        sa.Column("hotel_address_line1", sa.String(255), nullable=True),
        sa.Column("hotel_address_line2", sa.String(255), nullable=True),
        sa.Column("hotel_address_line3", sa.String(255), nullable=True),
        sa.Column("hotel_pincode", sa.String(10), nullable=True),
        sa.Column("hotel_country_id", sa.BigInteger(), sa.ForeignKey("countries.id"), nullable=True),
        sa.Column("hotel_state_id", sa.BigInteger(), sa.ForeignKey("states.id"), nullable=True),
        sa.Column("hotel_city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("office_address_line1", sa.String(255), nullable=True),
        sa.Column("office_address_line2", sa.String(255), nullable=True),
        sa.Column("office_address_line3", sa.String(255), nullable=True),
        sa.Column("office_pincode", sa.String(10), nullable=True),
        sa.Column("office_country_id", sa.BigInteger(), sa.ForeignKey("countries.id"), nullable=True),
        sa.Column("office_state_id", sa.BigInteger(), sa.ForeignKey("states.id"), nullable=True),
        sa.Column("office_city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("contact_person", sa.String(200), nullable=True),
        sa.Column("hotel_contact_no1", sa.String(20), nullable=True),
        sa.Column("hotel_contact_no2", sa.String(20), nullable=True),
        sa.Column("office_contact_no1", sa.String(20), nullable=True),
        sa.Column("office_contact_no2", sa.String(20), nullable=True),
        sa.Column("email1", sa.String(255), nullable=True),
        sa.Column("email2", sa.String(255), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        sa.Column("bank_name1", sa.String(200), nullable=True),
        sa.Column("bank_account_number1", sa.String(50), nullable=True),
        sa.Column("branch1", sa.String(200), nullable=True),
        sa.Column("beneficiary_name1", sa.String(200), nullable=True),
        sa.Column("ifsc_code1", sa.String(11), nullable=True),
        sa.Column("swift_code1", sa.String(11), nullable=True),
        sa.Column("bank_name2", sa.String(200), nullable=True),
        sa.Column("bank_account_number2", sa.String(50), nullable=True),
        sa.Column("branch2", sa.String(200), nullable=True),
        sa.Column("beneficiary_name2", sa.String(200), nullable=True),
        sa.Column("ifsc_code2", sa.String(11), nullable=True),
        sa.Column("swift_code2", sa.String(11), nullable=True),
        sa.UniqueConstraint("agency_id", "hotel_name", "hotel_city_id", name="uq_hotels_agency_name_city"),
    )
    op.create_index("ix_hotels_hotel_city_id", "hotels", ["hotel_city_id"])

    op.create_table(
        "agents",
        *_agency_owned("agents"),
        sa.Column("agent_name", sa.String(200), nullable=False),
        sa.Column("address_line1", sa.String(255), nullable=True),
        sa.Column("address_line2", sa.String(255), nullable=True),
        sa.Column("address_line3", sa.String(255), nullable=True),
        sa.Column("country_id", sa.BigInteger(), sa.ForeignKey("countries.id"), nullable=True),
        sa.Column("state_id", sa.BigInteger(), sa.ForeignKey("states.id"), nullable=True),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("pincode", sa.String(10), nullable=True),
        sa.Column("contact_person_name", sa.String(200), nullable=True),
        sa.Column("mobile1", sa.String(20), nullable=True),
        sa.Column("mobile2", sa.String(20), nullable=True),
        sa.Column("email1", sa.String(255), nullable=True),
        sa.Column("email2", sa.String(255), nullable=True),
        sa.Column("website_name", sa.String(255), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        sa.Column("landline_number1", sa.String(20), nullable=True),
        sa.Column("landline_number2", sa.String(20), nullable=True),
        sa.Column("bank1_id", sa.BigInteger(), sa.ForeignKey("banks.id"), nullable=True),
        sa.Column("bank_account_number1", sa.String(50), nullable=True),
        sa.Column("branch1", sa.String(200), nullable=True),
        sa.Column("beneficiary_name1", sa.String(200), nullable=True),
        sa.Column("ifsc_code1", sa.String(11), nullable=True),
        sa.Column("swift_code1", sa.String(11), nullable=True),
        sa.Column("bank2_id", sa.BigInteger(), sa.ForeignKey("banks.id"), nullable=True),
        sa.Column("bank_account_number2", sa.String(50), nullable=True),
        sa.Column("branch2", sa.String(200), nullable=True),
        sa.Column("beneficiary_name2", sa.String(200), nullable=True),
        sa.Column("ifsc_code2", sa.String(11), nullable=True),
        sa.Column("swift_code2", sa.String(11), nullable=True),
        sa.UniqueConstraint("agency_id", "agent_name", name="uq_agents_agency_name"),
    )

    op.create_table(
        "tours",
        *_agency_owned("tours"),
        sa.Column("tour_title", sa.String(200), nullable=False),
        sa.Column("tour_type", sa.String(50), nullable=True),
        sa.Column("destination", sa.String(200), nullable=True),
        sa.Column("days", sa.Integer(), nullable=True),
        sa.Column("nights", sa.Integer(), nullable=True),
        sa.Column("sector_id", sa.BigInteger(), sa.ForeignKey("sectors.id"), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.UniqueConstraint("agency_id", "tour_title", name="uq_tours_agency_title"),
    )
    op.create_index("ix_tours_sector_id", "tours", ["sector_id"])

    op.create_table(
        "clients",
        *_agency_owned("clients"),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("marriage_date", sa.Date(), nullable=True),
        sa.Column("refer_by", sa.String(200), nullable=True),
        sa.Column("address1", sa.String(255), nullable=True),
        sa.Column("address2", sa.String(255), nullable=True),
        sa.Column("state_id", sa.BigInteger(), sa.ForeignKey("states.id"), nullable=True),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("pincode", sa.String(10), nullable=True),
        sa.Column("mobile1", sa.String(20), nullable=False),
        sa.Column("mobile2", sa.String(20), nullable=True),
        sa.Column("gstin", sa.String(15), nullable=True),
        sa.Column("passport_no", sa.String(20), nullable=True),
        sa.Column("pan_no", sa.String(10), nullable=True),
        sa.Column("aadhar_no", sa.String(12), nullable=True),
    )
    op.create_index("ix_clients_client_name", "clients", ["client_name"])
    op.create_index("ix_clients_mobile1", "clients", ["mobile1"])

    op.create_table(
        "family_friends",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("relation", sa.String(50), nullable=True),
        sa.Column("aadhar_no", sa.String(12), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("anniversary_date", sa.Date(), nullable=True),
        sa.Column("food_type", sa.String(20), nullable=True),
        sa.Column("mobile", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_family_friends_client_id", "family_friends", ["client_id"])

    for table in ("countries", "states", "cities", *NAMED_REFERENCES, "hotels", "agents", "tours", "clients"):
        op.create_index(f"ix_{table}_agency_id", table, ["agency_id"])


def downgrade() -> None:
    op.drop_table("family_friends")
    op.drop_table("clients")
    op.drop_table("tours")
    op.drop_table("agents")
    op.drop_table("hotels")
    for table in reversed(NAMED_REFERENCES):
        op.drop_table(table)
    op.drop_table("cities")
    op.drop_table("states")
    op.drop_table("countries")
