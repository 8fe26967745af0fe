"""Bookings: enquiries, follow-ups, hotel/journey/vehicle bookings, group bookings, receipts

Revision ID: 003_bookings
Revises: 002_reference_data
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003_bookings"
down_revision: Union[str, None] = "002_reference_data"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _agency_owned(table: str) -> list:
    return [
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("agency_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agency_id"], ["agencies.id"], name=f"fk_{table}_agency_id"),
    ]


def _itinerary(table: str, parent: str) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column(f"{parent}_id", sa.BigInteger(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("travel_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint([f"{parent}_id"], [f"{parent}s.id"], ondelete="CASCADE"),
    )
    op.create_index(f"ix_{table}_{parent}_id", table, [f"{parent}_id"])


def upgrade() -> None:
    # Enquiries and bookings
    op.create_table(
        "bookings",
        *_agency_owned("bookings"),
        sa.Column("booking_number", sa.String(30), nullable=False),
        sa.Column("booking_type", sa.String(20), nullable=False, server_default="Enquiry"),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("journey_date", sa.Date(), nullable=True),
        sa.Column("departure_date", sa.Date(), nullable=True),
        sa.Column("branch_id", sa.BigInteger(), sa.ForeignKey("branches.id"), nullable=False),
        sa.Column("client_id", sa.BigInteger(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("tour_id", sa.BigInteger(), sa.ForeignKey("tours.id"), nullable=True),
        sa.Column("budget_field", sa.String(100), nullable=True),
        sa.Column("number_of_adults", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("number_of_children_5_to_11", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("number_of_children_under_5", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("booking_detail", sa.Text(), nullable=True),
        sa.Column("is_journey", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_hotel", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_vehicle", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_package", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.UniqueConstraint("agency_id", "booking_number", name="uq_bookings_agency_number"),
    )
    op.create_index("ix_bookings_agency_id", "bookings", ["agency_id"])
    op.create_index("ix_bookings_booking_number", "bookings", ["booking_number"])
    op.create_index("ix_bookings_booking_type", "bookings", ["booking_type"])
    op.create_index("ix_bookings_booking_date", "bookings", ["booking_date"])
    op.create_index("ix_bookings_branch_id", "bookings", ["branch_id"])
    op.create_index("ix_bookings_client_id", "bookings", ["client_id"])
    op.create_index("ix_bookings_tour_id", "bookings", ["tour_id"])
    _itinerary("booking_details", "booking")

    # Group bookings
    op.create_table(
        "group_bookings",
        *_agency_owned("group_bookings"),
        sa.Column("group_booking_number", sa.String(30), nullable=False),
        sa.Column("group_booking_date", sa.Date(), nullable=False),
        sa.Column("journey_date", sa.Date(), nullable=True),
        sa.Column("branch_id", sa.BigInteger(), sa.ForeignKey("branches.id"), nullable=False),
        sa.Column("tour_id", sa.BigInteger(), sa.ForeignKey("tours.id"), nullable=True),
        sa.Column("booking_detail", sa.Text(), nullable=True),
        sa.Column("is_journey", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_hotel", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_vehicle", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.UniqueConstraint(
            "agency_id", "group_booking_number", name="uq_group_bookings_agency_number"
        ),
    )
    op.create_index("ix_group_bookings_agency_id", "group_bookings", ["agency_id"])
    op.create_index("ix_group_bookings_group_booking_number", "group_bookings", ["group_booking_number"])
    op.create_index("ix_group_bookings_branch_id", "group_bookings", ["branch_id"])
    op.create_index("ix_group_bookings_tour_id", "group_bookings", ["tour_id"])
    _itinerary("group_booking_details", "group_booking")

    op.create_table(
        "group_client_bookings",
        *_agency_owned("group_client_bookings"),
        sa.Column("group_booking_id", sa.BigInteger(), sa.ForeignKey("group_bookings.id"), nullable=False),
        sa.Column("client_id", sa.BigInteger(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("number_of_adults", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("number_of_children_5_to_11", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("number_of_children_under_5", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_member", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("tour_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_journey", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_hotel", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_vehicle", sa.Boolean(), nullable=False, server_default="false"),
    )
    op.create_index("ix_group_client_bookings_agency_id", "group_client_bookings", ["agency_id"])
    op.create_index(
        "ix_group_client_bookings_group_booking_id", "group_client_bookings", ["group_booking_id"]
    )
    op.create_index("ix_group_client_bookings_client_id", "group_client_bookings", ["client_id"])

    op.create_table(
        "group_client_members",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("group_client_booking_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("relation", sa.String(50), nullable=True),
        sa.Column("aadhar_no", sa.String(12), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("anniversary_date", sa.Date(), nullable=True),
        sa.Column("food_type", sa.String(20), nullable=True),
        sa.Column("mobile", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("passport_number", sa.String(20), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["group_client_booking_id"], ["group_client_bookings.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_group_client_members_group_client_booking_id",
        "group_client_members",
        ["group_client_booking_id"],
    )

    # Follow-ups
    op.create_table(
        "follow_ups",
        *_agency_owned("follow_ups"),
        sa.Column("booking_id", sa.BigInteger(), nullable=True),
        sa.Column("group_booking_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("follow_up_date", sa.Date(), nullable=False),
        sa.Column("next_follow_up_date", sa.Date(), nullable=True),
        sa.Column("remarks", sa.String(2000), nullable=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["group_booking_id"], ["group_bookings.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "(booking_id IS NULL) != (group_booking_id IS NULL)",
            name="ck_follow_ups_single_parent",
        ),
    )
    op.create_index("ix_follow_ups_agency_id", "follow_ups", ["agency_id"])
    op.create_index("ix_follow_ups_booking_id", "follow_ups", ["booking_id"])
    op.create_index("ix_follow_ups_group_booking_id", "follow_ups", ["group_booking_id"])
    op.create_index("ix_follow_ups_next_follow_up_date", "follow_ups", ["next_follow_up_date"])

    # Hotel bookings (HRV)
    op.create_table(
        "hotel_bookings",
        *_agency_owned("hotel_bookings"),
        sa.Column("booking_id", sa.BigInteger(), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("hrv_number", sa.String(30), nullable=False),
        sa.Column("hotel_booking_date", sa.Date(), nullable=True),
        sa.Column("party_coming_from", sa.String(200), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("nights", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("hotel_id", sa.BigInteger(), sa.ForeignKey("hotels.id"), nullable=False),
        sa.Column("plan", sa.String(20), nullable=True),
        sa.Column("rooms", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("accommodation_id", sa.BigInteger(), sa.ForeignKey("accommodations.id"), nullable=True),
        sa.Column("tariff_package", sa.String(200), nullable=True),
        sa.Column("accommodation_note", sa.Text(), nullable=True),
        sa.Column("extra_bed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("beds", sa.Integer(), nullable=True),
        sa.Column("extra_bed_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("booking_confirmed_by", sa.String(200), nullable=True),
        sa.Column("confirmation_number", sa.String(100), nullable=True),
        sa.Column("billing_instructions", sa.Text(), nullable=True),
        sa.Column("special_requirement", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("bill_description", sa.Text(), nullable=True),
        sa.UniqueConstraint("agency_id", "hrv_number", name="uq_hotel_bookings_agency_hrv"),
    )
    op.create_index("ix_hotel_bookings_agency_id", "hotel_bookings", ["agency_id"])
    op.create_index("ix_hotel_bookings_booking_id", "hotel_bookings", ["booking_id"])
    op.create_index("ix_hotel_bookings_hotel_id", "hotel_bookings", ["hotel_id"])

    # Journey bookings
    op.create_table(
        "journey_bookings",
        *_agency_owned("journey_bookings"),
        sa.Column("booking_id", sa.BigInteger(), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("from_place", sa.String(200), nullable=True),
        sa.Column("to_place", sa.String(200), nullable=True),
        sa.Column("journey_booking_date", sa.Date(), nullable=True),
        sa.Column("from_departure_date", sa.DateTime(), nullable=True),
        sa.Column("to_arrival_date", sa.DateTime(), nullable=True),
        sa.Column("food_type", sa.String(20), nullable=True),
        sa.Column("travel_class", sa.String(50), nullable=True),
        sa.Column("pnr_number", sa.String(50), nullable=True),
        sa.Column("train_name", sa.String(200), nullable=True),
        sa.Column("train_number", sa.String(20), nullable=True),
        sa.Column("bus_name", sa.String(200), nullable=True),
        sa.Column("flight_number", sa.String(20), nullable=True),
        sa.Column("bill_description", sa.Text(), nullable=True),
    )
    op.create_index("ix_journey_bookings_agency_id", "journey_bookings", ["agency_id"])
    op.create_index("ix_journey_bookings_booking_id", "journey_bookings", ["booking_id"])

    # Vehicle bookings (vehicle HRV)
    op.create_table(
        "vehicle_bookings",
        *_agency_owned("vehicle_bookings"),
        sa.Column("booking_id", sa.BigInteger(), sa.ForeignKey("bookings.id"), nullable=True),
        sa.Column(
            "group_client_booking_id",
            sa.BigInteger(),
            sa.ForeignKey("group_client_bookings.id"),
            nullable=True,
        ),
        sa.Column("vehicle_hrv_number", sa.String(30), nullable=False),
        sa.Column("vehicle_booking_date", sa.Date(), nullable=True),
        sa.Column("vehicle_id", sa.BigInteger(), sa.ForeignKey("vehicles.id"), nullable=True),
        sa.Column("number_of_vehicles", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("from_date", sa.Date(), nullable=False),
        sa.Column("to_date", sa.Date(), nullable=True),
        sa.Column("days", sa.Integer(), nullable=True),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("agent_id", sa.BigInteger(), sa.ForeignKey("agents.id"), nullable=True),
        sa.Column("pickup_place", sa.String(255), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        sa.Column("special_request", sa.Text(), nullable=True),
        sa.Column("vehicle_note", sa.Text(), nullable=True),
        sa.Column("special_note", sa.Text(), nullable=True),
        sa.Column("summary_note", sa.Text(), nullable=True),
        sa.Column("bill_description", sa.Text(), nullable=True),
        sa.UniqueConstraint("agency_id", "vehicle_hrv_number", name="uq_vehicle_bookings_agency_hrv"),
    )
    op.create_index("ix_vehicle_bookings_agency_id", "vehicle_bookings", ["agency_id"])
    op.create_index("ix_vehicle_bookings_booking_id", "vehicle_bookings", ["booking_id"])
    op.create_index(
        "ix_vehicle_bookings_group_client_booking_id", "vehicle_bookings", ["group_client_booking_id"]
    )
    op.create_index("ix_vehicle_bookings_vehicle_id", "vehicle_bookings", ["vehicle_id"])
    op.create_index("ix_vehicle_bookings_agent_id", "vehicle_bookings", ["agent_id"])
    _itinerary("vehicle_itineraries", "vehicle_booking")

    op.create_table(
        "vehicle_hotel_bookings",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("vehicle_booking_id", sa.BigInteger(), nullable=False),
        sa.Column("city_id", sa.BigInteger(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("hotel_id", sa.BigInteger(), sa.ForeignKey("hotels.id"), nullable=True),
        sa.Column("check_in_date", sa.Date(), nullable=True),
        sa.Column("check_out_date", sa.Date(), nullable=True),
        sa.Column("number_of_rooms", sa.Integer(), nullable=True),
        sa.Column("plan", sa.String(20), nullable=True),
        sa.Column("number_of_nights", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["vehicle_booking_id"], ["vehicle_bookings.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_vehicle_hotel_bookings_vehicle_booking_id", "vehicle_hotel_bookings", ["vehicle_booking_id"]
    )

    # Receipts
    op.create_table(
        "booking_receipts",
        *_agency_owned("booking_receipts"),
        sa.Column("booking_id", sa.BigInteger(), sa.ForeignKey("bookings.id"), nullable=True),
        sa.Column(
            "group_client_booking_id",
            sa.BigInteger(),
            sa.ForeignKey("group_client_bookings.id"),
            nullable=True,
        ),
        sa.Column("receipt_number", sa.String(30), nullable=False),
        sa.Column("receipt_date", sa.Date(), nullable=False),
        sa.Column("payment_mode", sa.String(20), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("bank_id", sa.BigInteger(), sa.ForeignKey("banks.id"), nullable=True),
        sa.Column("cheque_date", sa.Date(), nullable=True),
        sa.Column("cheque_number", sa.String(20), nullable=True),
        sa.Column("utr_number", sa.String(50), nullable=True),
        sa.Column("neft_imps_number", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_gst", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("cgst_percent", sa.Numeric(5, 2), nullable=True),
        sa.Column("cgst_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("sgst_percent", sa.Numeric(5, 2), nullable=True),
        sa.Column("sgst_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("igst_percent", sa.Numeric(5, 2), nullable=True),
        sa.Column("igst_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("invoice_number", sa.String(30), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=True),
        sa.UniqueConstraint("agency_id", "receipt_number", name="uq_booking_receipts_agency_number"),
        sa.UniqueConstraint("agency_id", "invoice_number", name="uq_booking_receipts_agency_invoice"),
    )
    op.create_index("ix_booking_receipts_agency_id", "booking_receipts", ["agency_id"])
    op.create_index("ix_booking_receipts_booking_id", "booking_receipts", ["booking_id"])
    op.create_index(
        "ix_booking_receipts_group_client_booking_id", "booking_receipts", ["group_client_booking_id"]
    )


def downgrade() -> None:
    op.drop_table("booking_receipts")
    op.drop_table("vehicle_hotel_bookings")
    op.drop_table("vehicle_itineraries")
    op.drop_table("vehicle_bookings")
    op.drop_table("journey_bookings")
    op.drop_table("hotel_bookings")
    op.drop_table("follow_ups")
    op.drop_table("group_client_members")
    op.drop_table("group_client_bookings")
    op.drop_table("group_booking_details")
    op.drop_table("group_bookings")
    op.drop_table("booking_details")
    op.drop_table("bookings")
