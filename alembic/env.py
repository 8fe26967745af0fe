import asyncio
from logging.config import fileConfig

# ruff: noqa: F401

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from voyage.core.config import settings
from voyage.core.database.base import Base

# Import all models here so they are registered with Base.metadata
from voyage.core.auth.models import User
from voyage.core.audit.models import AuditLog
from voyage.core.documents.models import DocumentSequence
from voyage.modules.packages.models import Package
from voyage.modules.agencies.models import Agency
from voyage.modules.subscriptions.models import Subscription
from voyage.modules.branches.models import Branch
from voyage.modules.locations.models import Country, State, City
from voyage.modules.reference_data.models import Accommodation, Bank, Fair, Sector, Service, Vehicle
from voyage.modules.hotels.models import Hotel
from voyage.modules.agents.models import Agent
from voyage.modules.tours.models import Tour
from voyage.modules.clients.models import Client, FamilyFriend
from voyage.modules.bookings.models import Booking, BookingDetail
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.hotel_bookings.models import HotelBooking
from voyage.modules.journey_bookings.models import JourneyBooking
from voyage.modules.vehicle_bookings.models import (
    VehicleBooking,
    VehicleHotelBooking,
    VehicleItinerary,
)
from voyage.modules.group_bookings.models import (
    GroupBooking,
    GroupBookingDetail,
    GroupClientBooking,
    GroupClientMember,
)
from voyage.modules.receipts.models import BookingReceipt

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    return settings.database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
