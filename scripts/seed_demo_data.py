#!/usr/bin/env python3
"""
Seed the database with a demo travel agency.

Creates one package, an agency on a running subscription with two branches,
one user per agency role and enough reference data (locations, hotels,
tours, agents) to take bookings from the admin panel straight away.

Usage:
    uv run python scripts/seed_demo_data.py --dry-run   # roll back at the end
    uv run python scripts/seed_demo_data.py --confirm   # commit

Requires migrations to be applied (alembic upgrade head).
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.models import User, UserRole
from voyage.core.auth.password import hash_password
from voyage.core.config import settings
from voyage.core.database.session import async_session
from voyage.modules.agencies.models import Agency
from voyage.modules.agents.models import Agent
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City, Country, State
from voyage.modules.packages.models import Package
from voyage.modules.reference_data.models import (
    Accommodation,
    Bank,
    Fair,
    Sector,
    Service,
    Vehicle,
)
from voyage.modules.subscriptions.models import Subscription
from voyage.modules.tours.models import Tour

DEMO_PASSWORD = "Demo12345"
DEMO_AGENCY_EMAIL = "owner@konkantrails.in"

CITIES = {
    "Maharashtra": ["Mumbai", "Pune", "Nashik", "Ratnagiri"],
    "Goa": ["Panaji", "Margao"],
    "Kerala": ["Kochi", "Munnar", "Alleppey"],
    "Rajasthan": ["Jaipur", "Udaipur", "Jaisalmer"],
}

REFERENCE = {
    Bank: ["State Bank of India", "HDFC Bank", "ICICI Bank"],
    Sector: ["Domestic", "International", "Pilgrimage"],
    Service: ["Air Ticketing", "Visa Assistance", "Travel Insurance"],
    Fair: ["Adult", "Child 5-11", "Child under 5"],
    Vehicle: ["Innova Crysta", "Tempo Traveller", "Dzire"],
    Accommodation: ["Standard Room", "Deluxe Room", "Suite"],
}


async def seed_agency(session: AsyncSession) -> Agency | None:
    """Package, agency, subscription and branches. Returns None if already seeded."""
    result = await session.execute(
        select(Agency).where(Agency.contact_person_email == DEMO_AGENCY_EMAIL)
    )
    if result.scalar_one_or_none():
        print("  Demo agency already exists, skip.")
        return None

    package = Package(
        package_name="Demo Standard",
        number_of_branches=3,
        users_per_branch=5,
        period_in_months=12,
        cost=Decimal("15000.00"),
    )
    session.add(package)

    agency = Agency(
        business_name="Konkan Trails",
        address_line1="21 Marine Drive",
        state="Maharashtra",
        city="Mumbai",
        pincode="400020",
        contact_person_name="Vinay Sawant",
        contact_person_phone="9820011223",
        contact_person_email=DEMO_AGENCY_EMAIL,
        gstin="27AAGCK1234L1Z5",
    )
    session.add(agency)
    await session.flush()

    start = date.today().replace(day=1)
    subscription = Subscription(
        agency_id=agency.id,
        package_id=package.id,
        start_date=start,
        end_date=start + timedelta(days=365),
        cost=package.cost,
    )
    session.add(subscription)
    await session.flush()
    agency.current_subscription = subscription

    session.add_all(
        [
            Branch(agency_id=agency.id, branch_name="Mumbai Head Office"),
            Branch(agency_id=agency.id, branch_name="Pune"),
        ]
    )
    await session.flush()
    print(f"  Created agency {agency.business_name} with 2 branches.")
    return agency


async def seed_users(session: AsyncSession, agency: Agency) -> None:
    result = await session.execute(
        select(Branch).where(Branch.agency_id == agency.id).order_by(Branch.id)
    )
    head_office, pune = result.scalars().all()

    pw = hash_password(DEMO_PASSWORD)
    users = [
        ("admin@konkantrails.in", "Vinay Sawant", UserRole.ADMIN, None),
        ("mumbai.manager@konkantrails.in", "Priya Naik", UserRole.BRANCH_ADMIN, head_office.id),
        ("mumbai.desk@konkantrails.in", "Sameer Joshi", UserRole.USER, head_office.id),
        ("pune.desk@konkantrails.in", "Anita Kale", UserRole.USER, pune.id),
    ]
    for email, name, role, branch_id in users:
        session.add(
            User(
                email=email,
                password_hash=pw,
                name=name,
                role=role.value,
                is_active=True,
                agency_id=agency.id,
                branch_id=branch_id,
            )
        )
    await session.flush()
    print(f"  Created {len(users)} users (password {DEMO_PASSWORD}).")


async def seed_catalog(session: AsyncSession, agency: Agency) -> None:
    """Locations, named reference data, hotels, tours, agents and one client."""
    country = Country(agency_id=agency.id, country_name="India")
    session.add(country)
    await session.flush()

    cities: dict[str, City] = {}
    for state_name, city_names in CITIES.items():
        state = State(agency_id=agency.id, country_id=country.id, state_name=state_name)
        session.add(state)
        await session.flush()
        for city_name in city_names:
            city = City(agency_id=agency.id, state_id=state.id, city_name=city_name)
            session.add(city)
            cities[city_name] = city
    await session.flush()

    for model, names in REFERENCE.items():
        session.add_all(model(agency_id=agency.id, name=name) for name in names)
    await session.flush()

    hotels = [
        ("Sea Breeze Resort", "Panaji"),
        ("Tea Valley Retreat", "Munnar"),
        ("Lake Palace Inn", "Udaipur"),
    ]
    session.add_all(
        Hotel(agency_id=agency.id, hotel_name=name, hotel_city_id=cities[city].id)
        for name, city in hotels
    )
    tours = [
        ("Goa Getaway", "Goa", 4, 3),
        ("Kerala Backwaters", "Kerala", 6, 5),
        ("Royal Rajasthan", "Rajasthan", 8, 7),
    ]
    session.add_all(
        Tour(agency_id=agency.id, tour_title=title, destination=dest, days=days, nights=nights)
        for title, dest, days, nights in tours
    )
    session.add(Agent(agency_id=agency.id, agent_name="Coastal Cabs", mobile1="9822000002"))
    session.add(
        Client(
            agency_id=agency.id,
            client_name="Rahul Deshpande",
            mobile1="9890000001",
            email="rahul.deshpande@example.in",
            city_id=cities["Pune"].id,
            pincode="411038",
        )
    )
    await session.flush()
    print(f"  Created {len(cities)} cities, {len(hotels)} hotels and {len(tours)} tours.")


async def run_seed(session: AsyncSession, dry_run: bool) -> None:
    print("Seeding demo agency...")
    agency = await seed_agency(session)
    if agency is not None:
        await seed_users(session, agency)
        await seed_catalog(session, agency)

    if dry_run:
        await session.rollback()
        print("\nDRY-RUN: changes rolled back.")
    else:
        await session.commit()
        print("\nSeed completed successfully.")


async def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Seed database with a demo travel agency")
    parser.add_argument("--dry-run", action="store_true", help="Do not commit")
    parser.add_argument("--confirm", action="store_true", help="Commit changes")
    args = parser.parse_args()
    if not args.dry_run and not args.confirm:
        print("Use --dry-run or --confirm")
        sys.exit(1)

    print("Database:", settings.database_url.split("@")[-1] if "@" in settings.database_url else "?")
    print("Mode:", "DRY-RUN" if args.dry_run else "CONFIRM")
    async with async_session() as session:
        await run_seed(session, dry_run=args.dry_run)
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
