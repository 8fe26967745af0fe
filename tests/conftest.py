from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from voyage.core.auth.jwt import create_access_token
from voyage.core.auth.models import User, UserRole
from voyage.core.auth.password import hash_password
from voyage.core.database import get_db
from voyage.core.database.base import Base
from voyage.main import app
from voyage.modules.agencies.models import Agency
from voyage.modules.agents.models import Agent
from voyage.modules.bookings.models import Booking, BookingType
from voyage.modules.branches.models import Branch
from voyage.modules.clients.models import Client
from voyage.modules.hotels.models import Hotel
from voyage.modules.locations.models import City, Country, State
from voyage.modules.packages.models import Package
from voyage.modules.reference_data.models import Accommodation, Bank, Vehicle
from voyage.modules.subscriptions.models import Subscription
from voyage.modules.tours.models import Tour

# Test database URL (in-memory SQLite for speed, or use test PostgreSQL)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "Pass12345"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
test_async_session = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get test database session."""
    async with test_async_session() as session:
        yield session


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Get test HTTP client with overridden database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for a user without going through the login endpoint."""
    token = create_access_token(user.id, user.role, user.agency_id)
    return {"Authorization": f"Bearer {token}"}


def _user(email: str, name: str, role: UserRole, agency_id=None, branch_id=None) -> User:
    return User(
        email=email,
        password_hash=hash_password(PASSWORD),
        name=name,
        role=role.value,
        is_active=True,
        agency_id=agency_id,
        branch_id=branch_id,
    )


@dataclass
class AgencySetup:
    """An onboarded agency with two branches and one user per role."""

    package: Package
    agency: Agency
    subscription: Subscription
    head_office: Branch
    pune: Branch
    admin: User
    branch_admin: User
    staff: User
    pune_staff: User


@pytest.fixture
async def super_admin(db_session: AsyncSession) -> User:
    user = _user("root@voyagecentral.in", "Platform Admin", UserRole.SUPER_ADMIN)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def package(db_session: AsyncSession) -> Package:
    package = Package(
        package_name="Standard",
        number_of_branches=3,
        users_per_branch=3,
        period_in_months=12,
        cost=Decimal("12000.00"),
    )
    db_session.add(package)
    await db_session.commit()
    return package


@pytest.fixture
async def setup(db_session: AsyncSession, package: Package) -> AgencySetup:
    agency = Agency(
        business_name="Sahyadri Holidays",
        address_line1="12 FC Road",
        state="Maharashtra",
        city="Mumbai",
        pincode="400001",
        contact_person_name="Asha Kulkarni",
        contact_person_phone="9820000000",
        contact_person_email="owner@sahyadri.in",
        gstin="27AAPFU0939F1ZV",
    )
    db_session.add(agency)
    await db_session.flush()

    start = date.today() - timedelta(days=30)
    subscription = Subscription(
        agency_id=agency.id,
        package_id=package.id,
        start_date=start,
        end_date=start + timedelta(days=365),
        cost=package.cost,
    )
    db_session.add(subscription)
    await db_session.flush()
    agency.current_subscription = subscription

    head_office = Branch(agency_id=agency.id, branch_name="Head Office")
    pune = Branch(agency_id=agency.id, branch_name="Pune")
    db_session.add_all([head_office, pune])
    await db_session.flush()

    admin = _user("admin@sahyadri.in", "Agency Admin", UserRole.ADMIN, agency.id)
    branch_admin = _user(
        "manager@sahyadri.in", "Branch Manager", UserRole.BRANCH_ADMIN, agency.id, head_office.id
    )
    staff = _user("desk@sahyadri.in", "Front Desk", UserRole.USER, agency.id, head_office.id)
    pune_staff = _user("pune@sahyadri.in", "Pune Desk", UserRole.USER, agency.id, pune.id)
    db_session.add_all([admin, branch_admin, staff, pune_staff])
    await db_session.commit()

    return AgencySetup(
        package=package,
        agency=agency,
        subscription=subscription,
        head_office=head_office,
        pune=pune,
        admin=admin,
        branch_admin=branch_admin,
        staff=staff,
        pune_staff=pune_staff,
    )


@dataclass
class Catalog:
    """Reference data of the test agency used by booking tests."""

    country: Country
    state: State
    pune: City
    goa: City
    client: Client
    hotel: Hotel
    tour: Tour
    agent: Agent
    bank: Bank
    vehicle: Vehicle
    accommodation: Accommodation


@pytest.fixture
async def catalog(db_session: AsyncSession, setup: AgencySetup) -> Catalog:
    agency_id = setup.agency.id
    country = Country(agency_id=agency_id, country_name="India")
    db_session.add(country)
    await db_session.flush()

    state = State(agency_id=agency_id, country_id=country.id, state_name="Maharashtra")
    goa_state = State(agency_id=agency_id, country_id=country.id, state_name="Goa")
    db_session.add_all([state, goa_state])
    await db_session.flush()

    pune = City(agency_id=agency_id, state_id=state.id, city_name="Pune")
    goa = City(agency_id=agency_id, state_id=goa_state.id, city_name="Panaji")
    db_session.add_all([pune, goa])
    await db_session.flush()

    bank = Bank(agency_id=agency_id, name="HDFC Bank")
    vehicle = Vehicle(agency_id=agency_id, name="Innova Crysta")
    accommodation = Accommodation(agency_id=agency_id, name="Deluxe Room")
    client = Client(
        agency_id=agency_id,
        client_name="Rahul Deshpande",
        mobile1="9890000001",
        email="rahul@example.in",
        address1="Flat 4, Shanti Niwas",
        state_id=state.id,
        city_id=pune.id,
        pincode="411038",
    )
    hotel = Hotel(agency_id=agency_id, hotel_name="Sea Breeze Resort", hotel_city_id=goa.id)
    tour = Tour(agency_id=agency_id, tour_title="Goa Getaway", destination="Goa", days=4, nights=3)
    agent = Agent(agency_id=agency_id, agent_name="Coastal Cabs", mobile1="9822000002")
    db_session.add_all([bank, vehicle, accommodation, client, hotel, tour, agent])
    await db_session.commit()

    return Catalog(
        country=country,
        state=state,
        pune=pune,
        goa=goa,
        client=client,
        hotel=hotel,
        tour=tour,
        agent=agent,
        bank=bank,
        vehicle=vehicle,
        accommodation=accommodation,
    )


async def _booking(
    db: AsyncSession, setup: AgencySetup, catalog: Catalog, branch: Branch, number: str
) -> Booking:
    booking = Booking(
        agency_id=setup.agency.id,
        branch_id=branch.id,
        client_id=catalog.client.id,
        tour_id=catalog.tour.id,
        booking_number=number,
        booking_type=BookingType.CONFIRM.value,
        booking_date=date.today(),
        journey_date=date.today() + timedelta(days=20),
        number_of_adults=2,
    )
    db.add(booking)
    await db.commit()
    return booking


@pytest.fixture
async def booking(db_session: AsyncSession, setup: AgencySetup, catalog: Catalog) -> Booking:
    """Confirmed head office booking for the catalog client."""
    return await _booking(db_session, setup, catalog, setup.head_office, "TEST/001")


@pytest.fixture
async def pune_booking(db_session: AsyncSession, setup: AgencySetup, catalog: Catalog) -> Booking:
    return await _booking(db_session, setup, catalog, setup.pune, "TEST/002")
