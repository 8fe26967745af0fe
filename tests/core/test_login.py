"""Tests for login, token refresh and the profile endpoint."""

from datetime import date, timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import PASSWORD, AgencySetup, auth_headers


class TestLogin:
    async def test_login_success(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "desk@sahyadri.in", "password": PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["user"]["role"] == "user"
        assert data["user"]["branch_id"] == setup.head_office.id

    async def test_login_wrong_password(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "desk@sahyadri.in", "password": "wrong-pass"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    async def test_login_inactive_user(
        self, client: AsyncClient, db_session: AsyncSession, setup: AgencySetup
    ):
        setup.staff.is_active = False
        await db_session.commit()

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "desk@sahyadri.in", "password": PASSWORD},
        )
        assert response.status_code == 403

    async def test_login_expired_subscription(
        self, client: AsyncClient, db_session: AsyncSession, setup: AgencySetup
    ):
        setup.subscription.end_date = date.today() - timedelta(days=1)
        await db_session.commit()

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "admin@sahyadri.in", "password": PASSWORD},
        )
        assert response.status_code == 403
        assert response.json()["message"] == "Subscription expired"

    async def test_super_admin_needs_no_subscription(self, client: AsyncClient, super_admin):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "root@voyagecentral.in", "password": PASSWORD},
        )
        assert response.status_code == 200
        assert response.json()["data"]["user"]["agency_id"] is None

    async def test_refresh_tokens(self, client: AsyncClient, setup: AgencySetup):
        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "admin@sahyadri.in", "password": PASSWORD},
        )
        refresh_token = login.json()["data"]["refresh_token"]

        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        assert response.json()["data"]["access_token"]

    async def test_refresh_rejects_access_token(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": auth_headers(setup.admin)["Authorization"][7:]},
        )
        assert response.status_code == 401


class TestProfile:
    async def test_me_includes_agency_and_subscription(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.get("/api/v1/auth/me", headers=auth_headers(setup.staff))
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "desk@sahyadri.in"
        assert data["branch_name"] == "Head Office"
        assert data["agency"]["business_name"] == "Sahyadri Holidays"
        assert data["agency"]["subscription"]["package_name"] == "Standard"

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401

    async def test_me_rejects_garbage_token(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
