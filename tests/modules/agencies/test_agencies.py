"""Tests for agency onboarding and maintenance."""

from datetime import date

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import AgencySetup, auth_headers
from voyage.core.auth.models import User


def _agency_payload(package_id: int, **overrides) -> dict:
    payload = {
        "business_name": "Konkan Trails",
        "address_line1": "5 Station Road",
        "state": "Goa",
        "city": "Panaji",
        "pincode": "403001",
        "contact_person_name": "Maria Fernandes",
        "contact_person_phone": "9822000000",
        "contact_person_email": "maria@konkantrails.in",
        "subscription": {"package_id": package_id, "start_date": "2025-04-01"},
        "user": {"name": "Maria Fernandes", "email": "maria@konkantrails.in", "password": "Secret123"},
    }
    payload.update(overrides)
    return payload


class TestAgencyOnboarding:
    async def test_create_agency_with_subscription_and_admin(
        self, client: AsyncClient, db_session: AsyncSession, super_admin, package
    ):
        response = await client.post(
            "/api/v1/agencies", headers=auth_headers(super_admin), json=_agency_payload(package.id)
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["business_name"] == "Konkan Trails"

        subscription = data["current_subscription"]
        assert subscription["start_date"] == "2025-04-01"
        assert subscription["end_date"] == "2026-04-01"
        assert subscription["cost"] == "12000.00"
        assert subscription["invoice_number"].startswith("SUB/")

        assert len(data["users"]) == 1
        assert data["users"][0]["role"] == "admin"

        result = await db_session.execute(select(User).where(User.email == "maria@konkantrails.in"))
        admin = result.scalar_one()
        assert admin.agency_id == data["id"]
        assert admin.branch_id is None

    async def test_unknown_package(self, client: AsyncClient, super_admin):
        response = await client.post(
            "/api/v1/agencies", headers=auth_headers(super_admin), json=_agency_payload(999)
        )
        assert response.status_code == 422

    async def test_duplicate_admin_email(
        self, client: AsyncClient, super_admin, setup: AgencySetup
    ):
        payload = _agency_payload(setup.package.id)
        payload["user"]["email"] = "admin@sahyadri.in"
        response = await client.post(
            "/api/v1/agencies", headers=auth_headers(super_admin), json=payload
        )
        assert response.status_code == 409

    async def test_invalid_gstin(self, client: AsyncClient, super_admin, package):
        response = await client.post(
            "/api/v1/agencies",
            headers=auth_headers(super_admin),
            json=_agency_payload(package.id, gstin="12345"),
        )
        assert response.status_code == 422

    async def test_onboarded_admin_can_log_in(self, client: AsyncClient, super_admin, package):
        start = date.today().replace(day=1).isoformat()
        payload = _agency_payload(package.id)
        payload["subscription"]["start_date"] = start
        await client.post("/api/v1/agencies", headers=auth_headers(super_admin), json=payload)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "maria@konkantrails.in", "password": "Secret123"},
        )
        assert response.status_code == 200


class TestAgencyMaintenance:
    async def test_list_agencies(self, client: AsyncClient, super_admin, setup: AgencySetup):
        response = await client.get("/api/v1/agencies", headers=auth_headers(super_admin))
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 1
        assert data["items"][0]["current_subscription"]["package"]["package_name"] == "Standard"

    async def test_update_agency(self, client: AsyncClient, super_admin, setup: AgencySetup):
        response = await client.put(
            f"/api/v1/agencies/{setup.agency.id}",
            headers=auth_headers(super_admin),
            json={"city": "Pune", "gstin": "27aapfu0939f1zv"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["city"] == "Pune"
        assert data["gstin"] == "27AAPFU0939F1ZV"

    async def test_agency_admin_cannot_list_agencies(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.get("/api/v1/agencies", headers=auth_headers(setup.admin))
        assert response.status_code == 403

    async def test_delete_agency_with_branches(
        self, client: AsyncClient, super_admin, setup: AgencySetup
    ):
        response = await client.delete(
            f"/api/v1/agencies/{setup.agency.id}", headers=auth_headers(super_admin)
        )
        assert response.status_code == 409

    async def test_delete_fresh_agency(self, client: AsyncClient, super_admin, package):
        created = await client.post(
            "/api/v1/agencies", headers=auth_headers(super_admin), json=_agency_payload(package.id)
        )
        agency_id = created.json()["data"]["id"]

        response = await client.delete(
            f"/api/v1/agencies/{agency_id}", headers=auth_headers(super_admin)
        )
        assert response.status_code == 200

        response = await client.get(
            f"/api/v1/agencies/{agency_id}", headers=auth_headers(super_admin)
        )
        assert response.status_code == 404
