"""Role checks applied by require_permission."""

from httpx import AsyncClient

from conftest import AgencySetup, auth_headers
from voyage.core.auth.models import UserRole
from voyage.core.auth.permissions import roles_for


class TestPermissionTable:
    def test_staff_cannot_delete_bookings(self):
        assert UserRole.USER not in roles_for("bookings.delete")
        assert UserRole.BRANCH_ADMIN in roles_for("bookings.delete")

    def test_only_admin_deletes_reference_data(self):
        assert roles_for("hotels.delete") == (UserRole.ADMIN,)

    def test_unknown_permission_granted_to_nobody(self):
        assert roles_for("nonsense.read") == ()


class TestRequirePermission:
    async def test_agency_admin_cannot_manage_packages(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.get("/api/v1/packages", headers=auth_headers(setup.admin))
        assert response.status_code == 403

    async def test_staff_cannot_create_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/branches",
            headers=auth_headers(setup.staff),
            json={"branch_name": "Nashik"},
        )
        assert response.status_code == 403

    async def test_super_admin_has_no_agency_data(self, client: AsyncClient, super_admin):
        response = await client.get("/api/v1/clients", headers=auth_headers(super_admin))
        assert response.status_code == 404
        assert response.json()["message"] == "User does not belong to any agency"

    async def test_roles_hide_super_admin_from_agency_admin(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.get("/api/v1/roles", headers=auth_headers(setup.admin))
        assert response.status_code == 200
        values = [role["value"] for role in response.json()["data"]]
        assert "super_admin" not in values
        assert "branch_admin" in values
