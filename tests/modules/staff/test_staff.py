"""Tests for staff management, branch scoping and the users-per-branch limit."""

from io import BytesIO

from httpx import AsyncClient
from openpyxl import load_workbook

from conftest import AgencySetup, auth_headers


def _staff(email: str, **overrides) -> dict:
    payload = {"name": "New Staff", "email": email, "password": "Secret123", "role": "user"}
    payload.update(overrides)
    return payload


class TestCreateStaff:
    async def test_admin_creates_branch_user(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("ravi@sahyadri.in", branch_id=setup.pune.id),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["branch"]["branch_name"] == "Pune"
        assert data["agency_id"] == setup.agency.id

    async def test_branch_required_for_user(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users", headers=auth_headers(setup.admin), json=_staff("ravi@sahyadri.in")
        )
        assert response.status_code == 422

    async def test_admin_role_has_no_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("second@sahyadri.in", role="admin", branch_id=setup.pune.id),
        )
        assert response.status_code == 201
        assert response.json()["data"]["branch_id"] is None

    async def test_branch_admin_staffs_own_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.branch_admin),
            json=_staff("ravi@sahyadri.in", branch_id=setup.pune.id),
        )
        assert response.status_code == 201
        assert response.json()["data"]["branch_id"] == setup.head_office.id

    async def test_branch_admin_cannot_create_admin(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.branch_admin),
            json=_staff("boss@sahyadri.in", role="admin"),
        )
        assert response.status_code == 403

    async def test_super_admin_role_rejected(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("root2@sahyadri.in", role="super_admin"),
        )
        assert response.status_code == 422

    async def test_duplicate_email(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("Desk@Sahyadri.in", branch_id=setup.pune.id),
        )
        assert response.status_code == 409

    async def test_users_per_branch_limit(self, client: AsyncClient, setup: AgencySetup):
        # Head office already has two of the three allowed users
        ok = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("third@sahyadri.in", branch_id=setup.head_office.id),
        )
        assert ok.status_code == 201

        full = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.admin),
            json=_staff("fourth@sahyadri.in", branch_id=setup.head_office.id),
        )
        assert full.status_code == 400
        assert full.json()["errors"][0]["field"] == "branch_id"

    async def test_staff_cannot_create_users(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers(setup.staff),
            json=_staff("ravi@sahyadri.in", branch_id=setup.head_office.id),
        )
        assert response.status_code == 403


class TestStaffVisibility:
    async def test_admin_sees_all_staff(self, client: AsyncClient, setup: AgencySetup):
        response = await client.get("/api/v1/users", headers=auth_headers(setup.admin))
        assert response.status_code == 200
        assert response.json()["data"]["total"] == 4

    async def test_branch_admin_sees_own_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.get("/api/v1/users", headers=auth_headers(setup.branch_admin))
        emails = {u["email"] for u in response.json()["data"]["items"]}
        assert emails == {"manager@sahyadri.in", "desk@sahyadri.in"}

    async def test_other_branch_user_not_found(self, client: AsyncClient, setup: AgencySetup):
        response = await client.get(
            f"/api/v1/users/{setup.pune_staff.id}", headers=auth_headers(setup.branch_admin)
        )
        assert response.status_code == 404


class TestStaffMaintenance:
    async def test_deactivate_and_reactivate(self, client: AsyncClient, setup: AgencySetup):
        response = await client.patch(
            f"/api/v1/users/{setup.staff.id}/status",
            headers=auth_headers(setup.admin),
            json={"is_active": False},
        )
        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        response = await client.patch(
            f"/api/v1/users/{setup.staff.id}/status",
            headers=auth_headers(setup.admin),
            json={"is_active": True},
        )
        assert response.json()["data"]["is_active"] is True

    async def test_cannot_deactivate_self(self, client: AsyncClient, setup: AgencySetup):
        response = await client.patch(
            f"/api/v1/users/{setup.admin.id}/status",
            headers=auth_headers(setup.admin),
            json={"is_active": False},
        )
        assert response.status_code == 422

    async def test_change_password(self, client: AsyncClient, setup: AgencySetup):
        response = await client.put(
            f"/api/v1/users/{setup.staff.id}/password",
            headers=auth_headers(setup.admin),
            json={"password": "Changed123"},
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/v1/auth/login", json={"email": "desk@sahyadri.in", "password": "Changed123"}
        )
        assert login.status_code == 200

    async def test_delete_staff(self, client: AsyncClient, setup: AgencySetup):
        response = await client.delete(
            f"/api/v1/users/{setup.pune_staff.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 200

    async def test_export_xlsx(self, client: AsyncClient, setup: AgencySetup):
        response = await client.get("/api/v1/users/export", headers=auth_headers(setup.admin))
        assert response.status_code == 200

        sheet = load_workbook(BytesIO(response.content)).active
        assert sheet.cell(1, 1).value == "Name"
        names = {sheet.cell(row, 1).value for row in range(2, sheet.max_row + 1)}
        assert names == {"Agency Admin", "Branch Manager", "Front Desk", "Pune Desk"}
