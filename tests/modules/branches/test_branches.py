"""Tests for agency branches and the package branch limit."""

from httpx import AsyncClient

from conftest import AgencySetup, auth_headers


class TestBranchEndpoints:
    async def test_create_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/branches",
            headers=auth_headers(setup.admin),
            json={"branch_name": "Nashik", "contact_email": "nashik@sahyadri.in"},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["branch_name"] == "Nashik"
        assert data["agency_id"] == setup.agency.id

    async def test_branch_limit(self, client: AsyncClient, setup: AgencySetup):
        # Standard package allows three branches, two exist
        first = await client.post(
            "/api/v1/branches", headers=auth_headers(setup.admin), json={"branch_name": "Nashik"}
        )
        assert first.status_code == 201

        second = await client.post(
            "/api/v1/branches", headers=auth_headers(setup.admin), json={"branch_name": "Nagpur"}
        )
        assert second.status_code == 400
        assert "3 branch(es)" in second.json()["message"]

    async def test_duplicate_branch_name(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/branches", headers=auth_headers(setup.admin), json={"branch_name": "Pune"}
        )
        assert response.status_code == 409

    async def test_branch_admin_cannot_create(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/branches",
            headers=auth_headers(setup.branch_admin),
            json={"branch_name": "Nashik"},
        )
        assert response.status_code == 403

    async def test_staff_can_list_branch_options(self, client: AsyncClient, setup: AgencySetup):
        response = await client.get("/api/v1/branches/all", headers=auth_headers(setup.staff))
        assert response.status_code == 200
        names = [option["name"] for option in response.json()["data"]]
        assert names == ["Head Office", "Pune"]

    async def test_update_branch(self, client: AsyncClient, setup: AgencySetup):
        response = await client.put(
            f"/api/v1/branches/{setup.pune.id}",
            headers=auth_headers(setup.admin),
            json={"address": "JM Road, Pune"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["address"] == "JM Road, Pune"

    async def test_delete_branch_with_staff(self, client: AsyncClient, setup: AgencySetup):
        response = await client.delete(
            f"/api/v1/branches/{setup.pune.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409

    async def test_delete_empty_branch(self, client: AsyncClient, setup: AgencySetup):
        created = await client.post(
            "/api/v1/branches", headers=auth_headers(setup.admin), json={"branch_name": "Nashik"}
        )
        branch_id = created.json()["data"]["id"]

        response = await client.delete(
            f"/api/v1/branches/{branch_id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 200

    async def test_branch_of_other_agency_not_found(
        self, client: AsyncClient, setup: AgencySetup
    ):
        response = await client.get("/api/v1/branches/999", headers=auth_headers(setup.admin))
        assert response.status_code == 404
