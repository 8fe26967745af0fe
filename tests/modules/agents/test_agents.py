"""Tests for transport agents."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


class TestAgentEndpoints:
    async def test_create_agent_with_bank(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/agents",
            headers=auth_headers(setup.branch_admin),
            json={
                "agent_name": "Deccan Travels",
                "city_id": catalog.pune.id,
                "bank1_id": catalog.bank.id,
                "bank_account_number1": "50100012345678",
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["city"]["city_name"] == "Pune"
        assert data["bank1_id"] == catalog.bank.id

    async def test_unknown_bank(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/agents",
            headers=auth_headers(setup.admin),
            json={"agent_name": "Deccan Travels", "bank2_id": 999},
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "bank2_id"

    async def test_duplicate_name(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.post(
            "/api/v1/agents", headers=auth_headers(setup.admin), json={"agent_name": "coastal cabs"}
        )
        assert response.status_code == 409

    async def test_options(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.get("/api/v1/agents/all", headers=auth_headers(setup.staff))
        assert response.json()["data"] == [{"id": catalog.agent.id, "name": "Coastal Cabs"}]

    async def test_delete(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.delete(
            f"/api/v1/agents/{catalog.agent.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 200
