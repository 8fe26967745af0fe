"""Tests for countries, states and cities."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


class TestCountries:
    async def test_create_and_list(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/countries", headers=auth_headers(setup.admin), json={"country_name": "Nepal"}
        )
        assert response.status_code == 201

        response = await client.get("/api/v1/countries", headers=auth_headers(setup.staff))
        assert response.json()["data"]["total"] == 1

    async def test_duplicate_name_case_insensitive(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/countries", headers=auth_headers(setup.admin), json={"country_name": "INDIA"}
        )
        assert response.status_code == 409

    async def test_staff_cannot_create(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/countries", headers=auth_headers(setup.staff), json={"country_name": "Nepal"}
        )
        assert response.status_code == 403

    async def test_delete_country_with_states(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.delete(
            f"/api/v1/countries/{catalog.country.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409


class TestStates:
    async def test_states_of_country(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.get(
            f"/api/v1/states/country/{catalog.country.id}", headers=auth_headers(setup.staff)
        )
        assert response.status_code == 200
        assert [s["name"] for s in response.json()["data"]] == ["Goa", "Maharashtra"]

    async def test_unknown_country(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/states",
            headers=auth_headers(setup.admin),
            json={"country_id": 999, "state_name": "Gujarat"},
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "country_id"

    async def test_same_state_name_in_other_country(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        nepal = await client.post(
            "/api/v1/countries", headers=auth_headers(setup.admin), json={"country_name": "Nepal"}
        )
        response = await client.post(
            "/api/v1/states",
            headers=auth_headers(setup.admin),
            json={"country_id": nepal.json()["data"]["id"], "state_name": "Goa"},
        )
        assert response.status_code == 201


class TestCities:
    async def test_create_city(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.post(
            "/api/v1/cities",
            headers=auth_headers(setup.admin),
            json={"state_id": catalog.state.id, "city_name": "Nashik"},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["state"]["state_name"] == "Maharashtra"

    async def test_cities_of_state(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.get(
            f"/api/v1/cities/state/{catalog.state.id}", headers=auth_headers(setup.staff)
        )
        assert [c["name"] for c in response.json()["data"]] == ["Pune"]

    async def test_search_cities(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.get(
            "/api/v1/cities", headers=auth_headers(setup.staff), params={"search": "pan"}
        )
        items = response.json()["data"]["items"]
        assert [c["city_name"] for c in items] == ["Panaji"]

    async def test_delete_city_used_by_client(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.delete(
            f"/api/v1/cities/{catalog.pune.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409
