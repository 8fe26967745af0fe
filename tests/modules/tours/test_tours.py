"""Tests for tour packages offered by an agency."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


class TestTourEndpoints:
    async def test_create_tour_with_sector(self, client: AsyncClient, setup: AgencySetup):
        sector = await client.post(
            "/api/v1/sectors", headers=auth_headers(setup.admin), json={"name": "Himalayas"}
        )
        response = await client.post(
            "/api/v1/tours",
            headers=auth_headers(setup.admin),
            json={
                "tour_title": "Kashmir Valley",
                "destination": "Srinagar",
                "days": 6,
                "nights": 5,
                "sector_id": sector.json()["data"]["id"],
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["sector"]["name"] == "Himalayas"
        assert data["days"] == 6

    async def test_unknown_sector(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/tours",
            headers=auth_headers(setup.admin),
            json={"tour_title": "Kashmir Valley", "sector_id": 999},
        )
        assert response.status_code == 422

    async def test_negative_days(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/tours",
            headers=auth_headers(setup.admin),
            json={"tour_title": "Kashmir Valley", "days": -1},
        )
        assert response.status_code == 422

    async def test_update_tour(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.put(
            f"/api/v1/tours/{catalog.tour.id}",
            headers=auth_headers(setup.admin),
            json={"days": 5, "nights": 4},
        )
        assert response.status_code == 200
        assert response.json()["data"]["nights"] == 4

    async def test_staff_reads_tours(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.get("/api/v1/tours", headers=auth_headers(setup.staff))
        assert response.status_code == 200
        assert response.json()["data"]["items"][0]["tour_title"] == "Goa Getaway"
