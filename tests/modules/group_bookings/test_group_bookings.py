"""Tests for group bookings and the client parties booked into them."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


def _group(catalog: Catalog, **overrides) -> dict:
    payload = {
        "group_booking_date": "2025-06-15",
        "journey_date": "2025-12-20",
        "tour_id": catalog.tour.id,
        "is_hotel": True,
        "details": [{"day": 1, "description": "Assemble at Pune station", "city_id": catalog.pune.id}],
    }
    payload.update(overrides)
    return payload


async def _create_group(client: AsyncClient, setup: AgencySetup, catalog: Catalog) -> dict:
    response = await client.post(
        "/api/v1/group-bookings", headers=auth_headers(setup.staff), json=_group(catalog)
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestGroupBookings:
    async def test_create(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        data = await _create_group(client, setup, catalog)
        assert data["group_booking_number"] == "2025-26/001"
        assert data["branch_id"] == setup.head_office.id
        assert data["tour"]["tour_title"] == "Goa Getaway"
        assert len(data["details"]) == 1

    async def test_numbering_independent_of_bookings(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id, "booking_date": "2025-06-15"},
        )
        data = await _create_group(client, setup, catalog)
        assert data["group_booking_number"] == "2025-26/001"

    async def test_admin_must_choose_branch(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/group-bookings", headers=auth_headers(setup.admin), json=_group(catalog)
        )
        assert response.status_code == 422

    async def test_branch_scope(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        data = await _create_group(client, setup, catalog)

        own = await client.get("/api/v1/group-bookings", headers=auth_headers(setup.staff))
        other = await client.get("/api/v1/group-bookings", headers=auth_headers(setup.pune_staff))
        detail = await client.get(
            f"/api/v1/group-bookings/{data['id']}", headers=auth_headers(setup.pune_staff)
        )
        assert own.json()["data"]["total"] == 1
        assert other.json()["data"]["total"] == 0
        assert detail.status_code == 404

    async def test_update(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        data = await _create_group(client, setup, catalog)
        response = await client.put(
            f"/api/v1/group-bookings/{data['id']}",
            headers=auth_headers(setup.staff),
            json={"booking_detail": "Sleeper coach both ways", "details": []},
        )
        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["booking_detail"] == "Sleeper coach both ways"
        assert updated["details"] == []

    async def test_delete_empty_group(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        data = await _create_group(client, setup, catalog)
        response = await client.delete(
            f"/api/v1/group-bookings/{data['id']}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 200


class TestGroupClientBookings:
    async def test_add_party_counts_members(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        group = await _create_group(client, setup, catalog)
        response = await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={
                "client_id": catalog.client.id,
                "number_of_adults": 2,
                "number_of_children_5_to_11": 1,
                "number_of_children_under_5": 1,
                "tour_cost": "48000.00",
                "members": [
                    {"name": "Rahul Deshpande", "pan_number": "abcde1234f"},
                    {"name": "Meera Deshpande", "gender": "Female"},
                ],
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total_member"] == 4
        assert data["client"]["client_name"] == "Rahul Deshpande"
        assert data["members"][0]["pan_number"] == "ABCDE1234F"

        detail = await client.get(
            f"/api/v1/group-bookings/{group['id']}", headers=auth_headers(setup.staff)
        )
        assert len(detail.json()["data"]["client_bookings"]) == 1

    async def test_update_party_recounts(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        group = await _create_group(client, setup, catalog)
        created = await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id, "members": [{"name": "Rahul"}]},
        )
        party = created.json()["data"]

        response = await client.put(
            f"/api/v1/group-client-bookings/{party['id']}",
            headers=auth_headers(setup.staff),
            json={"number_of_adults": 3, "members": [{"name": "Neha"}, {"name": "Vikram"}]},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_member"] == 3
        assert sorted(m["name"] for m in data["members"]) == ["Neha", "Vikram"]

    async def test_list_parties(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        group = await _create_group(client, setup, catalog)
        await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id},
        )
        response = await client.get(
            f"/api/v1/group-bookings/{group['id']}/clients", headers=auth_headers(setup.staff)
        )
        assert len(response.json()["data"]) == 1

    async def test_group_with_parties_cannot_be_deleted(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        group = await _create_group(client, setup, catalog)
        await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id},
        )
        response = await client.delete(
            f"/api/v1/group-bookings/{group['id']}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409

    async def test_party_with_receipt_cannot_be_deleted(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        group = await _create_group(client, setup, catalog)
        created = await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id},
        )
        party_id = created.json()["data"]["id"]
        await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json={"group_client_booking_id": party_id, "payment_mode": "Cash", "amount": "5000"},
        )

        response = await client.delete(
            f"/api/v1/group-client-bookings/{party_id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409

    async def test_delete_party(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        group = await _create_group(client, setup, catalog)
        created = await client.post(
            f"/api/v1/group-bookings/{group['id']}/clients",
            headers=auth_headers(setup.staff),
            json={"client_id": catalog.client.id},
        )
        response = await client.delete(
            f"/api/v1/group-client-bookings/{created.json()['data']['id']}",
            headers=auth_headers(setup.admin),
        )
        assert response.status_code == 200
