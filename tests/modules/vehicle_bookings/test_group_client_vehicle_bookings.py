"""Tests for vehicle bookings hired for one party of a group booking."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


async def _create_party(client: AsyncClient, setup: AgencySetup, catalog: Catalog) -> dict:
    group = await client.post(
        "/api/v1/group-bookings",
        headers=auth_headers(setup.staff),
        json={
            "group_booking_date": "2025-06-15",
            "journey_date": "2025-12-20",
            "tour_id": catalog.tour.id,
        },
    )
    assert group.status_code == 201
    party = await client.post(
        f"/api/v1/group-bookings/{group.json()['data']['id']}/clients",
        headers=auth_headers(setup.staff),
        json={"client_id": catalog.client.id, "number_of_adults": 2},
    )
    assert party.status_code == 201
    return party.json()["data"]


def _vehicle(group_client_booking_id: int, catalog: Catalog, **overrides) -> dict:
    payload = {
        "group_client_booking_id": group_client_booking_id,
        "vehicle_booking_date": "2025-11-20",
        "vehicle_id": catalog.vehicle.id,
        "from_date": "2025-12-20",
        "to_date": "2025-12-23",
        "pickup_place": "Panaji bus stand",
        "itineraries": [{"day": 1, "description": "Bus stand to hotel", "city_id": catalog.goa.id}],
        "hotel_legs": [
            {
                "city_id": catalog.goa.id,
                "hotel_id": catalog.hotel.id,
                "check_in_date": "2025-12-20",
                "check_out_date": "2025-12-23",
            }
        ],
    }
    payload.update(overrides)
    return payload


class TestGroupClientVehicleBookings:
    async def test_create(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        party = await _create_party(client, setup, catalog)
        response = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["vehicle_hrv_number"] == "VHRV/2025-26/001"
        assert data["group_client_booking_id"] == party["id"]
        assert data["booking_id"] is None
        assert data["days"] == 4
        assert data["hotel_legs"][0]["number_of_nights"] == 3

    async def test_numbering_shared_with_bookings(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        party = await _create_party(client, setup, catalog)
        await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json={
                "booking_id": booking.id,
                "vehicle_booking_date": "2025-11-20",
                "from_date": "2025-12-01",
            },
        )
        response = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        assert response.json()["data"]["vehicle_hrv_number"] == "VHRV/2025-26/002"

    async def test_requires_group_client_booking(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        payload = _vehicle(0, catalog)
        payload.pop("group_client_booking_id")
        response = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=payload,
        )
        assert response.status_code == 422

    async def test_single_parent(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        party = await _create_party(client, setup, catalog)
        response = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog, booking_id=booking.id),
        )
        assert response.status_code == 422

        response = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json={"from_date": "2025-12-01"},
        )
        assert response.status_code == 422

    async def test_unknown_party(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(999, catalog),
        )
        assert response.status_code == 404

    async def test_list_for_party(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        party = await _create_party(client, setup, catalog)
        await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json={
                "booking_id": booking.id,
                "vehicle_booking_date": "2025-11-20",
                "from_date": "2025-12-01",
            },
        )

        response = await client.get(
            f"/api/v1/group-client-vehicle-bookings/group-client-booking/{party['id']}",
            headers=auth_headers(setup.staff),
        )
        assert response.status_code == 200
        assert [v["group_client_booking_id"] for v in response.json()["data"]] == [party["id"]]

        for_booking = await client.get(
            f"/api/v1/vehicle-bookings/booking/{booking.id}", headers=auth_headers(setup.staff)
        )
        assert len(for_booking.json()["data"]) == 1

    async def test_other_branch_cannot_read(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        party = await _create_party(client, setup, catalog)
        created = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        vehicle_booking_id = created.json()["data"]["id"]

        detail = await client.get(
            f"/api/v1/group-client-vehicle-bookings/{vehicle_booking_id}",
            headers=auth_headers(setup.pune_staff),
        )
        listing = await client.get(
            f"/api/v1/group-client-vehicle-bookings/group-client-booking/{party['id']}",
            headers=auth_headers(setup.pune_staff),
        )
        assert detail.status_code == 404
        assert listing.status_code == 404

    async def test_update_syncs_legs(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        party = await _create_party(client, setup, catalog)
        created = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        data = created.json()["data"]

        payload = _vehicle(party["id"], catalog, number_of_vehicles=2, hotel_legs=[])
        payload.pop("group_client_booking_id")
        payload["itineraries"] = None
        response = await client.put(
            f"/api/v1/group-client-vehicle-bookings/{data['id']}",
            headers=auth_headers(setup.staff),
            json=payload,
        )
        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["number_of_vehicles"] == 2
        assert updated["hotel_legs"] == []
        assert len(updated["itineraries"]) == 1
        assert updated["group_client_booking_id"] == party["id"]

    async def test_party_with_vehicle_booking_cannot_be_deleted(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        party = await _create_party(client, setup, catalog)
        await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        response = await client.delete(
            f"/api/v1/group-client-bookings/{party['id']}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409
        assert "vehicle bookings" in response.json()["message"]

    async def test_delete(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        party = await _create_party(client, setup, catalog)
        created = await client.post(
            "/api/v1/group-client-vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(party["id"], catalog),
        )
        response = await client.delete(
            f"/api/v1/group-client-vehicle-bookings/{created.json()['data']['id']}",
            headers=auth_headers(setup.admin),
        )
        assert response.status_code == 200

        party_delete = await client.delete(
            f"/api/v1/group-client-bookings/{party['id']}", headers=auth_headers(setup.admin)
        )
        assert party_delete.status_code == 200
