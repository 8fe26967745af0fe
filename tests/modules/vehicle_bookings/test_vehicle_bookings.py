"""Tests for vehicle bookings with their itinerary and hotel legs."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


def _vehicle(booking_id: int, catalog: Catalog, **overrides) -> dict:
    payload = {
        "booking_id": booking_id,
        "vehicle_booking_date": "2025-11-20",
        "vehicle_id": catalog.vehicle.id,
        "agent_id": catalog.agent.id,
        "from_date": "2025-12-01",
        "to_date": "2025-12-04",
        "city_id": catalog.goa.id,
        "pickup_place": "Madgaon station",
        "itineraries": [
            {"day": 1, "description": "Station to hotel", "city_id": catalog.goa.id},
            {"day": 2, "description": "North Goa sightseeing"},
        ],
        "hotel_legs": [
            {
                "city_id": catalog.goa.id,
                "hotel_id": catalog.hotel.id,
                "check_in_date": "2025-12-01",
                "check_out_date": "2025-12-04",
                "number_of_rooms": 1,
            }
        ],
    }
    payload.update(overrides)
    return payload


class TestVehicleBookings:
    async def test_create(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking):
        response = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["vehicle_hrv_number"] == "VHRV/2025-26/001"
        assert data["days"] == 4
        assert data["vehicle"]["name"] == "Innova Crysta"
        assert data["agent"]["agent_name"] == "Coastal Cabs"
        assert [i["day"] for i in data["itineraries"]] == [1, 2]
        assert data["hotel_legs"][0]["number_of_nights"] == 3

    async def test_to_date_before_from_date(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog, to_date="2025-11-30"),
        )
        assert response.status_code == 422

    async def test_unknown_leg_hotel(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog, hotel_legs=[{"hotel_id": 999}]),
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "hotel_legs.0.hotel_id"

    async def test_update_syncs_children(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        created = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog),
        )
        data = created.json()["data"]
        day_two = data["itineraries"][1]

        payload = _vehicle(booking.id, catalog, number_of_vehicles=2)
        payload.pop("booking_id")
        payload["itineraries"] = [{"id": day_two["id"], "day": 1, "description": "Airport pickup"}]
        payload["hotel_legs"] = None

        response = await client.put(
            f"/api/v1/vehicle-bookings/{data['id']}", headers=auth_headers(setup.staff), json=payload
        )
        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["number_of_vehicles"] == 2
        assert [(i["id"], i["description"]) for i in updated["itineraries"]] == [
            (day_two["id"], "Airport pickup")
        ]
        assert len(updated["hotel_legs"]) == 1
        assert updated["vehicle_hrv_number"] == data["vehicle_hrv_number"]

    async def test_other_branch_cannot_read(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        created = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog),
        )
        response = await client.get(
            f"/api/v1/vehicle-bookings/{created.json()['data']['id']}",
            headers=auth_headers(setup.pune_staff),
        )
        assert response.status_code == 404

    async def test_agent_in_use_cannot_be_deleted(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog),
        )
        response = await client.delete(
            f"/api/v1/agents/{catalog.agent.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409

    async def test_delete(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking):
        created = await client.post(
            "/api/v1/vehicle-bookings",
            headers=auth_headers(setup.staff),
            json=_vehicle(booking.id, catalog),
        )
        response = await client.delete(
            f"/api/v1/vehicle-bookings/{created.json()['data']['id']}",
            headers=auth_headers(setup.admin),
        )
        assert response.status_code == 200
