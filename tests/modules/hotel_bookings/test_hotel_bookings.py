"""Tests for hotel bookings (hotel reservation vouchers)."""

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers


def _stay(booking_id: int, catalog: Catalog, **overrides) -> dict:
    payload = {
        "booking_id": booking_id,
        "hotel_booking_date": "2025-11-20",
        "party_coming_from": "Pune",
        "check_in_date": "2025-12-01",
        "check_out_date": "2025-12-04",
        "hotel_id": catalog.hotel.id,
        "city_id": catalog.goa.id,
        "accommodation_id": catalog.accommodation.id,
        "plan": "CP",
        "rooms": 2,
    }
    payload.update(overrides)
    return payload


class TestHotelBookings:
    async def test_create_computes_nights_and_number(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/hotel-bookings", headers=auth_headers(setup.staff), json=_stay(booking.id, catalog)
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["nights"] == 3
        assert data["hrv_number"] == "HRV/2025-26/001"
        assert data["hotel"]["hotel_name"] == "Sea Breeze Resort"

    async def test_explicit_nights_kept(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json=_stay(booking.id, catalog, nights=2),
        )
        assert response.json()["data"]["nights"] == 2

    async def test_check_out_before_check_in(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json=_stay(booking.id, catalog, check_out_date="2025-11-30"),
        )
        assert response.status_code == 422

    async def test_booking_of_other_branch(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, pune_booking
    ):
        response = await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json=_stay(pune_booking.id, catalog),
        )
        assert response.status_code == 404

    async def test_unknown_accommodation(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        response = await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json=_stay(booking.id, catalog, accommodation_id=999),
        )
        assert response.status_code == 422

    async def test_list_for_booking(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json=_stay(booking.id, catalog, check_in_date="2025-12-04", check_out_date="2025-12-06"),
        )
        await client.post(
            "/api/v1/hotel-bookings", headers=auth_headers(setup.staff), json=_stay(booking.id, catalog)
        )

        response = await client.get(
            f"/api/v1/hotel-bookings/booking/{booking.id}", headers=auth_headers(setup.staff)
        )
        assert [h["check_in_date"] for h in response.json()["data"]] == ["2025-12-01", "2025-12-04"]

    async def test_update_dates_recomputes_nights(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        created = await client.post(
            "/api/v1/hotel-bookings", headers=auth_headers(setup.staff), json=_stay(booking.id, catalog)
        )
        hotel_booking_id = created.json()["data"]["id"]

        response = await client.put(
            f"/api/v1/hotel-bookings/{hotel_booking_id}",
            headers=auth_headers(setup.staff),
            json={"check_out_date": "2025-12-06", "confirmation_number": "SB-7781"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["nights"] == 5
        assert data["confirmation_number"] == "SB-7781"
        assert data["hrv_number"] == created.json()["data"]["hrv_number"]

    async def test_update_rejects_inverted_dates(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        created = await client.post(
            "/api/v1/hotel-bookings", headers=auth_headers(setup.staff), json=_stay(booking.id, catalog)
        )
        response = await client.put(
            f"/api/v1/hotel-bookings/{created.json()['data']['id']}",
            headers=auth_headers(setup.staff),
            json={"check_in_date": "2025-12-10"},
        )
        assert response.status_code == 422

    async def test_delete(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking):
        created = await client.post(
            "/api/v1/hotel-bookings", headers=auth_headers(setup.staff), json=_stay(booking.id, catalog)
        )
        hotel_booking_id = created.json()["data"]["id"]

        denied = await client.delete(
            f"/api/v1/hotel-bookings/{hotel_booking_id}", headers=auth_headers(setup.staff)
        )
        assert denied.status_code == 403

        response = await client.delete(
            f"/api/v1/hotel-bookings/{hotel_booking_id}", headers=auth_headers(setup.branch_admin)
        )
        assert response.status_code == 200
