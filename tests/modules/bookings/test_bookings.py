"""Tests for enquiries and bookings with their itineraries."""

from datetime import date, timedelta

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers
from voyage.shared.utils.dates import financial_year


def _booking_payload(catalog: Catalog, **overrides) -> dict:
    payload = {
        "client_id": catalog.client.id,
        "tour_id": catalog.tour.id,
        "journey_date": (date.today() + timedelta(days=30)).isoformat(),
        "departure_date": (date.today() + timedelta(days=33)).isoformat(),
        "number_of_adults": 2,
        "number_of_children_5_to_11": 1,
        "is_hotel": True,
        "details": [
            {"day": 1, "description": "Arrive Panaji, check in", "city_id": catalog.goa.id},
            {"day": 2, "description": "North Goa beaches", "city_id": catalog.goa.id},
        ],
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:
    async def test_staff_books_into_own_branch(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.staff),
            json=_booking_payload(catalog, branch_id=setup.pune.id),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["branch_id"] == setup.head_office.id
        assert data["booking_type"] == "Enquiry"
        assert data["booking_number"] == f"{financial_year(date.today())}/001"
        assert data["client"]["client_name"] == "Rahul Deshpande"
        assert [d["day"] for d in data["details"]] == [1, 2]

    async def test_numbers_are_sequential(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        first = await client.post(
            "/api/v1/bookings", headers=auth_headers(setup.staff), json=_booking_payload(catalog)
        )
        second = await client.post(
            "/api/v1/bookings", headers=auth_headers(setup.pune_staff), json=_booking_payload(catalog)
        )
        assert first.json()["data"]["booking_number"].endswith("/001")
        assert second.json()["data"]["booking_number"].endswith("/002")

    async def test_admin_must_choose_branch(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/bookings", headers=auth_headers(setup.admin), json=_booking_payload(catalog)
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "branch_id"

    async def test_admin_books_for_branch(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.admin),
            json=_booking_payload(catalog, branch_id=setup.pune.id, booking_type="Confirm"),
        )
        assert response.status_code == 201
        assert response.json()["data"]["branch"]["branch_name"] == "Pune"

    async def test_departure_before_journey(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.staff),
            json=_booking_payload(
                catalog, journey_date="2025-12-10", departure_date="2025-12-01"
            ),
        )
        assert response.status_code == 422

    async def test_unknown_itinerary_city(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        response = await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.staff),
            json=_booking_payload(catalog, details=[{"day": 1, "city_id": 999}]),
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "details.0.city_id"

    async def test_unknown_client(self, client: AsyncClient, setup: AgencySetup, catalog: Catalog):
        response = await client.post(
            "/api/v1/bookings",
            headers=auth_headers(setup.staff),
            json=_booking_payload(catalog, client_id=999),
        )
        assert response.status_code == 422


class TestListBookings:
    async def test_enquiries_and_bookings_are_separate(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        await client.post(
            "/api/v1/bookings", headers=auth_headers(setup.staff), json=_booking_payload(catalog)
        )

        bookings = await client.get("/api/v1/bookings", headers=auth_headers(setup.staff))
        enquiries = await client.get("/api/v1/bookings/enquiries", headers=auth_headers(setup.staff))

        assert [b["booking_number"] for b in bookings.json()["data"]["items"]] == ["TEST/001"]
        assert enquiries.json()["data"]["total"] == 1

    async def test_branch_scope(
        self, client: AsyncClient, setup: AgencySetup, booking, pune_booking
    ):
        staff = await client.get("/api/v1/bookings", headers=auth_headers(setup.staff))
        admin = await client.get("/api/v1/bookings", headers=auth_headers(setup.admin))

        assert [b["booking_number"] for b in staff.json()["data"]["items"]] == ["TEST/001"]
        assert admin.json()["data"]["total"] == 2

    async def test_search_by_tour(self, client: AsyncClient, setup: AgencySetup, booking):
        hit = await client.get(
            "/api/v1/bookings", headers=auth_headers(setup.admin), params={"tour_title": "goa"}
        )
        miss = await client.get(
            "/api/v1/bookings", headers=auth_headers(setup.admin), params={"search": "kerala"}
        )
        assert hit.json()["data"]["total"] == 1
        assert miss.json()["data"]["total"] == 0

    async def test_date_range(self, client: AsyncClient, setup: AgencySetup, booking):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        response = await client.get(
            "/api/v1/bookings", headers=auth_headers(setup.admin), params={"from_date": tomorrow}
        )
        assert response.json()["data"]["total"] == 0

    async def test_other_branch_booking_not_found(
        self, client: AsyncClient, setup: AgencySetup, pune_booking
    ):
        response = await client.get(
            f"/api/v1/bookings/{pune_booking.id}", headers=auth_headers(setup.staff)
        )
        assert response.status_code == 404


class TestUpdateBooking:
    async def test_confirm_enquiry_and_edit_itinerary(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        created = await client.post(
            "/api/v1/bookings", headers=auth_headers(setup.staff), json=_booking_payload(catalog)
        )
        data = created.json()["data"]
        day_one = data["details"][0]

        response = await client.put(
            f"/api/v1/bookings/{data['id']}",
            headers=auth_headers(setup.staff),
            json={
                "booking_type": "Confirm",
                "details": [
                    {"id": day_one["id"], "day": 1, "description": "Arrive Mopa airport"},
                    {"day": 2, "description": "Old Goa churches"},
                    {"day": 3, "description": "Depart"},
                ],
            },
        )
        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["booking_type"] == "Confirm"
        assert [d["description"] for d in updated["details"]] == [
            "Arrive Mopa airport",
            "Old Goa churches",
            "Depart",
        ]
        assert updated["details"][0]["id"] == day_one["id"]

    async def test_staff_cannot_move_branch(
        self, client: AsyncClient, setup: AgencySetup, booking
    ):
        response = await client.put(
            f"/api/v1/bookings/{booking.id}",
            headers=auth_headers(setup.staff),
            json={"branch_id": setup.pune.id},
        )
        assert response.status_code == 422

    async def test_admin_moves_branch(self, client: AsyncClient, setup: AgencySetup, booking):
        response = await client.put(
            f"/api/v1/bookings/{booking.id}",
            headers=auth_headers(setup.admin),
            json={"branch_id": setup.pune.id},
        )
        assert response.status_code == 200
        assert response.json()["data"]["branch_id"] == setup.pune.id


class TestDeleteBooking:
    async def test_staff_cannot_delete(self, client: AsyncClient, setup: AgencySetup, booking):
        response = await client.delete(
            f"/api/v1/bookings/{booking.id}", headers=auth_headers(setup.staff)
        )
        assert response.status_code == 403

    async def test_branch_admin_deletes(self, client: AsyncClient, setup: AgencySetup, booking):
        response = await client.delete(
            f"/api/v1/bookings/{booking.id}", headers=auth_headers(setup.branch_admin)
        )
        assert response.status_code == 200

    async def test_booking_with_hotel_voucher(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking
    ):
        await client.post(
            "/api/v1/hotel-bookings",
            headers=auth_headers(setup.staff),
            json={
                "booking_id": booking.id,
                "hotel_id": catalog.hotel.id,
                "party_coming_from": "Pune",
                "check_in_date": "2025-12-01",
                "check_out_date": "2025-12-03",
            },
        )
        response = await client.delete(
            f"/api/v1/bookings/{booking.id}", headers=auth_headers(setup.admin)
        )
        assert response.status_code == 409
        assert "hotel bookings" in response.json()["message"]
