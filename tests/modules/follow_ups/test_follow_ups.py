"""Tests for follow-up conversations on bookings and group bookings."""

from datetime import date, timedelta

from httpx import AsyncClient

from conftest import AgencySetup, Catalog, auth_headers
from voyage.modules.bookings.models import Booking


class TestFollowUps:
    async def test_add_updates_booking(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        next_call = date.today() + timedelta(days=3)
        response = await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(setup.staff),
            json={
                "booking_id": booking.id,
                "remarks": "Client wants a sea-facing room",
                "next_follow_up_date": next_call.isoformat(),
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"]["name"] == "Front Desk"
        assert data["follow_up_date"] == date.today().isoformat()

        detail = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers(setup.staff))
        assert detail.json()["data"]["remarks"] == "Client wants a sea-facing room"
        assert detail.json()["data"]["follow_up_date"] == next_call.isoformat()

    async def test_exactly_one_parent(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        neither = await client.post(
            "/api/v1/follow-ups", headers=auth_headers(setup.staff), json={"remarks": "Called"}
        )
        both = await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(setup.staff),
            json={"booking_id": booking.id, "group_booking_id": 1, "remarks": "Called"},
        )
        assert neither.status_code == 422
        assert both.status_code == 422

    async def test_next_date_before_follow_up(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        response = await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(setup.staff),
            json={
                "booking_id": booking.id,
                "follow_up_date": "2025-08-10",
                "next_follow_up_date": "2025-08-01",
                "remarks": "Called",
            },
        )
        assert response.status_code == 422

    async def test_other_branch_booking(
        self, client: AsyncClient, setup: AgencySetup, pune_booking: Booking
    ):
        response = await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(setup.staff),
            json={"booking_id": pune_booking.id, "remarks": "Called"},
        )
        assert response.status_code == 404

    async def test_list_newest_first(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        for day, remarks in (("2025-08-01", "First call"), ("2025-08-05", "Second call")):
            await client.post(
                "/api/v1/follow-ups",
                headers=auth_headers(setup.staff),
                json={"booking_id": booking.id, "follow_up_date": day, "remarks": remarks},
            )
        response = await client.get(
            f"/api/v1/follow-ups/booking/{booking.id}", headers=auth_headers(setup.staff)
        )
        assert [f["remarks"] for f in response.json()["data"]] == ["Second call", "First call"]

    async def test_group_booking_follow_up(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog
    ):
        group = await client.post(
            "/api/v1/group-bookings",
            headers=auth_headers(setup.staff),
            json={"tour_id": catalog.tour.id},
        )
        group_id = group.json()["data"]["id"]

        response = await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(setup.staff),
            json={"group_booking_id": group_id, "remarks": "Coach confirmed"},
        )
        assert response.status_code == 201

        listed = await client.get(
            f"/api/v1/follow-ups/group-booking/{group_id}", headers=auth_headers(setup.staff)
        )
        assert len(listed.json()["data"]) == 1
        detail = await client.get(
            f"/api/v1/group-bookings/{group_id}", headers=auth_headers(setup.staff)
        )
        assert detail.json()["data"]["remarks"] == "Coach confirmed"
