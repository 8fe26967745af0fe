"""Tests for the agency dashboard."""

from datetime import date, timedelta

from httpx import AsyncClient

from conftest import AgencySetup, auth_headers
from voyage.modules.bookings.models import Booking


class TestDashboardSummary:
    async def test_admin_sees_agency(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking, pune_booking: Booking
    ):
        response = await client.get("/api/v1/dashboard", headers=auth_headers(setup.admin))
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bookings_count"] == 2
        assert data["enquiries_count"] == 0
        assert data["clients_count"] == 1

    async def test_staff_sees_branch(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking, pune_booking: Booking
    ):
        response = await client.get("/api/v1/dashboard", headers=auth_headers(setup.pune_staff))
        data = response.json()["data"]
        assert data["bookings_count"] == 1
        assert data["clients_count"] == 1

    async def test_super_admin_has_no_dashboard(self, client: AsyncClient, super_admin):
        response = await client.get("/api/v1/dashboard", headers=auth_headers(super_admin))
        assert response.status_code == 404


class TestUpcomingFollowUps:
    async def _follow_up(self, client: AsyncClient, user, booking: Booking, days: int) -> None:
        await client.post(
            "/api/v1/follow-ups",
            headers=auth_headers(user),
            json={
                "booking_id": booking.id,
                "remarks": f"Call back in {days} days",
                "next_follow_up_date": (date.today() + timedelta(days=days)).isoformat(),
            },
        )

    async def test_week_ahead_only(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        await self._follow_up(client, setup.staff, booking, 5)
        await self._follow_up(client, setup.staff, booking, 2)
        await self._follow_up(client, setup.staff, booking, 30)

        summary = await client.get("/api/v1/dashboard", headers=auth_headers(setup.staff))
        assert summary.json()["data"]["upcoming_follow_ups_count"] == 2

        response = await client.get("/api/v1/dashboard/follow-ups", headers=auth_headers(setup.staff))
        data = response.json()["data"]
        assert data["total"] == 2
        assert [f["remarks"] for f in data["items"]] == ["Call back in 2 days", "Call back in 5 days"]
        assert data["items"][0]["booking_number"] == "TEST/001"
        assert data["items"][0]["user_name"] == "Front Desk"

    async def test_other_branch_hidden(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        await self._follow_up(client, setup.staff, booking, 1)
        response = await client.get(
            "/api/v1/dashboard/follow-ups", headers=auth_headers(setup.pune_staff)
        )
        assert response.json()["data"]["total"] == 0
