"""Schemas for dashboard API (agency main page)."""

from datetime import date

from voyage.shared.schemas.base import BaseSchema


class DashboardResponse(BaseSchema):
    """Headline counts for the agency, or the user's branch."""

    enquiries_count: int = 0
    bookings_count: int = 0
    group_bookings_count: int = 0
    clients_count: int = 0
    upcoming_follow_ups_count: int = 0


class UpcomingFollowUp(BaseSchema):
    id: int
    booking_id: int
    booking_number: str
    next_follow_up_date: date
    remarks: str
    user_name: str
