"""Schemas for Journey Bookings module."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from voyage.modules.journey_bookings.models import JourneyMode


class JourneyBookingFields(BaseModel):
    mode: JourneyMode
    from_place: str | None = Field(None, max_length=200)
    to_place: str | None = Field(None, max_length=200)
    journey_booking_date: date | None = None
    from_departure_date: datetime | None = None
    to_arrival_date: datetime | None = None
    food_type: str | None = Field(None, max_length=20)
    travel_class: str | None = Field(None, max_length=50)
    pnr_number: str | None = Field(None, max_length=50)
    train_name: str | None = Field(None, max_length=200)
    train_number: str | None = Field(None, max_length=20)
    bus_name: str | None = Field(None, max_length=200)
    flight_number: str | None = Field(None, max_length=20)
    bill_description: str | None = None

    @model_validator(mode="after")
    def check_times(self):
        if (
            self.from_departure_date
            and self.to_arrival_date
            and self.to_arrival_date < self.from_departure_date
        ):
            raise ValueError("to_arrival_date cannot be before from_departure_date")
        return self


class JourneyBookingCreate(JourneyBookingFields):
    booking_id: int


class JourneyBookingUpdate(JourneyBookingFields):
    """Full replacement of the journey details; the booking cannot change."""


class JourneyBookingResponse(JourneyBookingFields):
    id: int
    booking_id: int
    mode: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
