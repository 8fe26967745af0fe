"""Schemas for Bookings module."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from voyage.modules.bookings.models import BookingType


class ItineraryDayIn(BaseModel):
    """One itinerary day; ``id`` identifies an existing day on update."""

    id: int | None = None
    day: int = Field(..., ge=1)
    travel_date: date | None = None
    description: str | None = None
    city_id: int | None = None


class ItineraryDayResponse(BaseModel):
    id: int
    day: int
    travel_date: date | None
    description: str | None
    city_id: int | None

    model_config = {"from_attributes": True}


class BookingFields(BaseModel):
    journey_date: date | None = None
    departure_date: date | None = None
    tour_id: int | None = None
    budget_field: str | None = Field(None, max_length=100)
    booking_detail: str | None = None
    is_journey: bool = False
    is_hotel: bool = False
    is_vehicle: bool = False
    is_package: bool = False
    remarks: str | None = None
    follow_up_date: date | None = None


class BookingCreate(BookingFields):
    """Branch is taken from the user unless an agency admin picks one."""

    booking_type: BookingType = BookingType.ENQUIRY
    booking_date: date = Field(default_factory=date.today)
    client_id: int
    branch_id: int | None = None
    number_of_adults: int = Field(1, ge=1)
    number_of_children_5_to_11: int = Field(0, ge=0)
    number_of_children_under_5: int = Field(0, ge=0)
    details: list[ItineraryDayIn] = []

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        if self.journey_date and self.departure_date and self.departure_date < self.journey_date:
            raise ValueError("Departure date cannot be before journey date")
        return self


class BookingUpdate(BaseModel):
    booking_type: BookingType | None = None
    booking_date: date | None = None
    journey_date: date | None = None
    departure_date: date | None = None
    client_id: int | None = None
    branch_id: int | None = None
    tour_id: int | None = None
    budget_field: str | None = Field(None, max_length=100)
    number_of_adults: int | None = Field(None, ge=1)
    number_of_children_5_to_11: int | None = Field(None, ge=0)
    number_of_children_under_5: int | None = Field(None, ge=0)
    booking_detail: str | None = None
    is_journey: bool | None = None
    is_hotel: bool | None = None
    is_vehicle: bool | None = None
    is_package: bool | None = None
    remarks: str | None = None
    follow_up_date: date | None = None
    details: list[ItineraryDayIn] | None = None


class BookingClient(BaseModel):
    id: int
    client_name: str
    mobile1: str

    model_config = {"from_attributes": True}


class BookingBranch(BaseModel):
    id: int
    branch_name: str

    model_config = {"from_attributes": True}


class BookingTour(BaseModel):
    id: int
    tour_title: str

    model_config = {"from_attributes": True}


class BookingResponse(BookingFields):
    id: int
    booking_number: str
    booking_type: str
    booking_date: date
    client_id: int
    branch_id: int
    number_of_adults: int
    number_of_children_5_to_11: int
    number_of_children_under_5: int
    client: BookingClient | None = None
    branch: BookingBranch | None = None
    tour: BookingTour | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingDetailResponse(BookingResponse):
    details: list[ItineraryDayResponse] = []
