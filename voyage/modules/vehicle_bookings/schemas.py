"""Schemas for Vehicle Bookings module."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from voyage.modules.bookings.schemas import ItineraryDayIn, ItineraryDayResponse


class HotelLegIn(BaseModel):
    """Overnight stop; ``id`` identifies an existing leg on update."""

    id: int | None = None
    city_id: int | None = None
    hotel_id: int | None = None
    check_in_date: date | None = None
    check_out_date: date | None = None
    number_of_rooms: int | None = Field(None, ge=1)
    plan: str | None = Field(None, max_length=20)
    number_of_nights: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def fill_nights(self):
        if self.check_in_date and self.check_out_date:
            if self.check_out_date < self.check_in_date:
                raise ValueError("check_out_date cannot be before check_in_date")
            if self.number_of_nights is None:
                self.number_of_nights = (self.check_out_date - self.check_in_date).days
        return self


class HotelLegResponse(BaseModel):
    id: int
    city_id: int | None
    hotel_id: int | None
    check_in_date: date | None
    check_out_date: date | None
    number_of_rooms: int | None
    plan: str | None
    number_of_nights: int | None

    model_config = {"from_attributes": True}


class VehicleBookingFields(BaseModel):
    vehicle_booking_date: date | None = None
    vehicle_id: int | None = None
    number_of_vehicles: int = Field(1, ge=1)
    from_date: date
    to_date: date | None = None
    days: int | None = Field(None, ge=1)
    city_id: int | None = None
    agent_id: int | None = None
    pickup_place: str | None = Field(None, max_length=255)
    terms: str | None = None
    special_request: str | None = None
    vehicle_note: str | None = None
    special_note: str | None = None
    summary_note: str | None = None
    bill_description: str | None = None

    @model_validator(mode="after")
    def check_period(self):
        if self.to_date:
            if self.to_date < self.from_date:
                raise ValueError("to_date cannot be before from_date")
            if self.days is None:
                self.days = (self.to_date - self.from_date).days + 1
        return self


class VehicleBookingCreate(VehicleBookingFields):
    """Vehicle booking against exactly one booking or group client booking."""

    booking_id: int | None = None
    group_client_booking_id: int | None = None
    itineraries: list[ItineraryDayIn] = []
    hotel_legs: list[HotelLegIn] = []

    @model_validator(mode="after")
    def check_parent(self):
        if (self.booking_id is None) == (self.group_client_booking_id is None):
            raise ValueError("Provide either booking_id or group_client_booking_id")
        return self


class GroupClientVehicleBookingCreate(VehicleBookingCreate):
    group_client_booking_id: int


class VehicleBookingUpdate(VehicleBookingFields):
    """Replaces the vehicle details; ``None`` child lists are left untouched."""

    itineraries: list[ItineraryDayIn] | None = None
    hotel_legs: list[HotelLegIn] | None = None


class VehicleSummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class AgentSummary(BaseModel):
    id: int
    agent_name: str

    model_config = {"from_attributes": True}


class VehicleBookingResponse(VehicleBookingFields):
    id: int
    booking_id: int | None
    group_client_booking_id: int | None
    vehicle_hrv_number: str
    vehicle: VehicleSummary | None = None
    agent: AgentSummary | None = None
    itineraries: list[ItineraryDayResponse] = []
    hotel_legs: list[HotelLegResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
