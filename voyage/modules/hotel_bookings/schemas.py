"""Schemas for Hotel Bookings module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class HotelBookingFields(BaseModel):
    hotel_booking_date: date | None = None
    party_coming_from: str = Field(..., min_length=1, max_length=200)
    check_in_date: date
    check_out_date: date
    nights: int | None = Field(None, ge=0)
    city_id: int | None = None
    hotel_id: int
    plan: str | None = Field(None, max_length=20)
    rooms: int = Field(1, ge=1)
    accommodation_id: int | None = None
    tariff_package: str | None = Field(None, max_length=200)
    accommodation_note: str | None = None
    extra_bed: bool = False
    beds: int | None = Field(None, ge=0)
    extra_bed_cost: Decimal | None = Field(None, ge=0, decimal_places=2)
    booking_confirmed_by: str | None = Field(None, max_length=200)
    confirmation_number: str | None = Field(None, max_length=100)
    billing_instructions: str | None = None
    special_requirement: str | None = None
    notes: str | None = None
    bill_description: str | None = None

    @model_validator(mode="after")
    def check_stay(self):
        if self.check_out_date < self.check_in_date:
            raise ValueError("check_out_date cannot be before check_in_date")
        if self.nights is None:
            self.nights = (self.check_out_date - self.check_in_date).days
        return self


class HotelBookingCreate(HotelBookingFields):
    booking_id: int


class HotelBookingUpdate(BaseModel):
    hotel_booking_date: date | None = None
    party_coming_from: str | None = Field(None, min_length=1, max_length=200)
    check_in_date: date | None = None
    check_out_date: date | None = None
    nights: int | None = Field(None, ge=0)
    city_id: int | None = None
    hotel_id: int | None = None
    plan: str | None = Field(None, max_length=20)
    rooms: int | None = Field(None, ge=1)
    accommodation_id: int | None = None
    tariff_package: str | None = Field(None, max_length=200)
    accommodation_note: str | None = None
    extra_bed: bool | None = None
    beds: int | None = Field(None, ge=0)
    extra_bed_cost: Decimal | None = Field(None, ge=0, decimal_places=2)
    booking_confirmed_by: str | None = Field(None, max_length=200)
    confirmation_number: str | None = Field(None, max_length=100)
    billing_instructions: str | None = None
    special_requirement: str | None = None
    notes: str | None = None
    bill_description: str | None = None


class HotelSummary(BaseModel):
    id: int
    hotel_name: str

    model_config = {"from_attributes": True}


class HotelBookingResponse(BaseModel):
    id: int
    booking_id: int
    hrv_number: str
    hotel_booking_date: date | None
    party_coming_from: str
    check_in_date: date
    check_out_date: date
    nights: int
    city_id: int | None
    hotel_id: int
    hotel: HotelSummary | None = None
    plan: str | None
    rooms: int
    accommodation_id: int | None
    tariff_package: str | None
    accommodation_note: str | None
    extra_bed: bool
    beds: int | None
    extra_bed_cost: Decimal | None
    booking_confirmed_by: str | None
    confirmation_number: str | None
    billing_instructions: str | None
    special_requirement: str | None
    notes: str | None
    bill_description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
