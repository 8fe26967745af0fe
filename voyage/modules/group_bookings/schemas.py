"""Schemas for Group Bookings module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.modules.bookings.schemas import (
    BookingBranch,
    BookingClient,
    BookingTour,
    ItineraryDayIn,
    ItineraryDayResponse,
)
from voyage.modules.clients.schemas import FoodType, Gender
from voyage.shared.utils.validators import validate_aadhar, validate_pan


class GroupBookingFields(BaseModel):
    journey_date: date | None = None
    tour_id: int | None = None
    booking_detail: str | None = None
    is_journey: bool = False
    is_hotel: bool = False
    is_vehicle: bool = False
    remarks: str | None = None
    follow_up_date: date | None = None


class GroupBookingCreate(GroupBookingFields):
    group_booking_date: date = Field(default_factory=date.today)
    branch_id: int | None = None
    details: list[ItineraryDayIn] = []


class GroupBookingUpdate(BaseModel):
    group_booking_date: date | None = None
    journey_date: date | None = None
    branch_id: int | None = None
    tour_id: int | None = None
    booking_detail: str | None = None
    is_journey: bool | None = None
    is_hotel: bool | None = None
    is_vehicle: bool | None = None
    remarks: str | None = None
    follow_up_date: date | None = None
    details: list[ItineraryDayIn] | None = None


class GroupBookingResponse(GroupBookingFields):
    id: int
    group_booking_number: str
    group_booking_date: date
    branch_id: int
    branch: BookingBranch | None = None
    tour: BookingTour | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberIn(BaseModel):
    """Traveller in a client's party; ``id`` identifies an existing one on update."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=200)
    gender: Gender | None = None
    relation: str | None = Field(None, max_length=50)
    aadhar_no: str | None = None
    date_of_birth: date | None = None
    anniversary_date: date | None = None
    food_type: FoodType | None = None
    mobile: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    passport_number: str | None = Field(None, max_length=20)
    pan_number: str | None = None

    @field_validator("aadhar_no")
    @classmethod
    def check_aadhar(cls, v: str | None) -> str | None:
        return validate_aadhar(v)

    @field_validator("pan_number")
    @classmethod
    def check_pan(cls, v: str | None) -> str | None:
        return validate_pan(v)


class MemberResponse(BaseModel):
    id: int
    name: str
    gender: str | None
    relation: str | None
    aadhar_no: str | None
    date_of_birth: date | None
    anniversary_date: date | None
    food_type: str | None
    mobile: str | None
    email: str | None
    passport_number: str | None
    pan_number: str | None

    model_config = {"from_attributes": True}


class GroupClientBookingCreate(BaseModel):
    client_id: int
    booking_date: date = Field(default_factory=date.today)
    number_of_adults: int = Field(1, ge=1)
    number_of_children_5_to_11: int = Field(0, ge=0)
    number_of_children_under_5: int = Field(0, ge=0)
    tour_cost: Decimal | None = Field(None, ge=0, decimal_places=2)
    notes: str | None = None
    is_journey: bool = False
    is_hotel: bool = False
    is_vehicle: bool = False
    members: list[MemberIn] = []


class GroupClientBookingUpdate(BaseModel):
    client_id: int | None = None
    booking_date: date | None = None
    number_of_adults: int | None = Field(None, ge=1)
    number_of_children_5_to_11: int | None = Field(None, ge=0)
    number_of_children_under_5: int | None = Field(None, ge=0)
    tour_cost: Decimal | None = Field(None, ge=0, decimal_places=2)
    notes: str | None = None
    is_journey: bool | None = None
    is_hotel: bool | None = None
    is_vehicle: bool | None = None
    members: list[MemberIn] | None = None


class GroupClientBookingResponse(BaseModel):
    id: int
    group_booking_id: int
    client_id: int
    client: BookingClient | None = None
    booking_date: date
    number_of_adults: int
    number_of_children_5_to_11: int
    number_of_children_under_5: int
    total_member: int
    tour_cost: Decimal | None
    notes: str | None
    is_journey: bool
    is_hotel: bool
    is_vehicle: bool
    members: list[MemberResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GroupBookingDetailResponse(GroupBookingResponse):
    details: list[ItineraryDayResponse] = []
    client_bookings: list[GroupClientBookingResponse] = []
