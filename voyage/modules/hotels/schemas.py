"""Schemas for Hotels module."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.shared.utils.validators import validate_ifsc, validate_pan


class HotelFields(BaseModel):
    hotel_address_line1: str | None = Field(None, max_length=255)
    hotel_address_line2: str | None = Field(None, max_length=255)
    hotel_address_line3: str | None = Field(None, max_length=255)
    hotel_pincode: str | None = Field(None, max_length=10)
    hotel_country_id: int | None = None
    hotel_state_id: int | None = None
    hotel_city_id: int | None = None

    office_address_line1: str | None = Field(None, max_length=255)
    office_address_line2: str | None = Field(None, max_length=255)
    office_address_line3: str | None = Field(None, max_length=255)
    office_pincode: str | None = Field(None, max_length=10)
    office_country_id: int | None = None
    office_state_id: int | None = None
    office_city_id: int | None = None

    contact_person: str | None = Field(None, max_length=200)
    hotel_contact_no1: str | None = Field(None, max_length=20)
    hotel_contact_no2: str | None = Field(None, max_length=20)
    office_contact_no1: str | None = Field(None, max_length=20)
    office_contact_no2: str | None = Field(None, max_length=20)
    email1: EmailStr | None = None
    email2: EmailStr | None = None
    website: str | None = Field(None, max_length=255)
    pan_number: str | None = None

    bank_name1: str | None = Field(None, max_length=200)
    bank_account_number1: str | None = Field(None, max_length=50)
    branch1: str | None = Field(None, max_length=200)
    beneficiary_name1: str | None = Field(None, max_length=200)
    ifsc_code1: str | None = None
    swift_code1: str | None = Field(None, max_length=11)
    bank_name2: str | None = Field(None, max_length=200)
    bank_account_number2: str | None = Field(None, max_length=50)
    branch2: str | None = Field(None, max_length=200)
    beneficiary_name2: str | None = Field(None, max_length=200)
    ifsc_code2: str | None = None
    swift_code2: str | None = Field(None, max_length=11)

    @field_validator("pan_number")
    @classmethod
    def check_pan(cls, v: str | None) -> str | None:
        return validate_pan(v)

    @field_validator("ifsc_code1", "ifsc_code2")
    @classmethod
    def check_ifsc(cls, v: str | None) -> str | None:
        return validate_ifsc(v)


class HotelCreate(HotelFields):
    hotel_name: str = Field(..., min_length=1, max_length=200)


class HotelUpdate(HotelFields):
    hotel_name: str | None = Field(None, min_length=1, max_length=200)


class HotelCity(BaseModel):
    id: int
    city_name: str

    model_config = {"from_attributes": True}


class HotelResponse(HotelFields):
    id: int
    hotel_name: str
    email1: str | None = None
    email2: str | None = None
    hotel_city: HotelCity | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
