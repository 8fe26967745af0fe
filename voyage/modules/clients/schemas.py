"""Schemas for Clients module."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.shared.utils.validators import validate_aadhar, validate_gstin, validate_pan

Gender = Literal["Male", "Female", "Other"]
FoodType = Literal["Veg", "Non-Veg", "Jain"]


class FamilyFriendIn(BaseModel):
    """Family member or friend; ``id`` identifies an existing one on update."""

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

    @field_validator("aadhar_no")
    @classmethod
    def check_aadhar(cls, v: str | None) -> str | None:
        return validate_aadhar(v)


class FamilyFriendResponse(BaseModel):
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

    model_config = {"from_attributes": True}


class ClientFields(BaseModel):
    gender: Gender | None = None
    email: EmailStr | None = None
    date_of_birth: date | None = None
    marriage_date: date | None = None
    refer_by: str | None = Field(None, max_length=200)
    address1: str | None = Field(None, max_length=255)
    address2: str | None = Field(None, max_length=255)
    state_id: int | None = None
    city_id: int | None = None
    pincode: str | None = Field(None, max_length=10)
    mobile2: str | None = Field(None, max_length=20)
    gstin: str | None = None
    passport_no: str | None = Field(None, max_length=20)
    pan_no: str | None = None
    aadhar_no: str | None = None

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str | None) -> str | None:
        return validate_gstin(v)

    @field_validator("pan_no")
    @classmethod
    def check_pan(cls, v: str | None) -> str | None:
        return validate_pan(v)

    @field_validator("aadhar_no")
    @classmethod
    def check_aadhar(cls, v: str | None) -> str | None:
        return validate_aadhar(v)


class ClientCreate(ClientFields):
    client_name: str = Field(..., min_length=1, max_length=200)
    mobile1: str = Field(..., min_length=1, max_length=20)
    family_friends: list[FamilyFriendIn] = []


class ClientUpdate(ClientFields):
    """Omit ``family_friends`` to leave them untouched; send a list to replace them."""

    client_name: str | None = Field(None, min_length=1, max_length=200)
    mobile1: str | None = Field(None, min_length=1, max_length=20)
    family_friends: list[FamilyFriendIn] | None = None


class ClientCity(BaseModel):
    id: int
    city_name: str

    model_config = {"from_attributes": True}


class ClientResponse(BaseModel):
    id: int
    client_name: str
    gender: str | None
    email: str | None
    date_of_birth: date | None
    marriage_date: date | None
    refer_by: str | None
    address1: str | None
    address2: str | None
    state_id: int | None
    city_id: int | None
    city: ClientCity | None = None
    pincode: str | None
    mobile1: str
    mobile2: str | None
    gstin: str | None
    passport_no: str | None
    pan_no: str | None
    aadhar_no: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientDetailResponse(ClientResponse):
    family_friends: list[FamilyFriendResponse] = []
