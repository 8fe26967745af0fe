"""Schemas for Agents module."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from voyage.shared.utils.validators import validate_ifsc, validate_pan


class AgentFields(BaseModel):
    address_line1: str | None = Field(None, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    address_line3: str | None = Field(None, max_length=255)
    country_id: int | None = None
    state_id: int | None = None
    city_id: int | None = None
    pincode: str | None = Field(None, max_length=10)

    contact_person_name: str | None = Field(None, max_length=200)
    mobile1: str | None = Field(None, max_length=20)
    mobile2: str | None = Field(None, max_length=20)
    email1: EmailStr | None = None
    email2: EmailStr | None = None
    website_name: str | None = Field(None, max_length=255)
    pan_number: str | None = None
    landline_number1: str | None = Field(None, max_length=20)
    landline_number2: str | None = Field(None, max_length=20)

    bank1_id: int | None = None
    bank_account_number1: str | None = Field(None, max_length=50)
    branch1: str | None = Field(None, max_length=200)
    beneficiary_name1: str | None = Field(None, max_length=200)
    ifsc_code1: str | None = None
    swift_code1: str | None = Field(None, max_length=11)
    bank2_id: int | None = None
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


class AgentCreate(AgentFields):
    agent_name: str = Field(..., min_length=1, max_length=200)


class AgentUpdate(AgentFields):
    agent_name: str | None = Field(None, min_length=1, max_length=200)


class AgentCity(BaseModel):
    id: int
    city_name: str

    model_config = {"from_attributes": True}


class AgentResponse(AgentFields):
    id: int
    agent_name: str
    email1: str | None = None
    email2: str | None = None
    city: AgentCity | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
