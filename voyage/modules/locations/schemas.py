"""Schemas for Locations module."""

from datetime import datetime

from pydantic import BaseModel, Field


class CountryCreate(BaseModel):
    country_name: str = Field(..., min_length=1, max_length=100)


class CountryUpdate(BaseModel):
    country_name: str = Field(..., min_length=1, max_length=100)


class CountryResponse(BaseModel):
    id: int
    country_name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StateCreate(BaseModel):
    country_id: int
    state_name: str = Field(..., min_length=1, max_length=100)


class StateUpdate(BaseModel):
    country_id: int | None = None
    state_name: str | None = Field(None, min_length=1, max_length=100)


class StateResponse(BaseModel):
    id: int
    country_id: int
    state_name: str
    country: CountryResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CityCreate(BaseModel):
    state_id: int
    city_name: str = Field(..., min_length=1, max_length=100)


class CityUpdate(BaseModel):
    state_id: int | None = None
    city_name: str | None = Field(None, min_length=1, max_length=100)


class CityStateSummary(BaseModel):
    id: int
    state_name: str
    country_id: int

    model_config = {"from_attributes": True}


class CityResponse(BaseModel):
    id: int
    state_id: int
    city_name: str
    state: CityStateSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
