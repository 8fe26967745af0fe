"""Schemas for Tours module."""

from datetime import datetime

from pydantic import BaseModel, Field


class TourCreate(BaseModel):
    tour_title: str = Field(..., min_length=1, max_length=200)
    tour_type: str | None = Field(None, max_length=50)
    destination: str | None = Field(None, max_length=200)
    days: int | None = Field(None, ge=0)
    nights: int | None = Field(None, ge=0)
    sector_id: int | None = None
    notes: str | None = None


class TourUpdate(BaseModel):
    tour_title: str | None = Field(None, min_length=1, max_length=200)
    tour_type: str | None = Field(None, max_length=50)
    destination: str | None = Field(None, max_length=200)
    days: int | None = Field(None, ge=0)
    nights: int | None = Field(None, ge=0)
    sector_id: int | None = None
    notes: str | None = None


class TourSector(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class TourResponse(BaseModel):
    id: int
    tour_title: str
    tour_type: str | None
    destination: str | None
    days: int | None
    nights: int | None
    sector_id: int | None
    sector: TourSector | None = None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
