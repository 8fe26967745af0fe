"""Schemas shared by the name-only reference data modules."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ReferenceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class ReferenceUpdate(ReferenceCreate):
    pass


class ReferenceResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
