"""Schemas for Follow-ups module."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class FollowUpCreate(BaseModel):
    """Follow-up of exactly one booking or group booking."""

    booking_id: int | None = None
    group_booking_id: int | None = None
    follow_up_date: date = Field(default_factory=date.today)
    next_follow_up_date: date | None = None
    remarks: str = Field(..., min_length=1, max_length=2000)

    @model_validator(mode="after")
    def check_parent(self) -> "FollowUpCreate":
        if (self.booking_id is None) == (self.group_booking_id is None):
            raise ValueError("Provide either booking_id or group_booking_id")
        if self.next_follow_up_date and self.next_follow_up_date < self.follow_up_date:
            raise ValueError("next_follow_up_date cannot be before follow_up_date")
        return self


class FollowUpUser(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class FollowUpResponse(BaseModel):
    id: int
    booking_id: int | None
    group_booking_id: int | None
    user_id: int
    user: FollowUpUser | None = None
    follow_up_date: date
    next_follow_up_date: date | None
    remarks: str
    created_at: datetime

    model_config = {"from_attributes": True}
