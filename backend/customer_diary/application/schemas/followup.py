"""Pydantic DTOs for diary follow-ups."""

from datetime import datetime

from pydantic import BaseModel, Field

from customer_diary.domain.entities import FollowupType


class FollowupCreate(BaseModel):
    """Schema for posting a follow-up; staff_code defaults to the signed-in user."""

    entry_type: FollowupType = FollowupType.NOTE
    message: str = Field(..., min_length=1, examples=["Left voicemail re: ETA"])
    staff_code: str | None = Field(None, max_length=16)


class FollowupUpdate(BaseModel):
    entry_type: FollowupType | None = None
    message: str | None = Field(None, min_length=1)


class FollowupResponse(BaseModel):
    id: str
    diary_id: str
    entry_type: FollowupType
    message: str
    staff_code: str
    created_at: datetime

    model_config = {"from_attributes": True}
