"""Pydantic DTOs for staff accounts."""

from datetime import datetime

from pydantic import BaseModel, Field

from customer_diary.domain.entities import StaffRole


class StaffUserCreate(BaseModel):
    staff_code: str = Field(
        ..., min_length=2, max_length=16, pattern=r"^[A-Za-z0-9]+$", examples=["JDO"]
    )
    full_name: str = Field(..., min_length=1, max_length=255)
    pin: str = Field(..., min_length=4, max_length=12, pattern=r"^\d+$")
    role: StaffRole = StaffRole.STAFF


class StaffUserUpdate(BaseModel):
    """Schema for updating a staff account — all fields optional."""

    full_name: str | None = Field(None, min_length=1, max_length=255)
    pin: str | None = Field(None, min_length=4, max_length=12, pattern=r"^\d+$")
    role: StaffRole | None = None


class StaffUserResponse(BaseModel):
    """Staff account as returned to clients — never includes the PIN hash."""

    id: str
    staff_code: str
    full_name: str
    role: StaffRole
    created_at: datetime

    model_config = {"from_attributes": True}


class StaffUserPage(BaseModel):
    items: list[StaffUserResponse]
    total: int
    page: int
    total_pages: int
