"""Pydantic DTOs for customers."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class CustomerCreate(BaseModel):
    """Schema for creating a customer — only the name is required."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Citizen"])
    email: str | None = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str | None = Field(None, max_length=50)
    account_no: str | None = Field(None, max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value: Any) -> Any:
        return _blank_to_none(value)


class CustomerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str | None = Field(None, max_length=50)
    account_no: str | None = Field(None, max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value: Any) -> Any:
        return _blank_to_none(value)


class CustomerResponse(BaseModel):
    id: str
    name: str
    email: str | None
    phone: str | None
    account_no: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
