"""Pydantic DTOs (Data Transfer Objects) for the Diary feature."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from customer_diary.domain.entities import DiaryStatus, Priority

from .customer import CustomerCreate, CustomerResponse
from .followup import FollowupResponse
from .product import ProductLineCreate, ProductLineResponse

# Form inputs send "" for an untouched optional field
_BLANK_AS_NONE = (
    "due_date",
    "paid_at",
    "eta_date",
    "amount_paid",
    "total",
    "assigned_to",
)

NON_NULLABLE_PATCH_FIELDS = (
    "status",
    "priority",
    "is_paid",
    "is_ordered",
    "has_texted_customer",
    "what_they_want",
    "total",
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class DiaryCreate(BaseModel):
    """Schema for logging a new customer request."""

    what_they_want: str = Field(..., min_length=1, examples=["2x replacement filters"])
    customer_id: str | None = Field(None, max_length=36)
    customer: CustomerCreate | None = Field(
        None, description="Inline customer, created when customer_id is absent"
    )
    priority: Priority = Priority.NORMAL
    due_date: date | None = None
    is_paid: bool = False
    is_ordered: bool = False
    has_texted_customer: bool = False
    assigned_to: str | None = Field(None, max_length=36)
    products: list[ProductLineCreate] = Field(default_factory=list)
    admin_notes: str | None = None
    payment_method: str | None = None
    amount_paid: Decimal | None = Field(None, ge=0)
    invoice_po: str | None = None
    paid_at: date | None = None
    store_location: str | None = None
    tags: str | None = None
    supplier: str | None = None
    order_no: str | None = None
    eta_date: date | None = None
    order_status: str = "pending"
    order_notes: str | None = None
    total: Decimal | None = Field(None, ge=0)

    @field_validator(*_BLANK_AS_NONE, mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


class DiaryPatch(BaseModel):
    """Schema for overwriting diary fields — every field optional.

    Only fields present in the request body are applied; an explicit ``null``
    clears a nullable field and is ignored for the non-nullable ones.
    """

    status: DiaryStatus | None = None
    priority: Priority | None = None
    is_paid: bool | None = None
    is_ordered: bool | None = None
    has_texted_customer: bool | None = None
    what_they_want: str | None = Field(None, min_length=1)
    admin_notes: str | None = None
    due_date: date | None = None
    assigned_to: str | None = Field(None, max_length=36)
    payment_method: str | None = None
    amount_paid: Decimal | None = Field(None, ge=0)
    invoice_po: str | None = None
    paid_at: date | None = None
    store_location: str | None = None
    tags: str | None = None
    supplier: str | None = None
    order_no: str | None = None
    eta_date: date | None = None
    order_status: str | None = None
    order_notes: str | None = None
    total: Decimal | None = Field(None, ge=0)
    archived_at: datetime | None = None

    @field_validator(*_BLANK_AS_NONE, "archived_at", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, minus nulls on required columns."""
        sent = self.model_dump(exclude_unset=True)
        for name in NON_NULLABLE_PATCH_FIELDS:
            if name in sent and sent[name] is None:
                del sent[name]
        return sent


class DiaryResponse(BaseModel):
    """Schema returned in diary lists."""

    id: str
    customer_id: str | None
    created_by: str | None
    assigned_to: str | None
    created_by_code: str | None
    what_they_want: str
    status: DiaryStatus
    priority: Priority
    is_paid: bool
    is_ordered: bool
    has_texted_customer: bool
    admin_notes: str | None
    due_date: date | None
    last_viewed_at: datetime | None
    archived_at: datetime | None
    payment_method: str | None
    amount_paid: Decimal | None
    invoice_po: str | None
    paid_at: date | None
    store_location: str | None
    tags: str | None
    supplier: str | None
    order_no: str | None
    eta_date: date | None
    order_status: str | None
    order_notes: str | None
    subtotal: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime
    customer: CustomerResponse | None = None

    model_config = {"from_attributes": True}


class DiaryDetailResponse(DiaryResponse):
    """A diary with everything attached to it — the unit the editor caches."""

    products: list[ProductLineResponse] = Field(default_factory=list)
    followups: list[FollowupResponse] = Field(default_factory=list)
