"""Domain entity for customer diaries — one logged customer request."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from .customer import Customer
from .followup import Followup
from .product_line import ProductLine


class DiaryStatus(str, Enum):
    """Workflow states of a diary."""

    PENDING = "Pending"
    ORDERED = "Ordered"
    READY_FOR_PICKUP = "ReadyForPickup"
    COLLECTED = "Collected"
    CANCELLED = "Cancelled"


class Priority(str, Enum):
    """How urgently the request should be handled."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    URGENT = "Urgent"


# Statuses that close a diary; closed diaries are never overdue.
CLOSED_STATUSES = frozenset({DiaryStatus.COLLECTED, DiaryStatus.CANCELLED})

# Fields a PATCH may overwrite. Anything else is owned by the server.
PATCHABLE_FIELDS = frozenset({
    "status",
    "priority",
    "is_paid",
    "is_ordered",
    "has_texted_customer",
    "what_they_want",
    "admin_notes",
    "due_date",
    "assigned_to",
    "payment_method",
    "amount_paid",
    "invoice_po",
    "paid_at",
    "store_location",
    "tags",
    "supplier",
    "order_no",
    "eta_date",
    "order_status",
    "order_notes",
    "total",
    "archived_at",
})


@dataclass
class Diary:
    """A customer request tracked from intake through collection.

    ``subtotal`` is derived from the product lines; ``total`` is entered by
    staff and may differ (discounts, deposits, freight).
    """

    what_they_want: str
    id: str | None = None
    customer_id: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    created_by_code: str | None = None
    status: DiaryStatus = DiaryStatus.PENDING
    priority: Priority = Priority.NORMAL
    is_paid: bool = False
    is_ordered: bool = False
    has_texted_customer: bool = False
    admin_notes: str | None = None
    due_date: date | None = None
    last_viewed_at: datetime | None = None
    archived_at: datetime | None = None
    payment_method: str | None = None
    amount_paid: Decimal | None = Decimal("0")
    invoice_po: str | None = None
    paid_at: date | None = None
    store_location: str | None = None
    tags: str | None = None
    supplier: str | None = None
    order_no: str | None = None
    eta_date: date | None = None
    order_status: str | None = "pending"
    order_notes: str | None = None
    subtotal: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Related aggregates, populated only for detail reads
    customer: Customer | None = None
    products: list[ProductLine] = field(default_factory=list)
    followups: list[Followup] = field(default_factory=list)

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Overwrite the named fields and refresh ``updated_at``.

        Unknown keys raise ``KeyError`` so a schema drift is caught early
        instead of being silently dropped.
        """
        for name, value in changes.items():
            if name not in PATCHABLE_FIELDS:
                raise KeyError(f"Field '{name}' is not patchable")
            if name == "status" and value is not None:
                value = DiaryStatus(value)
            elif name == "priority" and value is not None:
                value = Priority(value)
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def recompute_subtotal(self) -> None:
        """Sum the line totals of the attached product lines."""
        self.subtotal = sum(
            (line.line_total for line in self.products), Decimal("0")
        )
