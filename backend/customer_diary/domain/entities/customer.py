"""Domain entity — a customer who raises diary requests."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Customer:
    name: str
    id: str | None = None
    email: str | None = None
    phone: str | None = None
    account_no: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
