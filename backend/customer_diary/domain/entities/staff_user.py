"""Domain entity for staff accounts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class StaffRole(str, Enum):
    STAFF = "staff"
    MANAGER = "manager"


@dataclass
class StaffUser:
    """A staff member who signs in with a short code and a PIN.

    Only the PIN hash is ever held; hashing happens in the auth service.
    """

    staff_code: str
    full_name: str
    pin_hash: str
    role: StaffRole = StaffRole.STAFF
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_manager(self) -> bool:
        return self.role == StaffRole.MANAGER

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
