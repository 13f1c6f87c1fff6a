"""Domain entity for follow-up notes left on a diary."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class FollowupType(str, Enum):
    """How the follow-up happened."""

    NOTE = "note"
    CALL = "call"
    SMS = "sms"
    EMAIL = "email"


@dataclass
class Followup:
    diary_id: str
    message: str
    staff_code: str
    entry_type: FollowupType = FollowupType.NOTE
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
