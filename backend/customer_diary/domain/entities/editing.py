"""Domain objects for draft-aware editing of server-owned records.

A *Record* is the last copy of an entity the server handed us. A *Draft* is
the uncommitted form state for one editing concern of one record, addressed
by a :class:`DraftKey`. Drafts are plain ``dict`` values so any JSON-capable
store can hold them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Draft = dict[str, Any]


@dataclass(frozen=True)
class DraftKey:
    """Composite key ``(concern, record_id)`` addressing exactly one draft."""

    concern: str
    record_id: str

    def __str__(self) -> str:
        return f"{self.concern}:{self.record_id}"


@dataclass
class Record:
    """Server-authoritative state of an entity, as last fetched or committed.

    ``updated_at`` is the server's last-modified marker, kept opaque.
    """

    id: str
    fields: dict[str, Any]
    updated_at: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Record":
        """Build a Record from a JSON object returned by the API."""
        return cls(
            id=str(payload["id"]),
            fields=dict(payload),
            updated_at=payload.get("updated_at"),
        )


class EditorState(str, Enum):
    """Per ``(concern, record_id)`` editing lifecycle."""

    CLEAN = "clean"
    DIRTY = "dirty"
    COMMITTING = "committing"


class CommitStatus(str, Enum):
    """Outcome of one pass through the commit pipeline."""

    COMMITTED = "committed"
    REJECTED = "rejected"          # server declined (validation / business rule)
    FAILED = "failed"              # transport error or 5xx, retryable
    UNAUTHORIZED = "unauthorized"  # session expired
    SKIPPED = "skipped"            # coalesced with a commit already in flight
    NOT_DIRTY = "not_dirty"        # nothing to send


@dataclass
class CommitResult:
    status: CommitStatus
    key: DraftKey
    record: Record | None = None
    message: str | None = None
    # True when a newer edit replaced the draft while this commit was in flight
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return self.status == CommitStatus.COMMITTED


@dataclass
class Notification:
    """A user-facing message, the equivalent of a toast."""

    title: str
    description: str | None = None
    variant: str = "default"  # "default" | "destructive"
    duration_ms: int = 3000
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"
