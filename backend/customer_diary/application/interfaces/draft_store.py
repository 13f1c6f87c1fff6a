"""Abstract interface (port) for the local draft store."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import Draft


class DraftStore(ABC):
    """Keyed storage of uncommitted edits, addressed by ``(concern, record_id)``.

    Implementations must never raise on storage trouble: losing a draft is
    acceptable, crashing the editor is not. They never touch the network.
    """

    @abstractmethod
    def get(self, concern: str, record_id: str) -> Draft | None:
        """Return a copy of the stored draft, or None when absent."""
        ...

    @abstractmethod
    def set(self, concern: str, record_id: str, draft: Draft) -> None:
        """Store ``draft``, unconditionally replacing any previous value."""
        ...

    @abstractmethod
    def clear(self, concern: str, record_id: str) -> None:
        """Remove the draft. Idempotent."""
        ...
