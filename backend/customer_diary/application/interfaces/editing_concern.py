"""Abstract interfaces (ports) for fetching records and committing concerns."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import Draft, Record


class RecordGateway(ABC):
    """Port for reading server-owned records."""

    @abstractmethod
    async def fetch(self, record_id: str) -> Record:
        """Fetch a record from the server.

        Raises:
            UnauthorizedError: the session is missing or expired.
            RecordFetchError: any other failure (not found, network, 5xx).
        """
        ...


class EditingConcern(ABC):
    """One editing surface of a record with its own draft key-space.

    A concern knows how to turn a Record into editable form state, and how to
    send the full form state back to the server.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Concern identifier, used as the first half of the draft key."""
        ...

    @property
    def autosave_delay(self) -> float | None:
        """Seconds of inactivity before an automatic commit; None disables it."""
        return None

    @abstractmethod
    def form_from_record(self, record: Record) -> Draft:
        """Project the record into the initial (clean) form state."""
        ...

    @abstractmethod
    async def commit(self, record_id: str, state: Draft) -> Record:
        """Send the full form state and return the server's authoritative record.

        Raises:
            UnauthorizedError: the session is missing or expired.
            CommitRejectedError: the server declined the change.
            TransientNetworkError: transport failure or server error.
        """
        ...
