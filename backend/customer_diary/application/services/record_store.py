"""Remote Record Store — fetch-and-cache of server-owned records by id."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from customer_diary.application.interfaces import RecordGateway
from customer_diary.domain.entities import Record

logger = logging.getLogger(__name__)


@dataclass
class _CacheEntry:
    record: Record
    stored_at: float


class RemoteRecordStore:
    """Caches the last known Record per id in front of a :class:`RecordGateway`.

    A cached entry is served while younger than ``stale_after`` seconds.
    Successful commits ``replace`` the entry with the server's response, so
    every editing concern of the same record shares one copy. Failed fetches
    are neither cached nor retried.
    """

    def __init__(
        self,
        gateway: RecordGateway,
        *,
        stale_after: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._gateway = gateway
        self._stale_after = stale_after
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    async def fetch(self, record_id: str, *, force: bool = False) -> Record:
        entry = self._entries.get(record_id)
        if entry is not None and not force and not self._is_stale(entry):
            return entry.record

        record = await self._gateway.fetch(record_id)
        self._entries[record_id] = _CacheEntry(record, self._clock())
        logger.debug("Fetched record %s (updated_at=%s)", record_id, record.updated_at)
        return record

    def replace(self, record_id: str, record: Record) -> None:
        self._entries[record_id] = _CacheEntry(record, self._clock())

    def invalidate(self, record_id: str) -> None:
        self._entries.pop(record_id, None)

    def peek(self, record_id: str) -> Record | None:
        """Cached record regardless of age, without touching the network."""
        entry = self._entries.get(record_id)
        return entry.record if entry else None

    def _is_stale(self, entry: _CacheEntry) -> bool:
        return self._clock() - entry.stored_at >= self._stale_after
