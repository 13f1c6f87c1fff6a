"""Commit Pipeline — sends form state to the server and reconciles the outcome.

Failures never escape as exceptions: every outcome is returned as a
:class:`CommitResult` and reported through the :class:`Notifier`. The draft
is only ever removed after a successful commit, and only when it still holds
exactly what was sent.
"""

import copy
import logging
from collections.abc import Callable

from customer_diary.application.interfaces import DraftStore, EditingConcern, Notifier
from customer_diary.application.services.record_store import RemoteRecordStore
from customer_diary.domain.entities import (
    CommitResult,
    CommitStatus,
    Draft,
    DraftKey,
    Notification,
)
from customer_diary.domain.exceptions import (
    CommitRejectedError,
    TransientNetworkError,
    UnauthorizedError,
)
from customer_diary.infrastructure.logging.editor_logger import EditorLogger, EditorStage

logger = logging.getLogger(__name__)
elog = EditorLogger("CommitPipeline")

SAVED_DURATION_MS = 3_000
FAILED_DURATION_MS = 15_000


class CommitPipeline:
    """Runs at most one commit per ``(concern, record_id)`` at a time.

    A commit requested while another one for the same key is in flight is
    coalesced (``SKIPPED``); the caller's next trigger picks the edit up.
    """

    def __init__(
        self,
        records: RemoteRecordStore,
        drafts: DraftStore,
        notifier: Notifier,
        *,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self._records = records
        self._drafts = drafts
        self._notifier = notifier
        self._on_unauthorized = on_unauthorized
        self._in_flight: set[DraftKey] = set()

    def is_in_flight(self, concern: str, record_id: str) -> bool:
        return DraftKey(concern, record_id) in self._in_flight

    async def commit(
        self, concern: EditingConcern, record_id: str, state: Draft
    ) -> CommitResult:
        key = DraftKey(concern.name, record_id)
        if key in self._in_flight:
            elog.detail("Commit coalesced", key=key)
            return CommitResult(CommitStatus.SKIPPED, key)

        payload = copy.deepcopy(state)
        self._in_flight.add(key)
        try:
            with elog.timed_step(EditorStage.COMMIT, f"Committing {key}"):
                record = await concern.commit(record_id, payload)
        except UnauthorizedError as e:
            self._notify_failure(key, "Session expired", "Please sign in again.")
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            return CommitResult(CommitStatus.UNAUTHORIZED, key, message=e.message)
        except CommitRejectedError as e:
            self._notify_failure(key, "Save failed", e.message)
            return CommitResult(CommitStatus.REJECTED, key, message=e.message)
        except TransientNetworkError as e:
            self._notify_failure(key, "Save failed", e.message)
            return CommitResult(CommitStatus.FAILED, key, message=e.message)
        except Exception:
            logger.exception("Unexpected error committing %s", key)
            message = "Unexpected error while saving"
            self._notify_failure(key, "Save failed", message)
            return CommitResult(CommitStatus.FAILED, key, message=message)
        finally:
            self._in_flight.discard(key)

        self._records.replace(record_id, record)

        # Only drop the draft if no newer edit landed while the request was out
        current = self._drafts.get(concern.name, record_id)
        superseded = current is not None and current != payload
        if superseded:
            logger.info("Draft %s changed during commit; keeping it", key)
        else:
            self._drafts.clear(concern.name, record_id)

        self._notifier.notify(
            Notification(
                title="Saved",
                duration_ms=SAVED_DURATION_MS,
                context={"concern": concern.name, "record_id": record_id},
            )
        )
        return CommitResult(CommitStatus.COMMITTED, key, record=record, superseded=superseded)

    def _notify_failure(self, key: DraftKey, title: str, description: str) -> None:
        self._notifier.notify(
            Notification(
                title=title,
                description=description,
                variant="destructive",
                duration_ms=FAILED_DURATION_MS,
                context={"concern": key.concern, "record_id": key.record_id},
            )
        )
