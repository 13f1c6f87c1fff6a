"""Reconciler — decides whether an editor starts from the server record or a draft."""

import copy
from dataclasses import dataclass

from customer_diary.application.interfaces import DraftStore, EditingConcern
from customer_diary.application.services.record_store import RemoteRecordStore
from customer_diary.domain.entities import Draft, Record
from customer_diary.infrastructure.logging.editor_logger import EditorLogger, EditorStage

elog = EditorLogger("Reconciler")


@dataclass
class ReconciledState:
    record: Record
    form: Draft
    dirty: bool


class Reconciler:
    """Loads records and mirrors every edit into the draft store.

    A stored draft always wins over the server copy on load; the editor then
    starts dirty so the recovered edit is never silently dropped.
    """

    def __init__(self, records: RemoteRecordStore, drafts: DraftStore):
        self.records = records
        self.drafts = drafts

    async def load(self, concern: EditingConcern, record_id: str) -> ReconciledState:
        """Fetch the record, then pick the initial form state.

        Fetch errors propagate unchanged and leave any stored draft alone.
        """
        record = await self.records.fetch(record_id)
        draft = self.drafts.get(concern.name, record_id)
        if draft is not None:
            elog.step(EditorStage.LOAD, "Recovered draft", concern=concern.name, record=record_id)
            return ReconciledState(record=record, form=draft, dirty=True)

        elog.detail("Loaded from server", concern=concern.name, record=record_id)
        return ReconciledState(
            record=record, form=concern.form_from_record(record), dirty=False
        )

    def record_edit(self, concern: EditingConcern, record_id: str, form: Draft) -> None:
        """Persist the full current form state as the draft for this key."""
        self.drafts.set(concern.name, record_id, copy.deepcopy(form))
        elog.detail("Draft written", concern=concern.name, record=record_id)

    def has_draft(self, concern: EditingConcern, record_id: str) -> bool:
        return self.drafts.get(concern.name, record_id) is not None

    def discard(self, concern: EditingConcern, record_id: str) -> None:
        self.drafts.clear(concern.name, record_id)
        elog.step(EditorStage.DRAFT, "Draft discarded", concern=concern.name, record=record_id)
