"""In-process draft store — drafts live as long as the store object."""

import copy

from customer_diary.application.interfaces import DraftStore
from customer_diary.domain.entities import Draft


class InMemoryDraftStore(DraftStore):

    def __init__(self) -> None:
        self._drafts: dict[tuple[str, str], Draft] = {}

    def get(self, concern: str, record_id: str) -> Draft | None:
        draft = self._drafts.get((concern, record_id))
        return copy.deepcopy(draft) if draft is not None else None

    def set(self, concern: str, record_id: str, draft: Draft) -> None:
        self._drafts[(concern, record_id)] = copy.deepcopy(draft)

    def clear(self, concern: str, record_id: str) -> None:
        self._drafts.pop((concern, record_id), None)

    def __len__(self) -> int:
        return len(self._drafts)
