"""JSON-file draft store — drafts survive a process restart.

All drafts for one client session live in a single JSON document::

    {"diary-draft": {"<record id>": {...form state...}}, ...}

The file is rewritten on every ``set`` and ``clear``. Any I/O or decode
problem is logged and the store keeps working from memory, so an unwritable
disk costs durability but never an edit.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from customer_diary.application.interfaces import DraftStore
from customer_diary.domain.entities import Draft

logger = logging.getLogger(__name__)


class JsonFileDraftStore(DraftStore):

    def __init__(self, directory: str | Path, session_id: str = "default") -> None:
        self.path = Path(directory) / f"drafts-{session_id}.json"
        self._drafts: dict[str, dict[str, Draft]] = self._load()

    def get(self, concern: str, record_id: str) -> Draft | None:
        draft = self._drafts.get(concern, {}).get(record_id)
        return copy.deepcopy(draft) if draft is not None else None

    def set(self, concern: str, record_id: str, draft: Draft) -> None:
        self._drafts.setdefault(concern, {})[record_id] = copy.deepcopy(draft)
        self._save()

    def clear(self, concern: str, record_id: str) -> None:
        by_record = self._drafts.get(concern)
        if not by_record or record_id not in by_record:
            return
        del by_record[record_id]
        if not by_record:
            del self._drafts[concern]
        self._save()

    def _load(self) -> dict[str, dict[str, Draft]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data: Any = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Draft file %s unreadable, starting empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Draft file %s has unexpected shape, starting empty", self.path)
            return {}
        return {
            concern: dict(records)
            for concern, records in data.items()
            if isinstance(records, dict)
        }

    def _save(self) -> None:
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(self._drafts, f, indent=2, default=str)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not persist drafts to %s: %s", self.path, e)
