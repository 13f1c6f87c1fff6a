"""Draft-aware editor — the per ``(concern, record_id)`` state machine a UI binds to.

    CLEAN ──edit──▶ DIRTY ──save/flush/autosave──▶ COMMITTING
      ▲                ▲                               │
      └──── success ───┼──────── failure ──────────────┤
                       └── success, draft superseded ──┘

An editor that loads while a draft exists starts DIRTY.
"""

import copy
import logging
from typing import Any

from customer_diary.application.interfaces import EditingConcern
from customer_diary.application.services.commit_pipeline import CommitPipeline
from customer_diary.application.services.debouncer import Debouncer
from customer_diary.application.services.reconciler import Reconciler
from customer_diary.domain.entities import (
    CommitResult,
    CommitStatus,
    Draft,
    DraftKey,
    EditorState,
    Record,
)

logger = logging.getLogger(__name__)


class DraftAwareEditor:
    """Holds the form state of one concern of one record.

    Every edit is mirrored into the draft store before anything else happens,
    so a crash or reload between edits loses nothing. When the concern has an
    autosave delay, edits (re)arm a :class:`Debouncer` that commits once the
    user pauses.
    """

    def __init__(
        self,
        concern: EditingConcern,
        record_id: str,
        reconciler: Reconciler,
        pipeline: CommitPipeline,
    ):
        self.concern = concern
        self.record_id = record_id
        self._reconciler = reconciler
        self._pipeline = pipeline
        self._form: Draft | None = None
        self._record: Record | None = None
        self._state = EditorState.CLEAN
        self._autosave = (
            Debouncer(concern.autosave_delay, self._autosave_commit)
            if concern.autosave_delay is not None
            else None
        )

    # ── Read-only view ───────────────────────────────────────────────

    @property
    def key(self) -> DraftKey:
        return DraftKey(self.concern.name, self.record_id)

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state != EditorState.CLEAN

    @property
    def is_loaded(self) -> bool:
        return self._form is not None

    @property
    def form(self) -> Draft:
        self._require_loaded()
        return copy.deepcopy(self._form)

    @property
    def record(self) -> Record | None:
        """Latest shared copy of the record, falling back to the one loaded here."""
        return self._reconciler.records.peek(self.record_id) or self._record

    @property
    def autosave_pending(self) -> bool:
        return self._autosave is not None and self._autosave.pending

    # ── Lifecycle ────────────────────────────────────────────────────

    async def load(self) -> None:
        """Fetch the record and pick the initial form. Fetch errors propagate."""
        reconciled = await self._reconciler.load(self.concern, self.record_id)
        self._record = reconciled.record
        self._form = reconciled.form
        self._state = EditorState.DIRTY if reconciled.dirty else EditorState.CLEAN

    def update_field(self, name: str, value: Any) -> None:
        self._require_loaded()
        form = dict(self._form)
        form[name] = value
        self._apply_edit(form)

    def replace_form(self, state: Draft) -> None:
        """Overwrite the whole form, e.g. after editing a list of rows."""
        self._require_loaded()
        self._apply_edit(copy.deepcopy(state))

    async def save(self) -> CommitResult:
        """Commit now, cancelling any pending autosave."""
        if self._autosave is not None:
            self._autosave.cancel()
        return await self._commit()

    async def flush(self) -> CommitResult | None:
        """Commit if dirty; used before switching away from this editor."""
        if self._autosave is not None and self._autosave.pending:
            return await self._autosave.flush()
        if self._state != EditorState.DIRTY:
            return None
        return await self._commit()

    def reset(self) -> None:
        """Discard the draft and show the server copy again."""
        self._require_loaded()
        if self._autosave is not None:
            self._autosave.cancel()
        self._reconciler.discard(self.concern, self.record_id)
        self._form = self.concern.form_from_record(self.record)
        self._state = EditorState.CLEAN

    def close(self) -> None:
        """Stop the autosave timer. The draft, if any, stays in the store."""
        if self._autosave is not None:
            self._autosave.cancel()

    # ── Internals ────────────────────────────────────────────────────

    def _apply_edit(self, form: Draft) -> None:
        self._form = form
        self._reconciler.record_edit(self.concern, self.record_id, form)
        # A commit in flight keeps the state; its outcome decides what follows
        if self._state != EditorState.COMMITTING:
            self._state = EditorState.DIRTY
        if self._autosave is not None:
            self._autosave.schedule()

    async def _autosave_commit(self) -> CommitResult | None:
        if self._state != EditorState.DIRTY:
            return None
        return await self._commit()

    async def _commit(self) -> CommitResult:
        self._require_loaded()
        if self._state == EditorState.CLEAN:
            return CommitResult(CommitStatus.NOT_DIRTY, self.key)

        previous = self._state
        self._state = EditorState.COMMITTING
        result = None
        try:
            result = await self._pipeline.commit(self.concern, self.record_id, self._form)
        finally:
            if result is None:
                self._state = self._state_from_draft()

        if result.status == CommitStatus.SKIPPED:
            self._state = previous
            return result

        if result.ok:
            self._record = result.record
            if result.superseded:
                self._state = EditorState.DIRTY
                if self._autosave is not None:
                    self._autosave.schedule()
            else:
                self._form = self.concern.form_from_record(result.record)
                self._state = EditorState.CLEAN
        else:
            # A reset during the request leaves no draft to keep dirty
            self._state = self._state_from_draft()
        logger.debug("%s → %s (%s)", self.key, self._state.value, result.status.value)
        return result

    def _state_from_draft(self) -> EditorState:
        if self._reconciler.has_draft(self.concern, self.record_id):
            return EditorState.DIRTY
        return EditorState.CLEAN

    def _require_loaded(self) -> None:
        if self._form is None:
            raise RuntimeError(f"Editor {self.key} used before load()")


class EditorWorkspace:
    """Opens editors by concern name and flushes the active one on switch.

    Only one editor per ``(concern, record_id)`` exists in a workspace, so the
    draft store never sees two writers for the same key.
    """

    def __init__(
        self,
        reconciler: Reconciler,
        pipeline: CommitPipeline,
        concerns: list[EditingConcern],
    ):
        self.reconciler = reconciler
        self.pipeline = pipeline
        self._concerns = {c.name: c for c in concerns}
        self._editors: dict[DraftKey, DraftAwareEditor] = {}
        self._active: DraftAwareEditor | None = None

    @property
    def active(self) -> DraftAwareEditor | None:
        return self._active

    @property
    def concern_names(self) -> list[str]:
        return list(self._concerns)

    async def open(self, concern_name: str, record_id: str) -> DraftAwareEditor:
        """Return the editor for this key, loading it on first use."""
        concern = self._concerns.get(concern_name)
        if concern is None:
            raise KeyError(
                f"Unknown editing concern '{concern_name}' "
                f"(known: {', '.join(self.concern_names)})"
            )
        key = DraftKey(concern_name, record_id)
        editor = self._editors.get(key)
        if editor is None:
            editor = DraftAwareEditor(concern, record_id, self.reconciler, self.pipeline)
            self._editors[key] = editor
        if not editor.is_loaded:
            await editor.load()
        return editor

    async def switch_to(self, editor: DraftAwareEditor) -> CommitResult | None:
        """Make ``editor`` active, flushing the previously active one first."""
        result = None
        previous = self._active
        if previous is not None and previous is not editor:
            result = await previous.flush()
        self._active = editor
        return result

    async def flush_all(self) -> list[CommitResult]:
        results = []
        for editor in self._editors.values():
            result = await editor.flush()
            if result is not None:
                results.append(result)
        return results

    def close(self) -> None:
        for editor in self._editors.values():
            editor.close()
        self._editors.clear()
        self._active = None
