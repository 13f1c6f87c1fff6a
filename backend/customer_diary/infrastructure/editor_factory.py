"""Wires the draft-aware editor stack for one signed-in staff member."""

import logging
from collections.abc import Callable

import httpx

from customer_diary.application.interfaces import DraftStore, Notifier
from customer_diary.application.services import (
    CommitPipeline,
    EditorWorkspace,
    Reconciler,
    RemoteRecordStore,
)
from customer_diary.config import Settings, get_settings
from customer_diary.infrastructure.drafts import JsonFileDraftStore
from customer_diary.infrastructure.http import (
    DiaryApiClient,
    DiaryFieldsConcern,
    FollowupComposerConcern,
    ProductLinesConcern,
)
from customer_diary.infrastructure.notifications import LoggingNotifier

logger = logging.getLogger(__name__)


def build_editor_workspace(
    staff_code: str,
    pin: str,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    draft_store: DraftStore | None = None,
    notifier: Notifier | None = None,
    on_unauthorized: Callable[[], None] | None = None,
) -> EditorWorkspace:
    """Build an :class:`EditorWorkspace` with all diary concerns registered.

    Defaults come from Settings: drafts persist to ``draft_dir`` (one file per
    staff code) and notifications go to the log.
    """
    settings = settings or get_settings()
    client = DiaryApiClient(
        settings.api_base_url,
        staff_code=staff_code,
        pin=pin,
        timeout=settings.api_timeout_seconds,
        http_client=http_client,
    )
    records = RemoteRecordStore(client, stale_after=settings.record_stale_seconds)
    if draft_store is None:
        draft_store = JsonFileDraftStore(settings.draft_dir, session_id=staff_code.upper())
    if notifier is None:
        notifier = LoggingNotifier()
    pipeline = CommitPipeline(
        records,
        draft_store,
        notifier,
        on_unauthorized=on_unauthorized,
    )
    concerns = [
        DiaryFieldsConcern(client, autosave_delay=settings.autosave_delay_seconds),
        ProductLinesConcern(client, autosave_delay=settings.products_autosave_delay_seconds),
        FollowupComposerConcern(client, records),
    ]
    logger.debug("Editor workspace for %s against %s", staff_code, settings.api_base_url)
    return EditorWorkspace(Reconciler(records, draft_store), pipeline, concerns)
