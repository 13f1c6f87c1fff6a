"""Editing concerns of a diary, each committed through the Diary API.

    diary-draft            core diary fields     PATCH /diaries/{id}
    diary-products-draft   product line list     PUT   /diaries/{id}/products
    diary-followup-draft   follow-up composer    POST  /diaries/{id}/followups

All three resolve to the full diary detail so the record store keeps a
single copy per diary.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any

from customer_diary.application.interfaces import EditingConcern
from customer_diary.application.services.record_store import RemoteRecordStore
from customer_diary.domain.entities import Draft, Record
from customer_diary.domain.exceptions import (
    CommitRejectedError,
    RecordFetchError,
    UnauthorizedError,
)
from customer_diary.infrastructure.http.diary_api_client import DiaryApiClient

logger = logging.getLogger(__name__)

DIARY_FIELDS = "diary-draft"
PRODUCT_LINES = "diary-products-draft"
FOLLOWUP_COMPOSER = "diary-followup-draft"


class DiaryFieldsConcern(EditingConcern):
    """Status, payment, order and note fields of a diary."""

    def __init__(self, client: DiaryApiClient, *, autosave_delay: float | None = 2.0):
        self._client = client
        self._autosave_delay = autosave_delay

    @property
    def name(self) -> str:
        return DIARY_FIELDS

    @property
    def autosave_delay(self) -> float | None:
        return self._autosave_delay

    def form_from_record(self, record: Record) -> Draft:
        f = record.fields
        total = f.get("total")
        return {
            "status": f.get("status"),
            "priority": f.get("priority"),
            "is_paid": bool(f.get("is_paid")),
            "is_ordered": bool(f.get("is_ordered")),
            "has_texted_customer": bool(f.get("has_texted_customer")),
            "what_they_want": f.get("what_they_want") or "",
            "admin_notes": f.get("admin_notes") or "",
            "due_date": f.get("due_date"),
            "payment_method": f.get("payment_method") or "",
            "amount_paid": _as_text(f.get("amount_paid")),
            "invoice_po": f.get("invoice_po") or "",
            "paid_at": f.get("paid_at"),
            "store_location": f.get("store_location") or "",
            "tags": f.get("tags") or "",
            "total": str(total) if total is not None else "0",
            "assigned_to": f.get("assigned_to"),
            "supplier": f.get("supplier") or "",
            "order_no": f.get("order_no") or "",
            "eta_date": f.get("eta_date"),
            "order_status": f.get("order_status") or "pending",
            "order_notes": f.get("order_notes") or "",
        }

    async def commit(self, record_id: str, state: Draft) -> Record:
        return await self._client.patch_diary(record_id, state)


class ProductLinesConcern(EditingConcern):
    """The product list of a diary, committed as a whole."""

    def __init__(self, client: DiaryApiClient, *, autosave_delay: float | None = 0.8):
        self._client = client
        self._autosave_delay = autosave_delay

    @property
    def name(self) -> str:
        return PRODUCT_LINES

    @property
    def autosave_delay(self) -> float | None:
        return self._autosave_delay

    def form_from_record(self, record: Record) -> Draft:
        return {
            "products": [
                {
                    "id": p.get("id"),
                    "upc": p.get("upc"),
                    "name": p.get("name", ""),
                    "qty": p.get("qty", 1),
                    "unit_price": _as_text(p.get("unit_price")) or "0",
                }
                for p in record.fields.get("products") or []
            ]
        }

    async def commit(self, record_id: str, state: Draft) -> Record:
        return await self._client.replace_products(
            record_id, normalize_products(state.get("products") or [])
        )


class FollowupComposerConcern(EditingConcern):
    """Text of a follow-up being written; committing posts it.

    Posting is not an overwrite, so this concern has no autosave: it is only
    committed on an explicit save.
    """

    def __init__(self, client: DiaryApiClient, records: RemoteRecordStore):
        self._client = client
        self._records = records

    @property
    def name(self) -> str:
        return FOLLOWUP_COMPOSER

    def form_from_record(self, record: Record) -> Draft:
        return {"entry_type": "note", "message": ""}

    async def commit(self, record_id: str, state: Draft) -> Record:
        message = (state.get("message") or "").strip()
        if not message:
            raise CommitRejectedError(422, "Follow-up message cannot be empty")
        followup = await self._client.add_followup(
            record_id,
            {"entry_type": state.get("entry_type") or "note", "message": message},
        )
        try:
            return await self._records.fetch(record_id, force=True)
        except (RecordFetchError, UnauthorizedError) as e:
            # The follow-up is stored; patch it into the last known copy
            logger.warning("Re-fetch of diary %s after follow-up failed: %s", record_id, e)
            return _with_followup(self._records.peek(record_id), record_id, followup)


def normalize_products(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Clean editor rows before sending: trimmed names, qty >= 1, price >= 0.

    Rows without a name are dropped.
    """
    cleaned = []
    for row in rows:
        name = str(row.get("name") or "").strip()
        if not name:
            continue
        qty = _to_number(row.get("qty"))
        price = _to_number(row.get("unit_price"))
        cleaned.append({
            "upc": row.get("upc") or None,
            "name": name,
            "qty": max(1, math.floor(qty)) if qty is not None else 1,
            "unit_price": str(max(Decimal("0"), price)) if price is not None else "0",
        })
    return cleaned


def _to_number(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _with_followup(cached: Record | None, record_id: str, followup: dict) -> Record:
    fields = dict(cached.fields) if cached else {"id": record_id}
    fields["followups"] = [followup, *(fields.get("followups") or [])]
    return Record(id=record_id, fields=fields, updated_at=cached.updated_at if cached else None)
