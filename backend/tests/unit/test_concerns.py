"""Unit tests for the diary editing concerns and product row normalisation."""

import httpx
import pytest

from customer_diary.application.services import RemoteRecordStore
from customer_diary.domain.entities import Record
from customer_diary.domain.exceptions import CommitRejectedError
from customer_diary.infrastructure.http import (
    DiaryApiClient,
    DiaryFieldsConcern,
    FollowupComposerConcern,
    ProductLinesConcern,
    normalize_products,
)

BASE_URL = "http://diary.test/api/v1"


def _client(handler) -> DiaryApiClient:
    return DiaryApiClient(
        BASE_URL,
        staff_code="JDO",
        pin="1234",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _unused(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request {request.method} {request.url}")


# ── normalize_products ───────────────────────────────────────────────


def test_normalize_drops_unnamed_rows_and_trims():
    rows = [
        {"name": "  Filter  ", "qty": "2", "unit_price": "4.50", "upc": ""},
        {"name": "   ", "qty": 3, "unit_price": "1"},
    ]
    assert normalize_products(rows) == [
        {"upc": None, "name": "Filter", "qty": 2, "unit_price": "4.50"}
    ]


def test_normalize_clamps_qty_and_price():
    rows = [
        {"name": "Pump", "qty": "0", "unit_price": "-3"},
        {"name": "Hose", "qty": "2.7", "unit_price": "abc"},
        {"name": "Valve", "qty": None, "unit_price": None, "upc": "0123"},
    ]
    assert normalize_products(rows) == [
        {"upc": None, "name": "Pump", "qty": 1, "unit_price": "0"},
        {"upc": None, "name": "Hose", "qty": 2, "unit_price": "0"},
        {"upc": "0123", "name": "Valve", "qty": 1, "unit_price": "0"},
    ]


# ── Form projections ─────────────────────────────────────────────────


def test_diary_form_fills_defaults():
    concern = DiaryFieldsConcern(_client(_unused))
    record = Record(id="d1", fields={"id": "d1", "status": "Pending", "priority": "Normal", "total": None})

    form = concern.form_from_record(record)

    assert form["status"] == "Pending"
    assert form["is_paid"] is False
    assert form["total"] == "0"
    assert form["order_status"] == "pending"
    assert form["amount_paid"] == ""
    assert form["what_they_want"] == ""
    assert concern.autosave_delay == 2.0


def test_product_form_keeps_row_ids():
    concern = ProductLinesConcern(_client(_unused))
    record = Record(
        id="d1",
        fields={"products": [{"id": "p1", "upc": None, "name": "Filter", "qty": 2, "unit_price": 4.5}]},
    )

    form = concern.form_from_record(record)

    assert form == {
        "products": [{"id": "p1", "upc": None, "name": "Filter", "qty": 2, "unit_price": "4.5"}]
    }


# ── Follow-up composer ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_empty_followup_is_rejected_without_request():
    client = _client(_unused)
    concern = FollowupComposerConcern(client, RemoteRecordStore(client))

    with pytest.raises(CommitRejectedError):
        await concern.commit("d1", {"entry_type": "note", "message": "   "})

    assert concern.autosave_delay is None


@pytest.mark.asyncio
async def test_followup_commit_refetches_diary():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        if request.method == "POST":
            return httpx.Response(201, json={"id": "f1", "entry_type": "call", "message": "Rang"})
        return httpx.Response(200, json={"id": "d1", "followups": [{"id": "f1"}]})

    client = _client(handler)
    concern = FollowupComposerConcern(client, RemoteRecordStore(client))

    record = await concern.commit("d1", {"entry_type": "call", "message": " Rang "})

    assert calls == ["POST", "GET"]
    assert record.fields["followups"] == [{"id": "f1"}]


@pytest.mark.asyncio
async def test_followup_commit_falls_back_to_cached_copy():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json={"id": "f2", "message": "Texted"})
        return httpx.Response(503, json={"detail": "down"})

    client = _client(handler)
    records = RemoteRecordStore(client)
    records.replace("d1", Record(id="d1", fields={"id": "d1", "followups": [{"id": "f1"}]}))
    concern = FollowupComposerConcern(client, records)

    record = await concern.commit("d1", {"message": "Texted"})

    assert [f["id"] for f in record.fields["followups"]] == ["f2", "f1"]
