"""Unit tests for the in-memory and JSON-file draft stores."""

import json
import logging

import pytest

from customer_diary.infrastructure.drafts import InMemoryDraftStore, JsonFileDraftStore


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryDraftStore()
    return JsonFileDraftStore(tmp_path, session_id="test")


def test_get_missing_returns_none(store):
    assert store.get("diary-draft", "d1") is None


def test_set_overwrites_without_merging(store):
    store.set("diary-draft", "d1", {"status": "Pending", "tags": "a"})
    store.set("diary-draft", "d1", {"status": "Ordered"})
    assert store.get("diary-draft", "d1") == {"status": "Ordered"}


def test_concerns_are_independent_keys(store):
    store.set("diary-draft", "d1", {"status": "Ordered"})
    store.set("diary-followup-draft", "d1", {"message": "called"})
    store.clear("diary-draft", "d1")
    assert store.get("diary-draft", "d1") is None
    assert store.get("diary-followup-draft", "d1") == {"message": "called"}


def test_clear_is_idempotent(store):
    store.clear("diary-draft", "nope")
    store.set("diary-draft", "d1", {"a": 1})
    store.clear("diary-draft", "d1")
    store.clear("diary-draft", "d1")
    assert store.get("diary-draft", "d1") is None


def test_returned_draft_is_a_copy(store):
    store.set("diary-products-draft", "d1", {"products": [{"name": "Filter"}]})
    draft = store.get("diary-products-draft", "d1")
    draft["products"].append({"name": "Pump"})
    assert store.get("diary-products-draft", "d1") == {"products": [{"name": "Filter"}]}


def test_json_store_survives_reload(tmp_path):
    first = JsonFileDraftStore(tmp_path, session_id="JDO")
    first.set("diary-draft", "d1", {"status": "Ordered"})

    second = JsonFileDraftStore(tmp_path, session_id="JDO")
    assert second.get("diary-draft", "d1") == {"status": "Ordered"}
    assert JsonFileDraftStore(tmp_path, session_id="OTHER").get("diary-draft", "d1") is None


def test_json_store_file_layout(tmp_path):
    store = JsonFileDraftStore(tmp_path, session_id="JDO")
    store.set("diary-draft", "d1", {"status": "Ordered"})
    store.clear("diary-draft", "d1")
    store.set("diary-followup-draft", "d2", {"message": "hi"})

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data == {"diary-followup-draft": {"d2": {"message": "hi"}}}


def test_json_store_corrupt_file_starts_empty(tmp_path, caplog):
    path = tmp_path / "drafts-JDO.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        store = JsonFileDraftStore(tmp_path, session_id="JDO")

    assert store.get("diary-draft", "d1") is None
    assert "unreadable" in caplog.text


def test_json_store_unwritable_directory_degrades_to_memory(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    store = JsonFileDraftStore(blocker / "drafts", session_id="JDO")

    with caplog.at_level(logging.WARNING):
        store.set("diary-draft", "d1", {"status": "Ordered"})

    assert store.get("diary-draft", "d1") == {"status": "Ordered"}
    assert "Could not persist drafts" in caplog.text
