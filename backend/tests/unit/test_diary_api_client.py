"""Unit tests for DiaryApiClient — uses httpx MockTransport, no real server."""

import base64
import json

import httpx
import pytest

from customer_diary.domain.exceptions import (
    CommitRejectedError,
    RecordFetchError,
    TransientNetworkError,
    UnauthorizedError,
)
from customer_diary.infrastructure.http import DiaryApiClient

BASE_URL = "http://diary.test/api/v1"

DIARY = {
    "id": "d1",
    "status": "Pending",
    "is_paid": False,
    "updated_at": "2026-03-01T10:00:00",
    "products": [],
    "followups": [],
}


def _make_mock_transport(
    response_data: dict | list | None = None,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that returns a fixed response and records requests."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=response_data if response_data is not None else {})

    return httpx.MockTransport(handler)


def _make_client(transport: httpx.MockTransport) -> DiaryApiClient:
    return DiaryApiClient(
        BASE_URL,
        staff_code="JDO",
        pin="1234",
        http_client=httpx.AsyncClient(transport=transport),
    )


@pytest.mark.asyncio
async def test_fetch_returns_record_with_basic_auth():
    seen: list[httpx.Request] = []
    client = _make_client(_make_mock_transport(DIARY, seen=seen))

    record = await client.fetch("d1")

    assert record.id == "d1"
    assert record.updated_at == "2026-03-01T10:00:00"
    assert record.fields["status"] == "Pending"
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}/diaries/d1"
    expected = "Basic " + base64.b64encode(b"JDO:1234").decode()
    assert request.headers["Authorization"] == expected


@pytest.mark.asyncio
async def test_fetch_401_is_unauthorized():
    client = _make_client(_make_mock_transport({"detail": "Unauthorized - Please sign in"}, 401))
    with pytest.raises(UnauthorizedError):
        await client.fetch("d1")


@pytest.mark.asyncio
async def test_fetch_404_is_fetch_error():
    client = _make_client(_make_mock_transport({"detail": "Diary with id 'd9' not found"}, 404))
    with pytest.raises(RecordFetchError) as exc_info:
        await client.fetch("d9")
    assert exc_info.value.status_code == 404
    assert "not found" in exc_info.value.reason


@pytest.mark.asyncio
async def test_fetch_network_failure_is_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _make_client(httpx.MockTransport(handler))
    with pytest.raises(RecordFetchError):
        await client.fetch("d1")


@pytest.mark.asyncio
async def test_patch_sends_fields_and_returns_record():
    seen: list[httpx.Request] = []
    client = _make_client(_make_mock_transport({**DIARY, "status": "Ordered"}, seen=seen))

    record = await client.patch_diary("d1", {"status": "Ordered"})

    assert record.fields["status"] == "Ordered"
    assert seen[0].method == "PATCH"
    assert json.loads(seen[0].content) == {"status": "Ordered"}


@pytest.mark.asyncio
async def test_patch_400_carries_server_message():
    client = _make_client(
        _make_mock_transport({"detail": "Cannot mark as Collected when unpaid"}, 400)
    )
    with pytest.raises(CommitRejectedError) as exc_info:
        await client.patch_diary("d1", {"status": "Collected"})
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Cannot mark as Collected when unpaid"


@pytest.mark.asyncio
async def test_patch_422_flattens_validation_errors():
    detail = [{"loc": ["body", "what_they_want"], "msg": "String should have at least 1 character"}]
    client = _make_client(_make_mock_transport({"detail": detail}, 422))
    with pytest.raises(CommitRejectedError) as exc_info:
        await client.patch_diary("d1", {"what_they_want": ""})
    assert exc_info.value.message == "what_they_want: String should have at least 1 character"


@pytest.mark.asyncio
async def test_patch_401_is_unauthorized():
    client = _make_client(_make_mock_transport({"detail": "Unauthorized - Please sign in"}, 401))
    with pytest.raises(UnauthorizedError):
        await client.patch_diary("d1", {"status": "Ordered"})


@pytest.mark.asyncio
async def test_server_error_is_transient():
    client = _make_client(_make_mock_transport({"detail": "boom"}, 503))
    with pytest.raises(TransientNetworkError) as exc_info:
        await client.patch_diary("d1", {"status": "Ordered"})
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_timeout_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    client = _make_client(httpx.MockTransport(handler))
    with pytest.raises(TransientNetworkError):
        await client.replace_products("d1", [])


@pytest.mark.asyncio
async def test_replace_products_wraps_list():
    seen: list[httpx.Request] = []
    client = _make_client(_make_mock_transport(DIARY, seen=seen))

    await client.replace_products("d1", [{"name": "Filter", "qty": 1, "unit_price": "5"}])

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/api/v1/diaries/d1/products"
    assert json.loads(seen[0].content) == {
        "products": [{"name": "Filter", "qty": 1, "unit_price": "5"}]
    }


@pytest.mark.asyncio
async def test_add_followup_returns_created_followup():
    created = {"id": "f1", "entry_type": "call", "message": "Left voicemail"}
    client = _make_client(_make_mock_transport(created, 201))

    result = await client.add_followup("d1", {"entry_type": "call", "message": "Left voicemail"})

    assert result == created


def _make_text_transport(body: str, status_code: int = 200, headers: dict | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body, headers=headers)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_patch_redirect_to_sign_in_is_unauthorized():
    transport = _make_text_transport("", 302, headers={"Location": "/login"})
    client = _make_client(transport)

    with pytest.raises(UnauthorizedError):
        await client.patch_diary("d1", {"status": "Ordered"})


@pytest.mark.asyncio
async def test_fetch_redirect_is_unauthorized():
    client = _make_client(_make_text_transport("", 303, headers={"Location": "/login"}))
    with pytest.raises(UnauthorizedError):
        await client.fetch("d1")


@pytest.mark.asyncio
async def test_patch_non_json_body_is_transient():
    client = _make_client(_make_text_transport("<html>Sign in</html>"))

    with pytest.raises(TransientNetworkError) as exc_info:
        await client.patch_diary("d1", {"status": "Ordered"})

    assert exc_info.value.message == "Unexpected response from server"


@pytest.mark.asyncio
async def test_replace_products_body_without_id_is_transient():
    client = _make_client(_make_mock_transport({"status": "Pending"}))
    with pytest.raises(TransientNetworkError):
        await client.replace_products("d1", [])


@pytest.mark.asyncio
async def test_add_followup_non_object_body_is_transient():
    client = _make_client(_make_mock_transport([1, 2, 3], 201))
    with pytest.raises(TransientNetworkError):
        await client.add_followup("d1", {"entry_type": "call", "message": "x"})


@pytest.mark.asyncio
async def test_fetch_malformed_body_is_fetch_error():
    client = _make_client(_make_text_transport("not json"))
    with pytest.raises(RecordFetchError) as exc_info:
        await client.fetch("d1")
    assert exc_info.value.status_code == 200
