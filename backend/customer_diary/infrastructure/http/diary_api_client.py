"""Diary API client — the editor's HTTP adapter to the Customer Diary server.

Uses httpx against the JSON routes under ``/api/v1``. Every request carries
the staff member's credentials (HTTP Basic: staff code + PIN). Responses are
mapped onto the domain error taxonomy:

    401 / 3xx redirect    → UnauthorizedError (session expired, sent to sign-in)
    other 4xx             → CommitRejectedError (server's ``detail`` as message)
    5xx / transport error → TransientNetworkError
    failed record fetch   → RecordFetchError
    2xx with a body that is not a diary → TransientNetworkError
"""

import logging
from typing import Any

import httpx

from customer_diary.application.interfaces import RecordGateway
from customer_diary.domain.entities import Record
from customer_diary.domain.exceptions import (
    CommitRejectedError,
    RecordFetchError,
    TransientNetworkError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class DiaryApiClient(RecordGateway):
    """Infrastructure adapter — reads and writes diaries over HTTP.

    Pass ``http_client`` to share a connection pool (or a test transport);
    otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        staff_code: str,
        pin: str,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(staff_code, pin)
        self._timeout = timeout
        self._http_client = http_client

    # ── Record gateway ───────────────────────────────────────────────

    async def fetch(self, record_id: str) -> Record:
        """GET the full diary (customer, products, follow-ups)."""
        try:
            response = await self._request("GET", f"/diaries/{record_id}")
        except TransientNetworkError as e:
            raise RecordFetchError(record_id, e.message, e.status_code) from e

        if response.status_code == 401 or 300 <= response.status_code < 400:
            raise UnauthorizedError()
        if response.status_code != 200:
            raise RecordFetchError(
                record_id, _error_message(response), response.status_code
            )
        try:
            return _parse_record(response)
        except TransientNetworkError as e:
            raise RecordFetchError(record_id, e.message, response.status_code) from e

    # ── Commits ──────────────────────────────────────────────────────

    async def patch_diary(self, diary_id: str, fields: dict[str, Any]) -> Record:
        """Overwrite the named diary fields; returns the full diary."""
        response = await self._request("PATCH", f"/diaries/{diary_id}", json=fields)
        self._raise_for_commit(response)
        return _parse_record(response)

    async def replace_products(
        self, diary_id: str, products: list[dict[str, Any]]
    ) -> Record:
        """Replace the product list; returns the full diary."""
        response = await self._request(
            "PUT", f"/diaries/{diary_id}/products", json={"products": products}
        )
        self._raise_for_commit(response)
        return _parse_record(response)

    async def add_followup(self, diary_id: str, followup: dict[str, Any]) -> dict[str, Any]:
        """Post a follow-up; returns the created follow-up only."""
        response = await self._request(
            "POST", f"/diaries/{diary_id}/followups", json=followup
        )
        self._raise_for_commit(response)
        return _parse_object(response)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self, method: str, path: str, *, json: Any = None
    ) -> httpx.Response:
        client = await self._get_client()
        should_close = self._http_client is None
        url = f"{self._base_url}{path}"
        try:
            response = await client.request(method, url, json=json, auth=self._auth)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, url)
            raise TransientNetworkError("The server did not respond in time") from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransientNetworkError(f"Network error: {e}") from e
        finally:
            if should_close:
                await client.aclose()

        logger.debug("%s %s → %d", method, url, response.status_code)
        if response.status_code >= 500:
            raise TransientNetworkError(
                f"Server error ({response.status_code}): {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _raise_for_commit(response: httpx.Response) -> None:
        if response.status_code == 401 or 300 <= response.status_code < 400:
            raise UnauthorizedError()
        if response.status_code >= 400:
            raise CommitRejectedError(response.status_code, _error_message(response))


def _parse_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise TransientNetworkError("Unexpected response from server") from e
    if not isinstance(data, dict):
        raise TransientNetworkError("Unexpected response from server")
    return data


def _parse_record(response: httpx.Response) -> Record:
    data = _parse_object(response)
    try:
        return Record.from_payload(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Malformed diary payload: %s", e)
        raise TransientNetworkError("Unexpected response from server") from e


def _error_message(response: httpx.Response) -> str:
    """Human-readable reason from a FastAPI error body, falling back to the text."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        # Request validation errors: [{"loc": [...], "msg": "..."}]
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []) if p != "body")
            parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return "; ".join(parts)
    return response.text or response.reason_phrase
