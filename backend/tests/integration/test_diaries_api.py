"""Integration tests for the diary, product, follow-up, customer and staff routes."""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

API = "/api/v1"


async def _create_diary(client, **overrides) -> dict:
    body = {
        "what_they_want": "Replacement filter",
        "customer": {"name": "Ann Smith", "phone": "0400 000 000"},
        **overrides,
    }
    response = await client.post(f"{API}/diaries", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# ── Authentication ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_diaries_require_sign_in(anonymous_client):
    response = await anonymous_client.get(f"{API}/diaries")

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized - Please sign in"
    assert response.headers["www-authenticate"] == "Basic"


@pytest.mark.asyncio
async def test_wrong_pin_is_rejected(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", auth=("STF", "0000")
    ) as client:
        response = await client.get(f"{API}/diaries")

    assert response.status_code == 401


# ── Diaries ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_and_read_diary(staff_client):
    created = await _create_diary(
        staff_client,
        products=[{"name": "Filter", "qty": 2, "unit_price": "4.50"}],
    )

    assert created["status"] == "Pending"
    assert created["created_by_code"] == "STF"
    assert created["customer"]["name"] == "Ann Smith"
    assert Decimal(created["subtotal"]) == Decimal("9.00")
    assert Decimal(created["total"]) == Decimal("9.00")

    response = await staff_client.get(f"{API}/diaries/{created['id']}")
    assert response.status_code == 200
    detail = response.json()
    assert detail["last_viewed_at"] is not None
    assert [p["name"] for p in detail["products"]] == ["Filter"]
    assert detail["followups"] == []


@pytest.mark.asyncio
async def test_missing_diary_is_404(staff_client):
    response = await staff_client.get(f"{API}/diaries/does-not-exist")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_filters_by_status_and_text(staff_client):
    first = await _create_diary(staff_client, what_they_want="Blue pool cover")
    await _create_diary(staff_client, what_they_want="Chlorine tablets")
    await staff_client.patch(f"{API}/diaries/{first['id']}", json={"status": "Ordered"})

    ordered = (await staff_client.get(f"{API}/diaries", params={"status": "Ordered"})).json()
    assert [d["id"] for d in ordered] == [first["id"]]

    found = (await staff_client.get(f"{API}/diaries", params={"q": "chlorine"})).json()
    assert [d["what_they_want"] for d in found] == ["Chlorine tablets"]


@pytest.mark.asyncio
async def test_patch_returns_full_diary(staff_client):
    created = await _create_diary(staff_client, admin_notes="call after 3pm")

    response = await staff_client.patch(
        f"{API}/diaries/{created['id']}",
        json={"status": "Ordered", "supplier": "Acme", "amount_paid": "", "due_date": ""},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Ordered"
    assert data["supplier"] == "Acme"
    assert data["admin_notes"] == "call after 3pm"
    assert data["amount_paid"] is None
    assert "products" in data and "followups" in data


@pytest.mark.asyncio
async def test_staff_cannot_collect_unpaid_diary(staff_client):
    created = await _create_diary(staff_client)

    response = await staff_client.patch(
        f"{API}/diaries/{created['id']}", json={"status": "Collected", "is_paid": False}
    )

    assert response.status_code == 400
    assert "Collected" in response.json()["detail"]
    reread = await staff_client.get(f"{API}/diaries/{created['id']}")
    assert reread.json()["status"] == "Pending"


@pytest.mark.asyncio
async def test_manager_can_collect_unpaid_diary(staff_client, manager_client):
    created = await _create_diary(staff_client)

    response = await manager_client.patch(
        f"{API}/diaries/{created['id']}", json={"status": "Collected"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Collected"


@pytest.mark.asyncio
async def test_patch_validation_error_is_422(staff_client):
    created = await _create_diary(staff_client)

    response = await staff_client.patch(
        f"{API}/diaries/{created['id']}", json={"status": "Lost"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_only_archived(staff_client):
    created = await _create_diary(
        staff_client, products=[{"name": "Filter", "qty": 1, "unit_price": "5"}]
    )
    url = f"{API}/diaries/{created['id']}"

    refused = await staff_client.delete(url)
    assert refused.status_code == 400
    assert refused.json()["detail"] == "Cannot delete non-archived diary. Please archive it first."

    await staff_client.patch(url, json={"archived_at": "2026-03-01T09:00:00Z"})
    listed = (await staff_client.get(f"{API}/diaries")).json()
    assert created["id"] not in [d["id"] for d in listed]

    assert (await staff_client.delete(url)).status_code == 204
    assert (await staff_client.get(url)).status_code == 404


# ── Products ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_replace_products_recomputes_subtotal(staff_client):
    created = await _create_diary(staff_client)

    response = await staff_client.put(
        f"{API}/diaries/{created['id']}/products",
        json={"products": [
            {"name": "Filter", "qty": 2, "unit_price": "4.50"},
            {"name": "Seal", "qty": 3, "unit_price": "1.10", "upc": "9300000000001"},
        ]},
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["subtotal"]) == Decimal("12.30")
    assert sorted(p["name"] for p in data["products"]) == ["Filter", "Seal"]

    seal = next(p for p in data["products"] if p["name"] == "Seal")
    after_delete = await staff_client.delete(f"{API}/products/{seal['id']}")
    assert after_delete.status_code == 200
    assert Decimal(after_delete.json()["subtotal"]) == Decimal("9.00")


@pytest.mark.asyncio
async def test_invalid_product_qty_is_422(staff_client):
    created = await _create_diary(staff_client)

    response = await staff_client.put(
        f"{API}/diaries/{created['id']}/products",
        json={"products": [{"name": "Filter", "qty": 0, "unit_price": "1"}]},
    )

    assert response.status_code == 422


# ── Follow-ups ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_followup_lifecycle(staff_client):
    created = await _create_diary(staff_client)
    base = f"{API}/diaries/{created['id']}/followups"

    added = await staff_client.post(base, json={"entry_type": "call", "message": "Left voicemail"})
    assert added.status_code == 201
    followup = added.json()
    assert followup["staff_code"] == "STF"

    edited = await staff_client.patch(f"{base}/{followup['id']}", json={"message": "Spoke to Ann"})
    assert edited.json()["message"] == "Spoke to Ann"

    detail = (await staff_client.get(f"{API}/diaries/{created['id']}")).json()
    assert [f["message"] for f in detail["followups"]] == ["Spoke to Ann"]

    assert (await staff_client.delete(f"{base}/{followup['id']}")).status_code == 204
    assert (await staff_client.delete(f"{base}/{followup['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_followup_on_missing_diary_is_404(staff_client):
    response = await staff_client.post(
        f"{API}/diaries/nope/followups", json={"message": "hello"}
    )
    assert response.status_code == 404


# ── Customers ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_customer_search_and_update(staff_client):
    created = await staff_client.post(
        f"{API}/customers", json={"name": "Bob Jones", "email": "bob@example.com", "phone": "0411 111 111"}
    )
    assert created.status_code == 201
    customer = created.json()
    assert customer["phone"] == "0411 111 111"

    found = (await staff_client.get(f"{API}/customers", params={"q": "example.com"})).json()
    assert [c["id"] for c in found] == [customer["id"]]

    updated = await staff_client.patch(
        f"{API}/customers/{customer['id']}", json={"account_no": "A-100"}
    )
    assert updated.json()["account_no"] == "A-100"
    assert updated.json()["email"] == "bob@example.com"


@pytest.mark.asyncio
async def test_customer_bad_email_is_422(staff_client):
    response = await staff_client.post(f"{API}/customers", json={"name": "X", "email": "nope"})
    assert response.status_code == 422


# ── Staff accounts ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_staff_users_are_manager_only(staff_client):
    response = await staff_client.get(f"{API}/staff-users")

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden - Insufficient permissions"


@pytest.mark.asyncio
async def test_manager_manages_staff(manager_client):
    listed = (await manager_client.get(f"{API}/staff-users")).json()
    assert listed["total"] == 2
    assert "pin_hash" not in listed["items"][0]

    created = await manager_client.post(
        f"{API}/staff-users", json={"staff_code": "new1", "full_name": "New Person", "pin": "2468"}
    )
    assert created.status_code == 201
    assert created.json()["staff_code"] == "NEW1"

    duplicate = await manager_client.post(
        f"{API}/staff-users", json={"staff_code": "NEW1", "full_name": "Again", "pin": "2468"}
    )
    assert duplicate.status_code == 409

    deleted = await manager_client.delete(f"{API}/staff-users/{created.json()['id']}")
    assert deleted.status_code == 204


@pytest.mark.asyncio
async def test_manager_cannot_delete_self_or_last_manager(manager_client):
    listed = (await manager_client.get(f"{API}/staff-users", params={"role": "manager"})).json()
    me = listed["items"][0]

    own = await manager_client.delete(f"{API}/staff-users/{me['id']}")
    assert own.status_code == 400

    demote = await manager_client.patch(f"{API}/staff-users/{me['id']}", json={"role": "staff"})
    assert demote.status_code == 409
