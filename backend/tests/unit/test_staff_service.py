"""Unit tests for StaffService — sign-in and manager-only account management."""

import uuid

import pytest

from customer_diary.application.interfaces import StaffUserRepository
from customer_diary.application.schemas import StaffUserCreate, StaffUserUpdate
from customer_diary.application.services import StaffService
from customer_diary.application.services.staff_service import hash_pin
from customer_diary.domain.entities import StaffRole, StaffUser
from customer_diary.domain.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DuplicateEntityError,
    PermissionDeniedError,
)


class FakeStaffRepository(StaffUserRepository):
    def __init__(self):
        self._store: dict[str, StaffUser] = {}

    async def get_by_id(self, staff_id: str) -> StaffUser | None:
        return self._store.get(staff_id)

    async def get_by_staff_code(self, staff_code: str) -> StaffUser | None:
        return next((s for s in self._store.values() if s.staff_code == staff_code), None)

    async def search(self, *, text=None, role=None, skip=0, limit=25):
        items = [
            s for s in self._store.values()
            if (role is None or s.role == role)
            and (text is None or text.lower() in s.full_name.lower())
        ]
        return items[skip : skip + limit], len(items)

    async def create(self, staff: StaffUser) -> StaffUser:
        staff.id = str(uuid.uuid4())
        self._store[staff.id] = staff
        return staff

    async def update(self, staff: StaffUser) -> StaffUser:
        self._store[staff.id] = staff
        return staff

    async def delete(self, staff_id: str) -> bool:
        return self._store.pop(staff_id, None) is not None


@pytest.fixture
def repo():
    return FakeStaffRepository()


@pytest.fixture
def service(repo):
    return StaffService(repo)


@pytest.fixture
async def manager(service):
    return await service.ensure_bootstrap_manager("mgr", "1234", "Max Manager")


@pytest.mark.asyncio
async def test_bootstrap_only_when_empty(service, manager):
    assert manager.staff_code == "MGR"
    assert manager.is_manager
    assert await service.ensure_bootstrap_manager("other", "9999", "Other") is None


@pytest.mark.asyncio
async def test_authenticate_checks_pin_and_ignores_code_case(service, manager):
    assert (await service.authenticate(" mgr ", "1234")).id == manager.id
    assert await service.authenticate("MGR", "0000") is None
    assert await service.authenticate("NOPE", "1234") is None


@pytest.mark.asyncio
async def test_pin_is_stored_hashed(service, manager):
    staff = await service.create_staff(
        manager, StaffUserCreate(staff_code="jdo", full_name="Jo Doe", pin="5678")
    )
    assert staff.pin_hash != "5678"
    assert staff.staff_code == "JDO"
    assert hash_pin("5678") != hash_pin("5678")


@pytest.mark.asyncio
async def test_duplicate_staff_code(service, manager):
    data = StaffUserCreate(staff_code="JDO", full_name="Jo Doe", pin="5678")
    await service.create_staff(manager, data)
    with pytest.raises(DuplicateEntityError):
        await service.create_staff(manager, data)


@pytest.mark.asyncio
async def test_staff_cannot_manage_accounts(service, manager):
    staff = await service.create_staff(
        manager, StaffUserCreate(staff_code="JDO", full_name="Jo Doe", pin="5678")
    )
    with pytest.raises(PermissionDeniedError):
        await service.list_staff(staff)


@pytest.mark.asyncio
async def test_list_staff_pages(service, manager):
    for i in range(4):
        await service.create_staff(
            manager, StaffUserCreate(staff_code=f"S{i}", full_name=f"Staff {i}", pin="1111")
        )

    page = await service.list_staff(manager, skip=2, limit=2)

    assert page["total"] == 5
    assert page["page"] == 1
    assert page["total_pages"] == 3
    assert len(page["items"]) == 2


@pytest.mark.asyncio
async def test_cannot_delete_self(service, manager):
    with pytest.raises(BusinessRuleViolationError):
        await service.delete_staff(manager, manager.id)


@pytest.mark.asyncio
async def test_cannot_remove_last_manager(service, manager, repo):
    other = await service.create_staff(
        manager,
        StaffUserCreate(staff_code="BOSS", full_name="Second Manager", pin="1111", role=StaffRole.MANAGER),
    )
    await service.delete_staff(other, manager.id)

    with pytest.raises(ConflictError):
        await service.update_staff(other, other.id, StaffUserUpdate(role=StaffRole.STAFF))
    assert (await repo.get_by_id(other.id)).is_manager


@pytest.mark.asyncio
async def test_update_changes_pin(service, manager):
    staff = await service.create_staff(
        manager, StaffUserCreate(staff_code="JDO", full_name="Jo Doe", pin="5678")
    )
    await service.update_staff(manager, staff.id, StaffUserUpdate(pin="4321", full_name=" Jo D "))

    assert await service.authenticate("JDO", "5678") is None
    updated = await service.authenticate("JDO", "4321")
    assert updated.full_name == "Jo D"
