"""Application service for staff accounts and PIN sign-in."""

import logging
import math

from werkzeug.security import check_password_hash, generate_password_hash

from customer_diary.application.interfaces import StaffUserRepository
from customer_diary.application.schemas import StaffUserCreate, StaffUserUpdate
from customer_diary.domain.entities import StaffRole, StaffUser
from customer_diary.domain.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)


def hash_pin(pin: str) -> str:
    return generate_password_hash(pin)


def normalize_staff_code(staff_code: str) -> str:
    """Staff codes are matched case-insensitively and stored upper-case."""
    return staff_code.strip().upper()


class StaffService:
    """Staff account management (manager only) and credential checks."""

    def __init__(self, repository: StaffUserRepository):
        self._repository = repository

    # ── Sign-in ──────────────────────────────────────────────────────

    async def authenticate(self, staff_code: str, pin: str) -> StaffUser | None:
        """Return the staff member when the code and PIN match, else ``None``."""
        staff = await self._repository.get_by_staff_code(normalize_staff_code(staff_code))
        if staff is None or not check_password_hash(staff.pin_hash, pin):
            logger.info("Failed sign-in for staff code %r", staff_code)
            return None
        return staff

    async def ensure_bootstrap_manager(
        self, staff_code: str, pin: str, full_name: str
    ) -> StaffUser | None:
        """Create the first manager account when no staff exist yet."""
        _, total = await self._repository.search(limit=1)
        if total:
            return None
        manager = await self._repository.create(
            StaffUser(
                staff_code=normalize_staff_code(staff_code),
                full_name=full_name,
                pin_hash=hash_pin(pin),
                role=StaffRole.MANAGER,
            )
        )
        logger.info("Bootstrap manager %s created", manager.staff_code)
        return manager

    # ── Management ───────────────────────────────────────────────────

    async def list_staff(
        self,
        actor: StaffUser,
        *,
        text: str | None = None,
        role: StaffRole | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> dict:
        self._require_manager(actor)
        items, total = await self._repository.search(
            text=text or None, role=role, skip=skip, limit=limit
        )
        return {
            "items": items,
            "total": total,
            "page": skip // limit,
            "total_pages": math.ceil(total / limit),
        }

    async def create_staff(self, actor: StaffUser, data: StaffUserCreate) -> StaffUser:
        self._require_manager(actor)
        code = normalize_staff_code(data.staff_code)
        if await self._repository.get_by_staff_code(code) is not None:
            raise DuplicateEntityError("StaffUser", "staff_code", code)
        staff = StaffUser(
            staff_code=code,
            full_name=data.full_name.strip(),
            pin_hash=hash_pin(data.pin),
            role=data.role,
        )
        created = await self._repository.create(staff)
        logger.info("Staff %s created by %s", created.staff_code, actor.staff_code)
        return created

    async def update_staff(
        self, actor: StaffUser, staff_id: str, data: StaffUserUpdate
    ) -> StaffUser:
        self._require_manager(actor)
        staff = await self._get(staff_id)
        if data.role is not None and data.role != staff.role:
            if staff.is_manager:
                await self._ensure_other_manager_exists()
            staff.role = data.role
        if data.full_name is not None:
            staff.full_name = data.full_name.strip()
        if data.pin is not None:
            staff.pin_hash = hash_pin(data.pin)
        staff.touch()
        return await self._repository.update(staff)

    async def delete_staff(self, actor: StaffUser, staff_id: str) -> None:
        self._require_manager(actor)
        if staff_id == actor.id:
            raise BusinessRuleViolationError("You cannot delete your own account")
        staff = await self._get(staff_id)
        if staff.is_manager:
            await self._ensure_other_manager_exists()
        await self._repository.delete(staff_id)
        logger.info("Staff %s deleted by %s", staff.staff_code, actor.staff_code)

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _require_manager(actor: StaffUser) -> None:
        if not actor.is_manager:
            raise PermissionDeniedError()

    async def _get(self, staff_id: str) -> StaffUser:
        staff = await self._repository.get_by_id(staff_id)
        if staff is None:
            raise EntityNotFoundError("StaffUser", staff_id)
        return staff

    async def _ensure_other_manager_exists(self) -> None:
        _, managers = await self._repository.search(role=StaffRole.MANAGER, limit=1)
        if managers <= 1:
            raise ConflictError("Cannot delete the last manager")
