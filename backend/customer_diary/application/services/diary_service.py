"""Application service (use case) for Diary operations."""

import logging
from datetime import datetime, timedelta, timezone

from customer_diary.application.interfaces import (
    CustomerRepository,
    DiaryFilter,
    DiaryRepository,
    StaffUserRepository,
)
from customer_diary.application.schemas import DiaryCreate, DiaryPatch
from customer_diary.domain.entities import (
    Customer,
    Diary,
    DiaryStatus,
    Priority,
    ProductLine,
    StaffUser,
)
from customer_diary.domain.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

COLLECTED_UNPAID_MESSAGE = "Cannot set Collected unless paid (manager overrides)"
DELETE_NOT_ARCHIVED_MESSAGE = (
    "Cannot delete non-archived diary. Please archive it first."
)


class DiaryService:
    """Orchestrates diary business logic. Depends on repository ports (DI)."""

    def __init__(
        self,
        repository: DiaryRepository,
        customer_repository: CustomerRepository,
        staff_repository: StaffUserRepository,
        *,
        overdue_after_days: int = 3,
    ):
        self._repository = repository
        self._customers = customer_repository
        self._staff = staff_repository
        self._overdue_after = timedelta(days=overdue_after_days)

    async def list_diaries(
        self,
        *,
        text: str | None = None,
        status: DiaryStatus | None = None,
        priority: Priority | None = None,
        overdue: bool = False,
        include_archived: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Diary]:
        overdue_before = None
        if overdue:
            overdue_before = datetime.now(timezone.utc) - self._overdue_after
        filters = DiaryFilter(
            text=text or None,
            status=status,
            priority=priority,
            overdue_before=overdue_before,
            include_archived=include_archived,
            skip=skip,
            limit=limit,
        )
        return await self._repository.get_all(filters)

    async def get_diary(self, diary_id: str) -> Diary:
        """Return the full diary without recording a view."""
        diary = await self._repository.get_detail(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)
        return diary

    async def open_diary(self, diary_id: str) -> Diary:
        """Return the full diary and stamp ``last_viewed_at``."""
        diary = await self.get_diary(diary_id)
        viewed_at = datetime.now(timezone.utc)
        await self._repository.mark_viewed(diary_id, viewed_at)
        diary.last_viewed_at = viewed_at
        return diary

    async def create_diary(self, data: DiaryCreate, actor: StaffUser) -> Diary:
        customer_id = await self._resolve_customer(data)
        if data.assigned_to:
            await self._require_staff(data.assigned_to)

        diary = Diary(
            what_they_want=data.what_they_want,
            customer_id=customer_id,
            created_by=actor.id,
            created_by_code=actor.staff_code,
            assigned_to=data.assigned_to,
            priority=data.priority,
            is_paid=data.is_paid,
            is_ordered=data.is_ordered,
            has_texted_customer=data.has_texted_customer,
            admin_notes=data.admin_notes,
            due_date=data.due_date,
            payment_method=data.payment_method,
            amount_paid=data.amount_paid,
            invoice_po=data.invoice_po,
            paid_at=data.paid_at,
            store_location=data.store_location,
            tags=data.tags,
            supplier=data.supplier,
            order_no=data.order_no,
            eta_date=data.eta_date,
            order_status=data.order_status,
            order_notes=data.order_notes,
            products=[
                ProductLine(
                    name=p.name.strip(), qty=p.qty, unit_price=p.unit_price, upc=p.upc
                )
                for p in data.products
            ],
        )
        diary.recompute_subtotal()
        diary.total = data.total if data.total is not None else diary.subtotal

        created = await self._repository.create(diary)
        logger.info(
            "Diary %s created by %s (%d product lines)",
            created.id, actor.staff_code, len(created.products),
        )
        return await self.get_diary(created.id)

    async def patch_diary(
        self, diary_id: str, data: DiaryPatch, actor: StaffUser
    ) -> Diary:
        """Overwrite the fields sent by the client and return the full diary.

        Sending the same body twice leaves the diary in the same state.
        """
        diary = await self._repository.get_by_id(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)

        changes = data.changes()
        self._check_collected_rule(diary, changes, actor)
        if changes.get("assigned_to"):
            await self._require_staff(changes["assigned_to"])

        diary.apply_changes(changes)
        await self._repository.update(diary)
        logger.debug("Diary %s patched by %s: %s", diary_id, actor.staff_code, sorted(changes))
        return await self.get_diary(diary_id)

    async def delete_diary(self, diary_id: str) -> None:
        diary = await self._repository.get_by_id(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)
        if not diary.is_archived:
            raise BusinessRuleViolationError(DELETE_NOT_ARCHIVED_MESSAGE)
        await self._repository.delete(diary_id)
        logger.info("Diary %s deleted", diary_id)

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _check_collected_rule(diary: Diary, changes: dict, actor: StaffUser) -> None:
        if actor.is_manager:
            return
        status = changes.get("status", diary.status)
        is_paid = changes.get("is_paid", diary.is_paid)
        if status != DiaryStatus.COLLECTED or is_paid:
            return
        # Only block transitions into Collected+unpaid; an existing one may be edited
        becomes_collected = diary.status != DiaryStatus.COLLECTED
        loses_payment = diary.is_paid and not is_paid
        if becomes_collected or loses_payment:
            raise BusinessRuleViolationError(COLLECTED_UNPAID_MESSAGE)

    async def _resolve_customer(self, data: DiaryCreate) -> str | None:
        if data.customer_id:
            if await self._customers.get_by_id(data.customer_id) is None:
                raise EntityNotFoundError("Customer", data.customer_id)
            return data.customer_id
        if data.customer is not None:
            customer = await self._customers.create(
                Customer(
                    name=data.customer.name.strip(),
                    email=data.customer.email,
                    phone=data.customer.phone,
                    account_no=data.customer.account_no,
                )
            )
            return customer.id
        return None

    async def _require_staff(self, staff_id: str) -> None:
        if await self._staff.get_by_id(staff_id) is None:
            raise BusinessRuleViolationError(f"Unknown staff member '{staff_id}'")
