"""Concrete repository implementation for Diary backed by SQLAlchemy."""

import uuid
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from customer_diary.application.interfaces import DiaryFilter, DiaryRepository
from customer_diary.domain.entities import (
    CLOSED_STATUSES,
    Customer,
    Diary,
    DiaryStatus,
    Followup,
    FollowupType,
    Priority,
    ProductLine,
)
from customer_diary.infrastructure.database.models import (
    CustomerModel,
    DiaryFollowupModel,
    DiaryModel,
    DiaryProductModel,
)

# Scalar columns copied 1:1 between entity and model
_SCALAR_FIELDS = (
    "customer_id",
    "created_by",
    "assigned_to",
    "created_by_code",
    "what_they_want",
    "is_paid",
    "is_ordered",
    "has_texted_customer",
    "admin_notes",
    "due_date",
    "last_viewed_at",
    "archived_at",
    "payment_method",
    "amount_paid",
    "invoice_po",
    "paid_at",
    "store_location",
    "tags",
    "supplier",
    "order_no",
    "eta_date",
    "order_status",
    "order_notes",
    "subtotal",
    "total",
    "created_at",
    "updated_at",
)


def customer_to_entity(model: CustomerModel) -> Customer:
    return Customer(
        id=model.id,
        name=model.name,
        email=model.email,
        phone=model.phone,
        account_no=model.account_no,
        created_at=model.created_at,
    )


def product_to_entity(model: DiaryProductModel) -> ProductLine:
    return ProductLine(
        id=model.id,
        diary_id=model.diary_id,
        upc=model.upc,
        name=model.name,
        qty=model.qty,
        unit_price=model.unit_price,
    )


def followup_to_entity(model: DiaryFollowupModel) -> Followup:
    return Followup(
        id=model.id,
        diary_id=model.diary_id,
        entry_type=FollowupType(model.entry_type),
        message=model.message,
        staff_code=model.staff_code,
        created_at=model.created_at,
    )


class SQLAlchemyDiaryRepository(DiaryRepository):
    """Implements the DiaryRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: DiaryModel, *, with_related: bool = False) -> Diary:
        """Map ORM model → domain entity.

        Related collections are only touched when they were eagerly loaded;
        the relationships are ``lazy="raise"`` on purpose.
        """
        diary = Diary(
            id=model.id,
            status=DiaryStatus(model.status),
            priority=Priority(model.priority),
            **{name: getattr(model, name) for name in _SCALAR_FIELDS},
        )
        if with_related:
            diary.customer = customer_to_entity(model.customer) if model.customer else None
            diary.products = [product_to_entity(p) for p in model.products]
            diary.followups = [followup_to_entity(f) for f in model.followups]
        return diary

    async def get_by_id(self, diary_id: str) -> Diary | None:
        model = await self._session.get(DiaryModel, diary_id)
        return self._to_entity(model) if model else None

    async def get_detail(self, diary_id: str) -> Diary | None:
        stmt = (
            select(DiaryModel)
            .where(DiaryModel.id == diary_id)
            .options(
                selectinload(DiaryModel.customer),
                selectinload(DiaryModel.products),
                selectinload(DiaryModel.followups),
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model, with_related=True) if model else None

    async def get_all(self, filters: DiaryFilter) -> list[Diary]:
        stmt = select(DiaryModel).options(selectinload(DiaryModel.customer))

        if not filters.include_archived:
            stmt = stmt.where(DiaryModel.archived_at.is_(None))
        if filters.status is not None:
            stmt = stmt.where(DiaryModel.status == filters.status.value)
        if filters.priority is not None:
            stmt = stmt.where(DiaryModel.priority == filters.priority.value)
        if filters.text:
            stmt = stmt.where(DiaryModel.what_they_want.ilike(f"%{filters.text}%"))
        if filters.overdue_before is not None:
            last_touch = func.coalesce(DiaryModel.last_viewed_at, DiaryModel.created_at)
            stmt = stmt.where(last_touch < filters.overdue_before).where(
                DiaryModel.status.not_in([s.value for s in CLOSED_STATUSES])
            )

        stmt = (
            stmt.order_by(DiaryModel.created_at.desc())
            .offset(filters.skip)
            .limit(filters.limit)
        )
        result = await self._session.execute(stmt)
        diaries = []
        for model in result.scalars().all():
            diary = self._to_entity(model)
            diary.customer = customer_to_entity(model.customer) if model.customer else None
            diaries.append(diary)
        return diaries

    async def create(self, diary: Diary) -> Diary:
        if not diary.id:
            diary.id = str(uuid.uuid4())
        model = DiaryModel(
            id=diary.id,
            status=diary.status.value,
            priority=diary.priority.value,
            **{name: getattr(diary, name) for name in _SCALAR_FIELDS},
        )
        self._session.add(model)
        for line in diary.products:
            line.id = line.id or str(uuid.uuid4())
            line.diary_id = diary.id
            self._session.add(
                DiaryProductModel(
                    id=line.id,
                    diary_id=diary.id,
                    upc=line.upc,
                    name=line.name,
                    qty=line.qty,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                )
            )
        await self._session.flush()
        return diary

    async def update(self, diary: Diary) -> Diary:
        model = await self._session.get(DiaryModel, diary.id)
        if model is None:
            raise ValueError(f"Diary {diary.id} not found in database")
        model.status = diary.status.value
        model.priority = diary.priority.value
        for name in _SCALAR_FIELDS:
            if name == "created_at":
                continue
            setattr(model, name, getattr(diary, name))
        await self._session.flush()
        return self._to_entity(model)

    async def mark_viewed(self, diary_id: str, viewed_at: datetime) -> None:
        await self._session.execute(
            update(DiaryModel)
            .where(DiaryModel.id == diary_id)
            .values(last_viewed_at=viewed_at)
        )

    async def delete(self, diary_id: str) -> bool:
        model = await self._session.get(DiaryModel, diary_id)
        if model is None:
            return False
        await self._session.execute(
            delete(DiaryProductModel).where(DiaryProductModel.diary_id == diary_id)
        )
        await self._session.execute(
            delete(DiaryFollowupModel).where(DiaryFollowupModel.diary_id == diary_id)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True
