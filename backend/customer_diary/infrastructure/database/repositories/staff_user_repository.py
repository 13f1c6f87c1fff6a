"""Concrete repository implementation for StaffUser backed by SQLAlchemy."""

import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from customer_diary.application.interfaces import StaffUserRepository
from customer_diary.domain.entities import StaffRole, StaffUser
from customer_diary.infrastructure.database.models import StaffUserModel


class SQLAlchemyStaffUserRepository(StaffUserRepository):
    """Implements the StaffUserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: StaffUserModel) -> StaffUser:
        return StaffUser(
            id=model.id,
            staff_code=model.staff_code,
            full_name=model.full_name,
            role=StaffRole(model.role),
            pin_hash=model.pin_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, staff_id: str) -> StaffUser | None:
        model = await self._session.get(StaffUserModel, staff_id)
        return self._to_entity(model) if model else None

    async def get_by_staff_code(self, staff_code: str) -> StaffUser | None:
        result = await self._session.execute(
            select(StaffUserModel).where(StaffUserModel.staff_code == staff_code)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def search(
        self,
        *,
        text: str | None = None,
        role: StaffRole | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> tuple[list[StaffUser], int]:
        conditions = []
        if text:
            pattern = f"%{text}%"
            conditions.append(
                or_(
                    StaffUserModel.full_name.ilike(pattern),
                    StaffUserModel.staff_code.ilike(pattern),
                )
            )
        if role is not None:
            conditions.append(StaffUserModel.role == role.value)

        count_stmt = select(func.count()).select_from(StaffUserModel).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(StaffUserModel)
            .where(*conditions)
            .order_by(StaffUserModel.created_at)
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()], int(total)

    async def create(self, staff: StaffUser) -> StaffUser:
        if not staff.id:
            staff.id = str(uuid.uuid4())
        model = StaffUserModel(
            id=staff.id,
            staff_code=staff.staff_code,
            full_name=staff.full_name,
            role=staff.role.value,
            pin_hash=staff.pin_hash,
            created_at=staff.created_at,
            updated_at=staff.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, staff: StaffUser) -> StaffUser:
        model = await self._session.get(StaffUserModel, staff.id)
        if model is None:
            raise ValueError(f"StaffUser {staff.id} not found in database")
        model.full_name = staff.full_name
        model.role = staff.role.value
        model.pin_hash = staff.pin_hash
        model.updated_at = staff.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, staff_id: str) -> bool:
        model = await self._session.get(StaffUserModel, staff_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
