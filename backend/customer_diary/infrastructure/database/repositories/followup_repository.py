"""Concrete repository implementation for diary follow-ups."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from customer_diary.application.interfaces import FollowupRepository
from customer_diary.domain.entities import Followup
from customer_diary.infrastructure.database.models import DiaryFollowupModel
from customer_diary.infrastructure.database.repositories.diary_repository import (
    followup_to_entity,
)


class SQLAlchemyFollowupRepository(FollowupRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, followup_id: str) -> Followup | None:
        model = await self._session.get(DiaryFollowupModel, followup_id)
        return followup_to_entity(model) if model else None

    async def create(self, followup: Followup) -> Followup:
        if not followup.id:
            followup.id = str(uuid.uuid4())
        model = DiaryFollowupModel(
            id=followup.id,
            diary_id=followup.diary_id,
            entry_type=followup.entry_type.value,
            message=followup.message,
            staff_code=followup.staff_code,
            created_at=followup.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return followup_to_entity(model)

    async def update(self, followup: Followup) -> Followup:
        model = await self._session.get(DiaryFollowupModel, followup.id)
        if model is None:
            raise ValueError(f"Followup {followup.id} not found in database")
        model.entry_type = followup.entry_type.value
        model.message = followup.message
        model.staff_code = followup.staff_code
        await self._session.flush()
        return followup_to_entity(model)

    async def delete(self, followup_id: str) -> bool:
        model = await self._session.get(DiaryFollowupModel, followup_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
