"""Concrete repository implementation for diary product lines."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from customer_diary.application.interfaces import ProductLineRepository
from customer_diary.domain.entities import ProductLine
from customer_diary.infrastructure.database.models import DiaryProductModel
from customer_diary.infrastructure.database.repositories.diary_repository import (
    product_to_entity,
)


class SQLAlchemyProductLineRepository(ProductLineRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_diary(self, diary_id: str) -> list[ProductLine]:
        result = await self._session.execute(
            select(DiaryProductModel).where(DiaryProductModel.diary_id == diary_id)
        )
        return [product_to_entity(m) for m in result.scalars().all()]

    async def replace_for_diary(
        self, diary_id: str, lines: list[ProductLine]
    ) -> list[ProductLine]:
        await self._session.execute(
            delete(DiaryProductModel).where(DiaryProductModel.diary_id == diary_id)
        )
        for line in lines:
            # Ids are reissued: the whole list is the unit of overwrite
            line.id = str(uuid.uuid4())
            line.diary_id = diary_id
            self._session.add(
                DiaryProductModel(
                    id=line.id,
                    diary_id=diary_id,
                    upc=line.upc,
                    name=line.name,
                    qty=line.qty,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                )
            )
        await self._session.flush()
        return lines

    async def delete(self, product_id: str) -> str | None:
        model = await self._session.get(DiaryProductModel, product_id)
        if model is None:
            return None
        diary_id = model.diary_id
        await self._session.delete(model)
        await self._session.flush()
        return diary_id
