"""Application service for a diary's product lines."""

import logging
from datetime import datetime, timezone

from customer_diary.application.interfaces import DiaryRepository, ProductLineRepository
from customer_diary.application.schemas import ProductLineCreate
from customer_diary.domain.entities import Diary, ProductLine
from customer_diary.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class ProductService:
    """Replaces product lists and keeps the diary subtotal in step with them."""

    def __init__(
        self,
        diary_repository: DiaryRepository,
        product_repository: ProductLineRepository,
    ):
        self._diaries = diary_repository
        self._products = product_repository

    async def replace_products(
        self, diary_id: str, lines: list[ProductLineCreate]
    ) -> Diary:
        """Overwrite the product list of a diary and return the full diary."""
        diary = await self._diaries.get_by_id(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)

        entities = [
            ProductLine(name=line.name.strip(), qty=line.qty, unit_price=line.unit_price, upc=line.upc)
            for line in lines
        ]
        diary.products = await self._products.replace_for_diary(diary_id, entities)
        await self._save_subtotal(diary)
        logger.debug("Diary %s now has %d product lines", diary_id, len(entities))
        return await self._detail(diary_id)

    async def delete_product(self, product_id: str) -> Diary:
        """Remove one line and return the full diary it belonged to."""
        diary_id = await self._products.delete(product_id)
        if diary_id is None:
            raise EntityNotFoundError("ProductLine", product_id)

        diary = await self._diaries.get_by_id(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)
        diary.products = await self._products.list_for_diary(diary_id)
        await self._save_subtotal(diary)
        return await self._detail(diary_id)

    async def _save_subtotal(self, diary: Diary) -> None:
        diary.recompute_subtotal()
        diary.updated_at = datetime.now(timezone.utc)
        await self._diaries.update(diary)

    async def _detail(self, diary_id: str) -> Diary:
        diary = await self._diaries.get_detail(diary_id)
        if diary is None:
            raise EntityNotFoundError("Diary", diary_id)
        return diary
