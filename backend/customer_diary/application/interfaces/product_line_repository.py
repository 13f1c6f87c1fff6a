"""Abstract repository interface (port) for diary product lines."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import ProductLine


class ProductLineRepository(ABC):

    @abstractmethod
    async def list_for_diary(self, diary_id: str) -> list[ProductLine]:
        ...

    @abstractmethod
    async def replace_for_diary(
        self, diary_id: str, lines: list[ProductLine]
    ) -> list[ProductLine]:
        """Delete every existing line of the diary, then insert ``lines``."""
        ...

    @abstractmethod
    async def delete(self, product_id: str) -> str | None:
        """Delete one line. Returns its diary id, or None if it did not exist."""
        ...
