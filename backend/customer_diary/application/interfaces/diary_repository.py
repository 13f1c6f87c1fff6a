"""Abstract repository interface (port) for Diary persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from customer_diary.domain.entities import Diary, DiaryStatus, Priority


@dataclass
class DiaryFilter:
    """Filters for listing diaries; ``None`` means "don't filter"."""

    text: str | None = None
    status: DiaryStatus | None = None
    priority: Priority | None = None
    overdue_before: datetime | None = None  # last view / creation older than this
    include_archived: bool = False
    skip: int = 0
    limit: int = 50


class DiaryRepository(ABC):
    """Port for diary persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, diary_id: str) -> Diary | None:
        """Retrieve the bare diary row (no related aggregates)."""
        ...

    @abstractmethod
    async def get_detail(self, diary_id: str) -> Diary | None:
        """Retrieve a diary with its customer, product lines and follow-ups."""
        ...

    @abstractmethod
    async def get_all(self, filters: DiaryFilter) -> list[Diary]:
        """Retrieve a filtered, paginated list, newest first, with customers."""
        ...

    @abstractmethod
    async def create(self, diary: Diary) -> Diary:
        """Persist a new diary (and any product lines attached to it)."""
        ...

    @abstractmethod
    async def update(self, diary: Diary) -> Diary:
        """Persist the scalar fields of an existing diary."""
        ...

    @abstractmethod
    async def mark_viewed(self, diary_id: str, viewed_at: datetime) -> None:
        """Stamp ``last_viewed_at`` without touching ``updated_at``."""
        ...

    @abstractmethod
    async def delete(self, diary_id: str) -> bool:
        """Delete a diary and everything attached to it."""
        ...
