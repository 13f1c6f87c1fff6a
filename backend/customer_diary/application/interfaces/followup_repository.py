"""Abstract repository interface (port) for diary follow-ups."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import Followup


class FollowupRepository(ABC):

    @abstractmethod
    async def get_by_id(self, followup_id: str) -> Followup | None:
        ...

    @abstractmethod
    async def create(self, followup: Followup) -> Followup:
        ...

    @abstractmethod
    async def update(self, followup: Followup) -> Followup:
        ...

    @abstractmethod
    async def delete(self, followup_id: str) -> bool:
        ...
