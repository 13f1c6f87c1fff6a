"""Abstract repository interface (port) for StaffUser persistence."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import StaffRole, StaffUser


class StaffUserRepository(ABC):
    """Port for staff account persistence."""

    @abstractmethod
    async def get_by_id(self, staff_id: str) -> StaffUser | None:
        ...

    @abstractmethod
    async def get_by_staff_code(self, staff_code: str) -> StaffUser | None:
        """Case-sensitive lookup by the sign-in code."""
        ...

    @abstractmethod
    async def search(
        self,
        *,
        text: str | None = None,
        role: StaffRole | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> tuple[list[StaffUser], int]:
        """Return one page of matches plus the total match count."""
        ...

    @abstractmethod
    async def create(self, staff: StaffUser) -> StaffUser:
        ...

    @abstractmethod
    async def update(self, staff: StaffUser) -> StaffUser:
        ...

    @abstractmethod
    async def delete(self, staff_id: str) -> bool:
        ...
