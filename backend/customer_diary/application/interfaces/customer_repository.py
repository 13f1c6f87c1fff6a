"""Abstract repository interface (port) for Customer persistence."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import Customer


class CustomerRepository(ABC):

    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Customer | None:
        ...

    @abstractmethod
    async def search(
        self, *, text: str | None = None, skip: int = 0, limit: int = 25
    ) -> list[Customer]:
        """Match ``text`` against name, phone, email and account number."""
        ...

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        ...

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        ...
