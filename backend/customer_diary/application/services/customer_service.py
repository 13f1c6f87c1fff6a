"""Application service (use case) for Customer operations."""

from customer_diary.application.interfaces import CustomerRepository
from customer_diary.application.schemas import CustomerCreate, CustomerUpdate
from customer_diary.domain.entities import Customer
from customer_diary.domain.exceptions import EntityNotFoundError


class CustomerService:
    """Orchestrates customer lookup and upkeep. Depends on the repository port (DI)."""

    def __init__(self, repository: CustomerRepository):
        self._repository = repository

    async def get_customer(self, customer_id: str) -> Customer:
        customer = await self._repository.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer

    async def search_customers(
        self, text: str | None = None, skip: int = 0, limit: int = 25
    ) -> list[Customer]:
        return await self._repository.search(
            text=(text or "").strip() or None, skip=skip, limit=limit
        )

    async def create_customer(self, data: CustomerCreate) -> Customer:
        customer = Customer(
            name=data.name.strip(),
            email=data.email,
            phone=data.phone,
            account_no=data.account_no,
        )
        return await self._repository.create(customer)

    async def update_customer(self, customer_id: str, data: CustomerUpdate) -> Customer:
        customer = await self.get_customer(customer_id)
        for name, value in data.model_dump(exclude_unset=True).items():
            if name == "name" and not value:
                continue
            setattr(customer, name, value)
        return await self._repository.update(customer)
