"""Concrete repository implementation for Customer backed by SQLAlchemy."""

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from customer_diary.application.interfaces import CustomerRepository
from customer_diary.domain.entities import Customer
from customer_diary.infrastructure.database.models import CustomerModel
from customer_diary.infrastructure.database.repositories.diary_repository import (
    customer_to_entity,
)


class SQLAlchemyCustomerRepository(CustomerRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, customer_id: str) -> Customer | None:
        model = await self._session.get(CustomerModel, customer_id)
        return customer_to_entity(model) if model else None

    async def search(
        self, *, text: str | None = None, skip: int = 0, limit: int = 25
    ) -> list[Customer]:
        stmt = select(CustomerModel)
        if text:
            pattern = f"%{text}%"
            stmt = stmt.where(
                or_(
                    CustomerModel.name.ilike(pattern),
                    CustomerModel.phone.ilike(pattern),
                    CustomerModel.email.ilike(pattern),
                    CustomerModel.account_no.ilike(pattern),
                )
            )
        stmt = stmt.order_by(CustomerModel.name).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [customer_to_entity(m) for m in result.scalars().all()]

    async def create(self, customer: Customer) -> Customer:
        if not customer.id:
            customer.id = str(uuid.uuid4())
        model = CustomerModel(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            account_no=customer.account_no,
            created_at=customer.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return customer_to_entity(model)

    async def update(self, customer: Customer) -> Customer:
        model = await self._session.get(CustomerModel, customer.id)
        if model is None:
            raise ValueError(f"Customer {customer.id} not found in database")
        model.name = customer.name
        model.email = customer.email
        model.phone = customer.phone
        model.account_no = customer.account_no
        await self._session.flush()
        return customer_to_entity(model)
