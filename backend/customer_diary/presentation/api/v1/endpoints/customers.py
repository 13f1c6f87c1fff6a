"""Customer endpoints — search, create, read, update."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from customer_diary.application.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
)
from customer_diary.application.services import CustomerService
from customer_diary.domain.exceptions import EntityNotFoundError
from customer_diary.infrastructure.dependencies import get_current_staff, get_customer_service

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(get_current_staff)],
)


@router.get("", response_model=list[CustomerResponse])
async def search_customers(
    q: str | None = Query(None, description="Name, phone, email or account number"),
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerResponse]:
    customers = await service.search_customers(q, skip=skip, limit=limit)
    return [CustomerResponse.model_validate(c, from_attributes=True) for c in customers]


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    customer = await service.create_customer(data)
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    try:
        customer = await service.get_customer(customer_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    try:
        customer = await service.update_customer(customer_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomerResponse.model_validate(customer, from_attributes=True)
