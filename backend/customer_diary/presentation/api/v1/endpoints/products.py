"""Product line endpoints — whole-list replace and single-line delete."""

from fastapi import APIRouter, Depends, HTTPException, status

from customer_diary.application.schemas import DiaryDetailResponse, ProductLinesReplace
from customer_diary.application.services import ProductService
from customer_diary.domain.exceptions import EntityNotFoundError
from customer_diary.infrastructure.dependencies import get_current_staff, get_product_service

router = APIRouter(tags=["Products"], dependencies=[Depends(get_current_staff)])


@router.put("/diaries/{diary_id}/products", response_model=DiaryDetailResponse)
async def replace_products(
    diary_id: str,
    data: ProductLinesReplace,
    service: ProductService = Depends(get_product_service),
) -> DiaryDetailResponse:
    """Replace the product list; line totals and subtotal are recomputed."""
    try:
        diary = await service.replace_products(diary_id, data.products)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DiaryDetailResponse.model_validate(diary, from_attributes=True)


@router.delete("/products/{product_id}", response_model=DiaryDetailResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> DiaryDetailResponse:
    try:
        diary = await service.delete_product(product_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DiaryDetailResponse.model_validate(diary, from_attributes=True)
