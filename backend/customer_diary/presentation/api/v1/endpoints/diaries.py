"""Diary endpoints — list, create, read, patch, delete."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from customer_diary.application.schemas import (
    DiaryCreate,
    DiaryDetailResponse,
    DiaryPatch,
    DiaryResponse,
)
from customer_diary.application.services import DiaryService
from customer_diary.config import get_settings
from customer_diary.domain.entities import DiaryStatus, Priority, StaffUser
from customer_diary.domain.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
)
from customer_diary.infrastructure.dependencies import get_current_staff, get_diary_service

router = APIRouter(
    prefix="/diaries",
    tags=["Diaries"],
    dependencies=[Depends(get_current_staff)],
)


@router.get("", response_model=list[DiaryResponse])
async def list_diaries(
    q: str | None = Query(None, description="Substring of what the customer wants"),
    status_filter: DiaryStatus | None = Query(None, alias="status"),
    priority: Priority | None = Query(None),
    overdue: bool = Query(False, description="Only open diaries not looked at recently"),
    archived: bool = Query(False, description="Include archived diaries"),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    service: DiaryService = Depends(get_diary_service),
) -> list[DiaryResponse]:
    """Newest first, each with its customer summary."""
    settings = get_settings()
    limit = min(limit or settings.diary_list_default_limit, settings.diary_list_max_limit)
    diaries = await service.list_diaries(
        text=q,
        status=status_filter,
        priority=priority,
        overdue=overdue,
        include_archived=archived,
        skip=offset,
        limit=limit,
    )
    return [DiaryResponse.model_validate(d, from_attributes=True) for d in diaries]


@router.post("", response_model=DiaryDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_diary(
    data: DiaryCreate,
    staff: StaffUser = Depends(get_current_staff),
    service: DiaryService = Depends(get_diary_service),
) -> DiaryDetailResponse:
    try:
        diary = await service.create_diary(data, staff)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BusinessRuleViolationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return DiaryDetailResponse.model_validate(diary, from_attributes=True)


@router.get("/{diary_id}", response_model=DiaryDetailResponse)
async def get_diary(
    diary_id: str,
    service: DiaryService = Depends(get_diary_service),
) -> DiaryDetailResponse:
    """Full diary with customer, products and follow-ups; records the view."""
    try:
        diary = await service.open_diary(diary_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DiaryDetailResponse.model_validate(diary, from_attributes=True)


@router.patch("/{diary_id}", response_model=DiaryDetailResponse)
async def patch_diary(
    diary_id: str,
    data: DiaryPatch,
    staff: StaffUser = Depends(get_current_staff),
    service: DiaryService = Depends(get_diary_service),
) -> DiaryDetailResponse:
    """Overwrite the fields present in the body; returns the full diary."""
    try:
        diary = await service.patch_diary(diary_id, data, staff)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BusinessRuleViolationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return DiaryDetailResponse.model_validate(diary, from_attributes=True)


@router.delete("/{diary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_diary(
    diary_id: str,
    service: DiaryService = Depends(get_diary_service),
) -> None:
    """Delete an archived diary together with its products and follow-ups."""
    try:
        await service.delete_diary(diary_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BusinessRuleViolationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
