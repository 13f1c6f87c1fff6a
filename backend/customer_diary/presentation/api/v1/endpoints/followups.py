"""Follow-up endpoints, nested under a diary."""

from fastapi import APIRouter, Depends, HTTPException, status

from customer_diary.application.schemas import (
    FollowupCreate,
    FollowupResponse,
    FollowupUpdate,
)
from customer_diary.application.services import FollowupService
from customer_diary.domain.entities import StaffUser
from customer_diary.domain.exceptions import EntityNotFoundError
from customer_diary.infrastructure.dependencies import get_current_staff, get_followup_service

router = APIRouter(
    prefix="/diaries/{diary_id}/followups",
    tags=["Follow-ups"],
    dependencies=[Depends(get_current_staff)],
)


@router.post("", response_model=FollowupResponse, status_code=status.HTTP_201_CREATED)
async def add_followup(
    diary_id: str,
    data: FollowupCreate,
    staff: StaffUser = Depends(get_current_staff),
    service: FollowupService = Depends(get_followup_service),
) -> FollowupResponse:
    try:
        followup = await service.add_followup(diary_id, data, staff)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FollowupResponse.model_validate(followup, from_attributes=True)


@router.patch("/{followup_id}", response_model=FollowupResponse)
async def update_followup(
    diary_id: str,
    followup_id: str,
    data: FollowupUpdate,
    service: FollowupService = Depends(get_followup_service),
) -> FollowupResponse:
    try:
        followup = await service.update_followup(diary_id, followup_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FollowupResponse.model_validate(followup, from_attributes=True)


@router.delete("/{followup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_followup(
    diary_id: str,
    followup_id: str,
    service: FollowupService = Depends(get_followup_service),
) -> None:
    try:
        await service.delete_followup(diary_id, followup_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
