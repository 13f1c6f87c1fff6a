"""Staff account endpoints — manager only."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from customer_diary.application.schemas import (
    StaffUserCreate,
    StaffUserPage,
    StaffUserResponse,
    StaffUserUpdate,
)
from customer_diary.application.services import StaffService
from customer_diary.domain.entities import StaffRole, StaffUser
from customer_diary.domain.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from customer_diary.infrastructure.dependencies import get_staff_service, require_manager

router = APIRouter(prefix="/staff-users", tags=["Staff"])


@router.get("", response_model=StaffUserPage)
async def list_staff(
    query: str | None = Query(None, description="Name or staff code"),
    role: StaffRole | None = Query(None),
    limit: int = Query(25, ge=1, le=200),
    offset: int = Query(0, ge=0),
    manager: StaffUser = Depends(require_manager),
    service: StaffService = Depends(get_staff_service),
) -> StaffUserPage:
    page = await service.list_staff(manager, text=query, role=role, skip=offset, limit=limit)
    return StaffUserPage(
        items=[StaffUserResponse.model_validate(s, from_attributes=True) for s in page["items"]],
        total=page["total"],
        page=page["page"],
        total_pages=page["total_pages"],
    )


@router.post("", response_model=StaffUserResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    data: StaffUserCreate,
    manager: StaffUser = Depends(require_manager),
    service: StaffService = Depends(get_staff_service),
) -> StaffUserResponse:
    try:
        staff = await service.create_staff(manager, data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Staff code already exists") from e
    return StaffUserResponse.model_validate(staff, from_attributes=True)


@router.patch("/{staff_id}", response_model=StaffUserResponse)
async def update_staff(
    staff_id: str,
    data: StaffUserUpdate,
    manager: StaffUser = Depends(require_manager),
    service: StaffService = Depends(get_staff_service),
) -> StaffUserResponse:
    try:
        staff = await service.update_staff(manager, staff_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return StaffUserResponse.model_validate(staff, from_attributes=True)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_staff(
    staff_id: str,
    manager: StaffUser = Depends(require_manager),
    service: StaffService = Depends(get_staff_service),
) -> None:
    try:
        await service.delete_staff(manager, staff_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BusinessRuleViolationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
