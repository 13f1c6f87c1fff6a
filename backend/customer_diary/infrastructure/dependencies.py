"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from customer_diary.application.services import (
    CustomerService,
    DiaryService,
    FollowupService,
    ProductService,
    StaffService,
)
from customer_diary.config import get_settings
from customer_diary.domain.entities import StaffUser
from customer_diary.infrastructure.database.repositories import (
    SQLAlchemyCustomerRepository,
    SQLAlchemyDiaryRepository,
    SQLAlchemyFollowupRepository,
    SQLAlchemyProductLineRepository,
    SQLAlchemyStaffUserRepository,
)
from customer_diary.infrastructure.database.session import get_db_session

_basic = HTTPBasic(auto_error=False)


async def get_diary_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DiaryService, None]:
    """Provides a DiaryService with diary, customer and staff repositories wired up."""
    yield DiaryService(
        SQLAlchemyDiaryRepository(session),
        SQLAlchemyCustomerRepository(session),
        SQLAlchemyStaffUserRepository(session),
        overdue_after_days=get_settings().overdue_after_days,
    )


async def get_product_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ProductService, None]:
    yield ProductService(
        SQLAlchemyDiaryRepository(session),
        SQLAlchemyProductLineRepository(session),
    )


async def get_followup_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[FollowupService, None]:
    yield FollowupService(
        SQLAlchemyDiaryRepository(session),
        SQLAlchemyFollowupRepository(session),
    )


async def get_customer_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CustomerService, None]:
    """Provides a CustomerService instance with its repository wired up."""
    yield CustomerService(SQLAlchemyCustomerRepository(session))


async def get_staff_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[StaffService, None]:
    yield StaffService(SQLAlchemyStaffUserRepository(session))


async def get_current_staff(
    credentials: HTTPBasicCredentials | None = Depends(_basic),
    staff_service: StaffService = Depends(get_staff_service),
) -> StaffUser:
    """Resolve the signed-in staff member from HTTP Basic credentials.

    Username is the staff code, password the PIN. Any failure is a 401 so
    clients know to send the user back to sign-in.
    """
    staff = None
    if credentials is not None and credentials.username and credentials.password:
        staff = await staff_service.authenticate(credentials.username, credentials.password)
    if staff is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Please sign in",
            headers={"WWW-Authenticate": "Basic"},
        )
    return staff


async def require_manager(
    staff: StaffUser = Depends(get_current_staff),
) -> StaffUser:
    if not staff.is_manager:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Insufficient permissions",
        )
    return staff
