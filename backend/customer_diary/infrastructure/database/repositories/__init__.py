from .customer_repository import SQLAlchemyCustomerRepository
from .diary_repository import SQLAlchemyDiaryRepository
from .followup_repository import SQLAlchemyFollowupRepository
from .product_line_repository import SQLAlchemyProductLineRepository
from .staff_user_repository import SQLAlchemyStaffUserRepository

__all__ = [
    "SQLAlchemyCustomerRepository",
    "SQLAlchemyDiaryRepository",
    "SQLAlchemyFollowupRepository",
    "SQLAlchemyProductLineRepository",
    "SQLAlchemyStaffUserRepository",
]
