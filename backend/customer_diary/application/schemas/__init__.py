from .customer import CustomerCreate, CustomerResponse, CustomerUpdate
from .diary import (
    DiaryCreate,
    DiaryDetailResponse,
    DiaryPatch,
    DiaryResponse,
)
from .followup import FollowupCreate, FollowupResponse, FollowupUpdate
from .product import ProductLineCreate, ProductLineResponse, ProductLinesReplace
from .staff_user import (
    StaffUserCreate,
    StaffUserPage,
    StaffUserResponse,
    StaffUserUpdate,
)

__all__ = [
    "CustomerCreate",
    "CustomerResponse",
    "CustomerUpdate",
    "DiaryCreate",
    "DiaryDetailResponse",
    "DiaryPatch",
    "DiaryResponse",
    "FollowupCreate",
    "FollowupResponse",
    "FollowupUpdate",
    "ProductLineCreate",
    "ProductLineResponse",
    "ProductLinesReplace",
    "StaffUserCreate",
    "StaffUserPage",
    "StaffUserResponse",
    "StaffUserUpdate",
]
