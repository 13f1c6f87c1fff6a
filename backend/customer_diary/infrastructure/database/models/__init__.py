from .customer import CustomerModel
from .diary import DiaryFollowupModel, DiaryModel, DiaryProductModel
from .staff_user import StaffUserModel

__all__ = [
    "CustomerModel",
    "DiaryModel",
    "DiaryProductModel",
    "DiaryFollowupModel",
    "StaffUserModel",
]
