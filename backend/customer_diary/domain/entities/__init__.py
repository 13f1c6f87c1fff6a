from .customer import Customer
from .diary import CLOSED_STATUSES, PATCHABLE_FIELDS, Diary, DiaryStatus, Priority
from .editing import (
    CommitResult,
    CommitStatus,
    Draft,
    DraftKey,
    EditorState,
    Notification,
    Record,
)
from .followup import Followup, FollowupType
from .product_line import ProductLine
from .staff_user import StaffRole, StaffUser

__all__ = [
    "Customer",
    "CLOSED_STATUSES",
    "PATCHABLE_FIELDS",
    "Diary",
    "DiaryStatus",
    "Priority",
    "CommitResult",
    "CommitStatus",
    "Draft",
    "DraftKey",
    "EditorState",
    "Notification",
    "Record",
    "Followup",
    "FollowupType",
    "ProductLine",
    "StaffRole",
    "StaffUser",
]
