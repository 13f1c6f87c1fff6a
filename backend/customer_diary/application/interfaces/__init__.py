from .customer_repository import CustomerRepository
from .diary_repository import DiaryFilter, DiaryRepository
from .draft_store import DraftStore
from .editing_concern import EditingConcern, RecordGateway
from .followup_repository import FollowupRepository
from .notifier import Notifier
from .product_line_repository import ProductLineRepository
from .staff_user_repository import StaffUserRepository

__all__ = [
    "CustomerRepository",
    "DiaryFilter",
    "DiaryRepository",
    "DraftStore",
    "EditingConcern",
    "RecordGateway",
    "FollowupRepository",
    "Notifier",
    "ProductLineRepository",
    "StaffUserRepository",
]
