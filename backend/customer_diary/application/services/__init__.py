from .commit_pipeline import CommitPipeline
from .customer_service import CustomerService
from .debouncer import Debouncer
from .diary_service import DiaryService
from .draft_editor import DraftAwareEditor, EditorWorkspace
from .followup_service import FollowupService
from .product_service import ProductService
from .reconciler import ReconciledState, Reconciler
from .record_store import RemoteRecordStore
from .staff_service import StaffService

__all__ = [
    "CommitPipeline",
    "CustomerService",
    "Debouncer",
    "DiaryService",
    "DraftAwareEditor",
    "EditorWorkspace",
    "FollowupService",
    "ProductService",
    "ReconciledState",
    "Reconciler",
    "RemoteRecordStore",
    "StaffService",
]
