from .json_file_draft_store import JsonFileDraftStore
from .memory_draft_store import InMemoryDraftStore

__all__ = ["InMemoryDraftStore", "JsonFileDraftStore"]
