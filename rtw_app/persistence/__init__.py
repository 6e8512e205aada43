"""Progress persistence for completed reading challenges."""

from .progress_store import ProgressStore, StoredSession

__all__ = ["ProgressStore", "StoredSession"]
