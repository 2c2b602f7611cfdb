"""Draft stores holding unpublished submission values.

Public API:
    - DraftStore: get/set/clear interface (last write wins)
    - InMemoryDraftStore: dict-backed store
    - SqlDraftStore: SQLAlchemy-backed store

Example usage:
    >>> from freelance_hub.drafts import SqlDraftStore
    >>> store = SqlDraftStore("sqlite:///./data/drafts.db")
    >>> store.get("post_job_draft")
"""

from .exceptions import DraftStoreConnectionError, DraftStoreError
from .sql_store import SqlDraftStore
from .store import DraftStore, InMemoryDraftStore

__all__ = [
    "DraftStore",
    "InMemoryDraftStore",
    "SqlDraftStore",
    "DraftStoreError",
    "DraftStoreConnectionError",
]
