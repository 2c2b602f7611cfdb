"""Key-value store interface for submission drafts.

Drafts replace client-held form state: the caller saves partially filled
values under a key while editing, reloads them later, and the publish
orchestrator clears them once the submission is published.

Contract shared by every implementation:
- ``set`` overwrites unconditionally; concurrent writers to one key resolve
  as last write wins.
- ``get`` returns None for unknown keys.
- ``clear`` of an unknown key is a no-op.
- Stores are constructed and injected by the caller; none is a module-level
  singleton.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from freelance_hub.domain.models import SubmissionDraft


class DraftStore(ABC):
    """Abstract key-value store for SubmissionDraft values."""

    @abstractmethod
    def get(self, key: str) -> Optional[SubmissionDraft]:
        """Return the draft saved under key, or None."""

    @abstractmethod
    def set(self, key: str, draft: SubmissionDraft) -> None:
        """Save draft under key, replacing any previous value (last write wins)."""

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove the draft saved under key; unknown keys are ignored."""


class InMemoryDraftStore(DraftStore):
    """Process-local draft store backed by a dict."""

    def __init__(self) -> None:
        self._drafts: Dict[str, SubmissionDraft] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[SubmissionDraft]:
        with self._lock:
            draft = self._drafts.get(key)
        return draft.model_copy(deep=True) if draft is not None else None

    def set(self, key: str, draft: SubmissionDraft) -> None:
        with self._lock:
            self._drafts[key] = draft.model_copy(deep=True)

    def clear(self, key: str) -> None:
        with self._lock:
            self._drafts.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._drafts)
