"""Draft store exceptions."""


class DraftStoreError(Exception):
    """Base exception for draft store failures.

    Raised when the backing store cannot be opened, read or written.
    """

    pass


class DraftStoreConnectionError(DraftStoreError):
    """Raised when the draft database cannot be initialized or reached."""

    pass
