"""Attachment validation against per-role size and count limits."""

from .exceptions import ValidationError, ValidationKind
from .validator import AttachmentValidator, ValidationResult, group_by_role

__all__ = [
    "AttachmentValidator",
    "ValidationResult",
    "ValidationError",
    "ValidationKind",
    "group_by_role",
]
