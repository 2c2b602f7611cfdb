"""Exceptions raised when attachments break their role's limits."""

from enum import Enum
from typing import Optional

from freelance_hub.domain.models import AttachmentRole


class ValidationKind(str, Enum):
    """Which limit an attachment batch violated."""

    TOO_LARGE = "tooLarge"
    TOO_MANY_FILES = "tooManyFiles"


class ValidationError(Exception):
    """An attachment batch violates its role's size or count limit.

    Fatal to the current submission and raised before any upload starts.

    Attributes:
        role: Role whose rule was violated
        kind: ValidationKind.TOO_LARGE or ValidationKind.TOO_MANY_FILES
        file_name: Offending file (tooLarge only)
        byte_size: Size of the offending file (tooLarge only)
        count: Number of files supplied for the role (tooManyFiles only)
        limit: The limit that was exceeded
    """

    def __init__(
        self,
        message: str,
        role: AttachmentRole,
        kind: ValidationKind,
        limit: int,
        file_name: Optional[str] = None,
        byte_size: Optional[int] = None,
        count: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.role = role
        self.kind = kind
        self.limit = limit
        self.file_name = file_name
        self.byte_size = byte_size
        self.count = count

    @classmethod
    def too_large(
        cls, role: AttachmentRole, file_name: str, byte_size: int, limit: int
    ) -> "ValidationError":
        return cls(
            f"{role.value} file '{file_name}' is {byte_size} bytes, limit is {limit} bytes",
            role=role,
            kind=ValidationKind.TOO_LARGE,
            limit=limit,
            file_name=file_name,
            byte_size=byte_size,
        )

    @classmethod
    def too_many_files(cls, role: AttachmentRole, count: int, limit: int) -> "ValidationError":
        return cls(
            f"{count} {role.value} files supplied, limit is {limit}",
            role=role,
            kind=ValidationKind.TOO_MANY_FILES,
            limit=limit,
            count=count,
        )
