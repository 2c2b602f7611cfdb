"""Per-file and per-batch attachment limit checks.

The validator is pure: it performs no I/O, never mutates its inputs, and
returns the same result for the same attachments and rules. Publishing runs it
to completion before the first upload is attempted.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.domain.models import Attachment, AttachmentRole, ValidationRule
from freelance_hub.logging import get_logger

from .exceptions import ValidationError

logger = get_logger(__name__, component="validation")


@dataclass
class ValidationResult:
    """Outcome of validating a set of attachments.

    Attributes:
        is_valid: True when every role is within its limits
        error: The first violation found (None when valid)
        file_counts: Number of files seen per role, for roles with attachments
    """

    is_valid: bool
    error: Optional[ValidationError] = None
    file_counts: Dict[AttachmentRole, int] = field(default_factory=dict)

    def raise_for_error(self) -> None:
        """Raise the recorded ValidationError, if any."""
        if self.error is not None:
            raise self.error


def group_by_role(attachments: Iterable[Attachment]) -> Dict[AttachmentRole, List[Attachment]]:
    """Group attachments by role in canonical role order, keeping file order."""
    grouped: Dict[AttachmentRole, List[Attachment]] = {}
    for role in AttachmentRole:
        files = [attachment for attachment in attachments if attachment.role == role]
        if files:
            grouped[role] = files
    return grouped


class AttachmentValidator:
    """Checks attachments against per-role ValidationRules.

    Roles are visited in canonical order. Within a role the file count is
    checked first, then each file's size in input order; the first violation
    ends validation. A file exactly at the size limit is accepted.
    """

    def validate(
        self,
        attachments: List[Attachment],
        rules: Mapping[AttachmentRole, ValidationRule],
    ) -> ValidationResult:
        """Validate attachments against rules.

        Args:
            attachments: Attachments of any roles
            rules: Validation rule per role

        Returns:
            ValidationResult describing the first violation, if any

        Raises:
            ConfigurationError: If attachments use a role that has no rule
        """
        grouped = group_by_role(list(attachments))
        file_counts = {role: len(files) for role, files in grouped.items()}

        for role, files in grouped.items():
            rule = rules.get(role)
            if rule is None:
                raise ConfigurationError(
                    f"No validation rule configured for attachment role '{role.value}'",
                    suggestions=[f"Add an 'attachments.{role.value}' entry to the configuration"],
                )

            error = self._check_role(role, files, rule)
            if error is not None:
                logger.warning(
                    f"Attachment validation failed: {error}",
                    extra={
                        "event": "validation.failed",
                        "role": role.value,
                        "kind": error.kind.value,
                        "file_name": error.file_name,
                        "limit": error.limit,
                    },
                )
                return ValidationResult(is_valid=False, error=error, file_counts=file_counts)

        logger.debug(
            "Attachments validated",
            extra={
                "event": "validation.succeeded",
                "file_counts": {role.value: count for role, count in file_counts.items()},
            },
        )
        return ValidationResult(is_valid=True, file_counts=file_counts)

    @staticmethod
    def _check_role(
        role: AttachmentRole, files: List[Attachment], rule: ValidationRule
    ) -> Optional[ValidationError]:
        if len(files) > rule.max_files_per_role:
            return ValidationError.too_many_files(role, len(files), rule.max_files_per_role)

        for attachment in files:
            if attachment.byte_size > rule.max_bytes_per_file:
                return ValidationError.too_large(
                    role, attachment.name, attachment.byte_size, rule.max_bytes_per_file
                )

        return None
