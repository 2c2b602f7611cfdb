"""Loading submission files for the command line.

A submission file is YAML:

    subject_type: job
    draft_key: post_job_draft        # optional
    published_key: job_published     # optional
    fields:
      title: Senior Solidity Engineer
      ...
    attachments:
      jobAttachment:
        - files/brief.pdf

Attachment paths are resolved relative to the submission file. Only their
sizes are read here; the content is loaded when the publish uploads it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.domain.models import (
    Attachment,
    AttachmentRole,
    JobFields,
    ProfileFields,
    SubjectType,
    SubmissionFields,
)

FIELD_MODELS = {
    SubjectType.JOB: JobFields,
    SubjectType.PROFILE: ProfileFields,
}


@dataclass
class Submission:
    """A parsed submission ready to publish."""

    fields: SubmissionFields
    attachments_by_role: Dict[AttachmentRole, List[Attachment]] = field(default_factory=dict)
    draft_key: Optional[str] = None
    published_key: Optional[str] = None

    @property
    def subject_type(self) -> SubjectType:
        return self.fields.subject_type


def parse_fields(subject_type: Union[SubjectType, str], data: Dict[str, Any]) -> SubmissionFields:
    """Validate raw field values for the given subject type.

    Raises:
        ConfigurationError: If the subject type is unknown or any field is invalid
    """
    try:
        model = FIELD_MODELS[SubjectType(subject_type)]
    except ValueError:
        raise ConfigurationError(
            f"Unknown subject_type: {subject_type}",
            suggestions=["Use 'job' or 'profile'"],
        )

    try:
        return model.model_validate(data or {})
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "fields"
            errors.append(f"{field_path}: {error['msg']}")
        raise ConfigurationError(f"Invalid {model.subject_type.value} fields", errors=errors) from e


def load_submission(path: Union[str, Path]) -> Submission:
    """Read a submission file and describe its attachments on disk.

    Raises:
        ConfigurationError: If the file, its fields or an attachment path is invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in submission {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read submission {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Submission {path} must contain a mapping at the top level")

    fields = parse_fields(data.get("subject_type", SubjectType.JOB.value), data.get("fields"))

    attachments_by_role: Dict[AttachmentRole, List[Attachment]] = {}
    errors = []
    for key, paths in (data.get("attachments") or {}).items():
        try:
            role = AttachmentRole(key)
        except ValueError:
            errors.append(f"attachments -> {key}: unknown attachment role")
            continue
        for file_path in paths or []:
            resolved = path.parent / file_path
            try:
                attachments_by_role.setdefault(role, []).append(Attachment.from_path(resolved, role))
            except OSError as e:
                errors.append(f"attachments -> {key}: cannot read {resolved} ({e.strerror})")

    if errors:
        raise ConfigurationError(f"Invalid attachments in submission {path}", errors=errors)

    return Submission(
        fields=fields,
        attachments_by_role=attachments_by_role,
        draft_key=data.get("draft_key"),
        published_key=data.get("published_key"),
    )
