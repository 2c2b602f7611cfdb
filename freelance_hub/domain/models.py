"""Core domain models for submissions, attachments and published manifests.

This module defines the data structures used throughout the application:
- Attachment / FilePayload: files selected for a submission and the bytes sent to storage
- ValidationRule: per-role size and count limits
- ContentReference: content identifier plus gateway URL returned by the storage provider
- JobFields / ProfileFields: validated submission fields
- PublishedManifest: the immutable document produced by a successful publish
- SubmissionDraft: unvalidated form values kept in a draft store between edits
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from freelance_hub.utils.timestamps import ensure_utc, format_timestamp

MIB = 1024 * 1024

# Amounts are carried as text so that token amounts keep up to 18 decimals
AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,18})?$")

Currency = Literal["USD", "EUR", "ETH", "MATIC", "USDC"]


class AttachmentRole(str, Enum):
    """Named attachment categories, each governed by its own limits.

    Declaration order is the canonical order used for validation, upload
    scheduling and manifest key order.
    """

    PROFILE_PICTURE = "profilePicture"
    CERTIFICATION = "certification"
    PORTFOLIO_ITEM = "portfolioItem"
    JOB_ATTACHMENT = "jobAttachment"


class SubjectType(str, Enum):
    """Kinds of submission that can be published."""

    PROFILE = "profile"
    JOB = "job"


class ExperienceLevel(str, Enum):
    """Experience tiers, ordered Entry < Mid < Senior < Expert."""

    ENTRY = "Entry"
    MID = "Mid"
    SENIOR = "Senior"
    EXPERT = "Expert"

    @property
    def rank(self) -> int:
        """Position of the level on the ordered scale (Entry == 0)."""
        return list(ExperienceLevel).index(self)


class FilePayload(BaseModel):
    """A named blob handed to the storage provider as part of a batch."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="File name sent to the provider")
    data: bytes = Field(..., repr=False, description="Raw file content")


class Attachment(BaseModel):
    """A file selected for a submission.

    ``byte_size`` is what the validator checks. The bytes come either from
    ``content`` or, for attachments built from disk, from ``source_path`` when
    the payload is requested; either way they must match ``byte_size``.
    Validation-only callers may supply neither.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Original file name")
    byte_size: int = Field(..., ge=0, description="File size in bytes")
    role: AttachmentRole = Field(..., description="Attachment category")
    content: Optional[bytes] = Field(None, repr=False, description="File content")
    source_path: Optional[Path] = Field(None, description="File read when the payload is built")

    @model_validator(mode="after")
    def validate_content_size(self):
        if self.content is not None and len(self.content) != self.byte_size:
            raise ValueError(
                f"byte_size {self.byte_size} does not match the {len(self.content)} bytes of content"
            )
        return self

    @classmethod
    def from_bytes(cls, name: str, data: bytes, role: Union[AttachmentRole, str]) -> "Attachment":
        """Build an attachment whose size is taken from the data itself."""
        return cls(name=name, byte_size=len(data), role=role, content=data)

    @classmethod
    def from_path(cls, path: Union[str, Path], role: Union[AttachmentRole, str]) -> "Attachment":
        """Describe a file on disk without reading it.

        The size comes from the file system, so limits are checked before any
        bytes are loaded; the content is read by to_payload().

        Raises:
            OSError: If the file does not exist or cannot be inspected
        """
        path = Path(path)
        return cls(name=path.name, byte_size=path.stat().st_size, role=role, source_path=path)

    def to_payload(self) -> FilePayload:
        """Return the payload uploaded for this attachment.

        Raises:
            ValueError: If there is no content, or the file changed size since it was validated
            OSError: If the source file cannot be read
        """
        if self.content is not None:
            return FilePayload(name=self.name, data=self.content)

        if self.source_path is None:
            raise ValueError(f"Attachment '{self.name}' has no content loaded")

        data = self.source_path.read_bytes()
        if len(data) != self.byte_size:
            raise ValueError(
                f"Attachment '{self.name}' changed size since validation "
                f"({self.byte_size} -> {len(data)} bytes)"
            )
        return FilePayload(name=self.name, data=data)


class ValidationRule(BaseModel):
    """Size and count limits for one attachment role."""

    model_config = ConfigDict(frozen=True)

    max_bytes_per_file: int = Field(..., ge=0, description="Largest accepted file, inclusive")
    max_files_per_role: int = Field(..., ge=0, description="Most files accepted for the role")


DEFAULT_VALIDATION_RULES: Dict[AttachmentRole, ValidationRule] = {
    AttachmentRole.PROFILE_PICTURE: ValidationRule(max_bytes_per_file=5 * MIB, max_files_per_role=1),
    AttachmentRole.CERTIFICATION: ValidationRule(max_bytes_per_file=5 * MIB, max_files_per_role=10),
    AttachmentRole.PORTFOLIO_ITEM: ValidationRule(max_bytes_per_file=5 * MIB, max_files_per_role=10),
    AttachmentRole.JOB_ATTACHMENT: ValidationRule(max_bytes_per_file=10 * MIB, max_files_per_role=10),
}


class ContentReference(BaseModel):
    """Content identifier and resolvable URL of a stored object.

    Only ever produced from a successful upload.
    """

    model_config = ConfigDict(frozen=True)

    content_id: str = Field(..., min_length=1, description="Content identifier (CID)")
    url: str = Field(..., min_length=1, description="Gateway URL resolving the CID")

    def to_document(self) -> Dict[str, str]:
        return {"contentId": self.content_id, "url": self.url}


def _check_amount(value: str) -> str:
    value = value.strip()
    if not AMOUNT_PATTERN.match(value):
        raise ValueError("Invalid amount")
    return value


class JobFields(BaseModel):
    """Validated fields of a job posting."""

    subject_type: ClassVar[SubjectType] = SubjectType.JOB

    title: str = Field(..., min_length=3, description="Job title")
    description: str = Field(..., min_length=100, max_length=5000)
    category: str = Field(..., min_length=1)
    experience: ExperienceLevel = ExperienceLevel.ENTRY
    skills: List[str] = Field(..., min_length=1, description="Required skills")
    budget_min: str = Field(..., description="Minimum budget, numeric text")
    budget_max: str = Field(..., description="Maximum budget, numeric text")
    currency: Currency = "USD"
    duration_type: Literal["days", "weeks", "date"] = "days"
    duration_value: str = Field(..., min_length=1)
    work_type: Literal["Full-time", "Part-time", "Contract", "Hourly"] = "Contract"
    location_pref: Literal["Remote", "On-site", "Hybrid"] = "Remote"
    location: Optional[str] = None
    deadline: str = Field(..., min_length=1, description="Application deadline")
    contact_method: Literal["Wallet DM", "Email", "Phone"] = "Wallet DM"

    @field_validator("budget_min", "budget_max")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        return _check_amount(v)

    @field_validator("skills")
    @classmethod
    def strip_skills(cls, v: List[str]) -> List[str]:
        """Strip whitespace and drop blank or duplicate skills, keeping order."""
        seen = []
        for skill in v:
            stripped = skill.strip()
            if stripped and stripped not in seen:
                seen.append(stripped)
        if not seen:
            raise ValueError("Select at least one skill")
        return seen

    @model_validator(mode="after")
    def validate_budget_range(self):
        if Decimal(self.budget_min) > Decimal(self.budget_max):
            raise ValueError("budget_min cannot exceed budget_max")
        return self


class WorkHistoryEntry(BaseModel):
    """One repeatable work-history section of a profile."""

    name: str = Field(..., min_length=2, description="Client or employer")
    role: str = Field(..., min_length=2)
    start: str = Field(..., min_length=1)
    end: str = Field(..., min_length=1)
    description: str = Field(..., min_length=10)
    skills_used: List[str] = Field(default_factory=list)
    link: Optional[HttpUrl] = None


class ProfileFields(BaseModel):
    """Validated fields of a professional profile."""

    subject_type: ClassVar[SubjectType] = SubjectType.PROFILE

    display_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=6)
    country_code: str = Field(..., min_length=1)
    bio: str = Field(..., min_length=50, max_length=500)
    primary_occupation: str = Field(..., min_length=2)
    secondary_occupation: Optional[str] = None
    years_experience: str = Field(..., pattern=r"^\d+$")
    hourly_rate: str
    rate_currency: Currency = "USD"
    availability: Literal["Available", "Busy", "On Leave"] = "Available"
    skills: List[str] = Field(..., min_length=3)
    languages: List[str] = Field(..., min_length=1)
    work_history: List[WorkHistoryEntry] = Field(default_factory=list)
    visibility: Literal["Public", "Private"] = "Public"

    @field_validator("hourly_rate")
    @classmethod
    def validate_rate(cls, v: str) -> str:
        return _check_amount(v)


SubmissionFields = Union[ProfileFields, JobFields]


class PublishedManifest(BaseModel):
    """The immutable top-level document of a successful publish.

    ``attachment_references`` always carries every role; roles without
    attachments map to None rather than being omitted.
    """

    model_config = ConfigDict(frozen=True)

    subject_type: SubjectType
    fields: Union[JobFields, ProfileFields]
    attachment_references: Dict[AttachmentRole, Optional[ContentReference]]
    created_at: datetime
    manifest_reference: Optional[ContentReference] = None

    @field_validator("created_at")
    @classmethod
    def ensure_created_at_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_document(self) -> Dict[str, Any]:
        """Return the wire shape uploaded as the manifest (no manifestReference)."""
        return {
            "subjectType": self.subject_type.value,
            "fields": self.fields.model_dump(mode="json"),
            "attachmentReferences": {
                role.value: (reference.to_document() if reference else None)
                for role, reference in self.attachment_references.items()
            },
            "createdAt": format_timestamp(self.created_at, include_microseconds=True),
        }


class SubmissionDraft(BaseModel):
    """Partially filled, unvalidated form values for one submission."""

    subject_type: SubjectType
    values: Dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime

    @field_validator("updated_at")
    @classmethod
    def ensure_updated_at_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)
