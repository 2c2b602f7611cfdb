"""Domain models for the freelance hub."""

from .models import (
    DEFAULT_VALIDATION_RULES,
    MIB,
    Attachment,
    AttachmentRole,
    ContentReference,
    ExperienceLevel,
    FilePayload,
    JobFields,
    ProfileFields,
    PublishedManifest,
    SubjectType,
    SubmissionDraft,
    SubmissionFields,
    ValidationRule,
    WorkHistoryEntry,
)

__all__ = [
    "Attachment",
    "AttachmentRole",
    "ContentReference",
    "DEFAULT_VALIDATION_RULES",
    "ExperienceLevel",
    "FilePayload",
    "JobFields",
    "MIB",
    "ProfileFields",
    "PublishedManifest",
    "SubjectType",
    "SubmissionDraft",
    "SubmissionFields",
    "ValidationRule",
    "WorkHistoryEntry",
]
