"""Publish orchestration for profiles and job postings."""

from .models import PublishRunStats, RoleUploadStats
from .orchestrator import PublishOrchestrator
from .submission import Submission, load_submission, parse_fields

__all__ = [
    "PublishOrchestrator",
    "PublishRunStats",
    "RoleUploadStats",
    "Submission",
    "load_submission",
    "parse_fields",
]
