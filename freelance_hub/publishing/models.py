"""Data models for publish run tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class RoleUploadStats:
    """
    Statistics for one role's batch upload within a publish run.

    Attributes:
        role: Attachment role uploaded
        file_count: Number of files in the batch
        total_bytes: Sum of file sizes in the batch
        duration_seconds: Time spent in the upload call
        content_id: Content identifier returned on success
        error_message: Error text when the upload failed
    """

    role: str
    file_count: int = 0
    total_bytes: int = 0
    duration_seconds: float = 0.0
    content_id: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.content_id is not None


@dataclass
class PublishRunStats:
    """
    Record of a single publish attempt.

    Attributes:
        run_id: Unique identifier for the attempt (also in every log record)
        subject_type: "profile" or "job"
        started_at: UTC timestamp when the attempt began
        finished_at: UTC timestamp when the attempt ended
        outcome: pending, published, validation_failed, preparation_failed,
            upload_failed or manifest_failed
        role_stats: Per-role upload statistics, in canonical role order
        manifest_content_id: Content identifier of the published manifest
        error_message: Error text of the failure that ended the attempt
    """

    run_id: str
    subject_type: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    outcome: str = "pending"
    role_stats: List[RoleUploadStats] = field(default_factory=list)
    manifest_content_id: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def total_files(self) -> int:
        return sum(s.file_count for s in self.role_stats)

    @property
    def had_errors(self) -> bool:
        return self.outcome not in ("pending", "published")
