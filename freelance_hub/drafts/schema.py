"""Database schema for persisted drafts.

Defines the SQLAlchemy ORM model for the drafts table and conversion
between ORM rows and SubmissionDraft domain models.
"""

import json

from sqlalchemy import Column, Index, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from freelance_hub.domain.models import SubmissionDraft
from freelance_hub.logging import get_logger
from freelance_hub.utils.timestamps import format_timestamp, parse_iso_datetime

logger = get_logger(__name__, component="drafts")

Base = declarative_base()


class DraftModel(Base):
    """ORM model for the drafts table: one row per draft key."""

    __tablename__ = "drafts"

    draft_key = Column(String(255), primary_key=True, nullable=False)
    subject_type = Column(String(20), nullable=False)
    # Form values serialized as JSON text
    values_json = Column(Text, nullable=False)
    # ISO 8601 string with Z suffix
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_drafts_updated_at", "updated_at"),)

    def to_domain(self) -> SubmissionDraft:
        return SubmissionDraft(
            subject_type=self.subject_type,
            values=json.loads(self.values_json),
            updated_at=parse_iso_datetime(self.updated_at),
        )

    def apply(self, draft: SubmissionDraft) -> None:
        """Copy a domain draft onto this row."""
        dumped = draft.model_dump(mode="json")
        self.subject_type = dumped["subject_type"]
        self.values_json = json.dumps(dumped["values"], sort_keys=True)
        self.updated_at = format_timestamp(draft.updated_at, include_microseconds=True)

    @classmethod
    def from_domain(cls, draft_key: str, draft: SubmissionDraft) -> "DraftModel":
        row = cls(draft_key=draft_key)
        row.apply(draft)
        return row


def create_schema(engine: Engine) -> None:
    """Create the drafts table if it does not exist (idempotent)."""
    Base.metadata.create_all(engine, checkfirst=True)
    logger.debug("Draft schema ready", extra={"event": "drafts.schema.ready"})
