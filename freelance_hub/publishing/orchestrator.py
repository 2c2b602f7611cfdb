"""Publish orchestration: validate, upload role batches, publish the manifest."""

import contextvars
import time
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union
from uuid import uuid4

from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.domain.models import (
    DEFAULT_VALIDATION_RULES,
    Attachment,
    AttachmentRole,
    ContentReference,
    FilePayload,
    PublishedManifest,
    SubmissionDraft,
    SubmissionFields,
    ValidationRule,
)
from freelance_hub.drafts.exceptions import DraftStoreError
from freelance_hub.drafts.store import DraftStore
from freelance_hub.logging import get_logger
from freelance_hub.logging.context import log_context
from freelance_hub.storage.base import MANIFEST_TARGET, ContentAddressableUploader
from freelance_hub.utils.timestamps import utc_now
from freelance_hub.validation.exceptions import ValidationError
from freelance_hub.validation.validator import AttachmentValidator, group_by_role

from .models import PublishRunStats, RoleUploadStats

logger = get_logger(__name__, component="publish")

AttachmentsByRole = Mapping[Union[AttachmentRole, str], Sequence[Attachment]]


class PublishOrchestrator:
    """
    Publishes one submission as a content-addressed manifest.

    The orchestrator coordinates attachment validation, the per-role batch
    uploads, and the manifest upload. A manifest is produced only when every
    batch it references was stored; any failure aborts the publish and
    propagates to the caller unchanged.
    """

    def __init__(
        self,
        uploader: ContentAddressableUploader,
        rules: Optional[Mapping[AttachmentRole, ValidationRule]] = None,
        validator: Optional[AttachmentValidator] = None,
        draft_store: Optional[DraftStore] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the orchestrator.

        Args:
            uploader: Storage client used for batches and the manifest
            rules: Default validation rules (per-call rules take precedence)
            validator: Attachment validator (a fresh AttachmentValidator by default)
            draft_store: Draft store cleared after a successful publish
            clock: Source of the manifest creation timestamp
        """
        self.uploader = uploader
        self.rules = dict(rules) if rules is not None else dict(DEFAULT_VALIDATION_RULES)
        self.validator = validator or AttachmentValidator()
        self.draft_store = draft_store
        self.clock = clock
        self.last_run: Optional[PublishRunStats] = None

    def publish(
        self,
        fields: SubmissionFields,
        attachments_by_role: Optional[AttachmentsByRole] = None,
        rules: Optional[Mapping[AttachmentRole, ValidationRule]] = None,
        draft_key: Optional[str] = None,
        published_key: Optional[str] = None,
    ) -> PublishedManifest:
        """
        Validate, upload and publish a submission.

        Steps:
        1. Validate every role's attachments; nothing is uploaded on failure
        2. Upload each non-empty role as one batch, roles running concurrently
        3. Abort if any batch failed (the manifest is never uploaded)
        4. Assemble the manifest; roles without attachments map to None
        5. Upload the manifest and return it with its manifest_reference
        6. Clear the submission's draft, when a draft store and key are given
        7. Record the manifest reference under published_key, when given

        Every failure is recorded in last_run before it propagates.

        Args:
            fields: Validated profile or job fields
            attachments_by_role: Attachments filed under their role
            rules: Validation rules for this call (defaults to the orchestrator's)
            draft_key: Key of the draft to clear once published
            published_key: Draft store key that receives the last published record

        Returns:
            The completed PublishedManifest

        Raises:
            ValidationError: An attachment broke its role's limits
            ConfigurationError: An attachment role has no validation rule
            ValueError: An attachment has no content, or its file changed size
            OSError: An attachment's file could not be read
            StorageError: A batch or the manifest upload failed
        """
        active_rules = rules if rules is not None else self.rules
        attachments = self._flatten(attachments_by_role or {})
        stats = PublishRunStats(
            run_id=uuid4().hex,
            subject_type=fields.subject_type.value,
            started_at=utc_now(),
        )
        self.last_run = stats

        with log_context(publish_run_id=stats.run_id, subject_type=stats.subject_type):
            logger.info(
                "Publish started",
                extra={
                    "event": "publish.run.started",
                    "attachment_count": len(attachments),
                },
            )

            try:
                self.validator.validate(attachments, active_rules).raise_for_error()
            except (ValidationError, ConfigurationError) as e:
                self._finish(stats, "validation_failed", e)
                raise

            batches = group_by_role(attachments)
            try:
                payloads = {
                    role: [attachment.to_payload() for attachment in files]
                    for role, files in batches.items()
                }
            except (ValueError, OSError) as e:
                self._finish(stats, "preparation_failed", e)
                raise

            try:
                references = self._upload_batches(payloads, stats)
            except Exception as e:
                self._finish(stats, "upload_failed", e)
                raise

            manifest = PublishedManifest(
                subject_type=fields.subject_type,
                fields=fields,
                attachment_references={role: references.get(role) for role in AttachmentRole},
                created_at=self.clock(),
            )

            try:
                manifest_reference = self.uploader.upload_document(
                    manifest.to_document(), label=MANIFEST_TARGET
                )
            except Exception as e:
                logger.error(
                    "Manifest upload failed; uploaded attachments are left unreferenced",
                    extra={
                        "event": "publish.manifest.failed",
                        "orphaned_content_ids": [ref.content_id for ref in references.values()],
                        "error_type": type(e).__name__,
                    },
                )
                self._finish(stats, "manifest_failed", e)
                raise

            published = manifest.model_copy(update={"manifest_reference": manifest_reference})
            stats.manifest_content_id = manifest_reference.content_id
            self._finish(stats, "published")

            if self.draft_store is not None and draft_key:
                self._clear_draft(draft_key)

            if self.draft_store is not None and published_key:
                self._record_published(published_key, published)

            return published

    @staticmethod
    def _flatten(attachments_by_role: AttachmentsByRole) -> List[Attachment]:
        """Flatten role-keyed attachments, checking each sits under its own role."""
        attachments: List[Attachment] = []
        for key, files in attachments_by_role.items():
            role = AttachmentRole(key)
            for attachment in files or []:
                if attachment.role != role:
                    raise ValueError(
                        f"Attachment '{attachment.name}' has role {attachment.role.value} "
                        f"but was filed under {role.value}"
                    )
                attachments.append(attachment)
        return attachments

    def _upload_batches(
        self, payloads: Dict[AttachmentRole, List[FilePayload]], stats: PublishRunStats
    ) -> Dict[AttachmentRole, ContentReference]:
        """
        Upload every role's batch concurrently and join all of them.

        Each role's upload runs in its own worker with a copy of the current
        log context. All workers finish before results are inspected; if any
        failed, the first failure in canonical role order is raised.
        """
        if not payloads:
            return {}

        role_stats = {
            role: RoleUploadStats(
                role=role.value,
                file_count=len(files),
                total_bytes=sum(len(f.data) for f in files),
            )
            for role, files in payloads.items()
        }
        stats.role_stats = list(role_stats.values())

        futures: Dict[AttachmentRole, Future] = {}
        with ThreadPoolExecutor(
            max_workers=len(payloads), thread_name_prefix="publish-upload"
        ) as executor:
            for role, files in payloads.items():
                context = contextvars.copy_context()
                futures[role] = executor.submit(
                    context.run, self._upload_role, role, files, role_stats[role]
                )

        references: Dict[AttachmentRole, ContentReference] = {}
        failures = []
        for role, future in futures.items():
            error = future.exception()
            if error is None:
                references[role] = future.result()
            else:
                failures.append(error)

        if failures:
            logger.error(
                f"{len(failures)} of {len(futures)} attachment batch(es) failed to upload",
                extra={
                    "event": "publish.batches.failed",
                    "failed_roles": [s.role for s in stats.role_stats if not s.succeeded],
                    "uploaded_roles": [role.value for role in references],
                },
            )
            raise failures[0]

        return references

    def _upload_role(
        self, role: AttachmentRole, files: List[FilePayload], role_stats: RoleUploadStats
    ) -> ContentReference:
        start = time.time()
        try:
            reference = self.uploader.upload_batch(files, label=role.value)
        except Exception as e:
            role_stats.error_message = str(e)
            raise
        finally:
            role_stats.duration_seconds = time.time() - start

        role_stats.content_id = reference.content_id
        return reference

    def _clear_draft(self, draft_key: str) -> None:
        """Clear the published submission's draft; failures do not undo the publish."""
        try:
            self.draft_store.clear(draft_key)
        except DraftStoreError as e:
            logger.warning(
                f"Published, but failed to clear draft '{draft_key}': {e}",
                extra={"event": "publish.draft.clear_failed", "draft_key": draft_key},
                exc_info=True,
            )

    def _record_published(self, published_key: str, published: PublishedManifest) -> None:
        """Save the submitted fields plus the manifest reference as the last published record."""
        values = published.fields.model_dump(mode="json")
        values["manifest"] = published.manifest_reference.to_document()
        record = SubmissionDraft(
            subject_type=published.subject_type,
            values=values,
            updated_at=published.created_at,
        )
        try:
            self.draft_store.set(published_key, record)
        except DraftStoreError as e:
            logger.warning(
                f"Published, but failed to record it under '{published_key}': {e}",
                extra={"event": "publish.record.failed", "published_key": published_key},
                exc_info=True,
            )

    def _finish(
        self, stats: PublishRunStats, outcome: str, error: Optional[Exception] = None
    ) -> None:
        stats.finished_at = utc_now()
        stats.outcome = outcome
        stats.error_message = str(error) if error else None

        extra = {
            "event": "publish.run.completed" if error is None else "publish.run.failed",
            "outcome": outcome,
            "duration_ms": int(stats.duration_seconds * 1000),
            "file_count": stats.total_files,
            "roles_uploaded": [s.role for s in stats.role_stats if s.succeeded],
            "manifest_content_id": stats.manifest_content_id,
        }
        if error is None:
            logger.info("Publish completed", extra=extra)
        else:
            extra["error_type"] = type(error).__name__
            logger.error(f"Publish aborted: {error}", extra=extra)
