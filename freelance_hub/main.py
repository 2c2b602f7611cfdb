"""Command-line entry point for the freelance hub."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from freelance_hub.config.environment import EnvironmentConfig
from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.config.loader import load_config, validate_config_file
from freelance_hub.config.models import AppConfig
from freelance_hub.domain.models import JobFields, SubjectType
from freelance_hub.drafts.exceptions import DraftStoreError
from freelance_hub.drafts.sql_store import SqlDraftStore
from freelance_hub.logging import get_logger
from freelance_hub.logging.config import configure_logging
from freelance_hub.matching.catalog import DEFAULT_CATALOG, load_catalog
from freelance_hub.matching.engine import MatchingEngine
from freelance_hub.matching.models import JobRequirements, MatchScore, ServiceCandidate
from freelance_hub.matching.utils import format_match_summary
from freelance_hub.publishing.orchestrator import PublishOrchestrator
from freelance_hub.publishing.submission import load_submission
from freelance_hub.storage.exceptions import StorageError
from freelance_hub.storage.factory import get_uploader
from freelance_hub.validation.exceptions import ValidationError

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freelance-hub",
        description="Freelance Hub - publish profiles and job postings to content-addressed storage",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./freelance_hub.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    publish_parser = subparsers.add_parser("publish", help="Validate and publish a submission file")
    publish_parser.add_argument("submission", type=Path, help="Submission YAML file")
    publish_parser.add_argument(
        "--rank",
        action="store_true",
        help="After publishing a job, print the top matching services",
    )

    match_parser = subparsers.add_parser("match", help="Rank services for a job submission file")
    match_parser.add_argument("submission", type=Path, help="Job submission YAML file")

    validate_parser = subparsers.add_parser(
        "validate-config", help="Validate a configuration file without credentials"
    )
    validate_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path("freelance_hub.yaml"),
        help="Configuration file to validate (default: freelance_hub.yaml)",
    )

    return parser


def setup_logging(
    app_config: AppConfig, env_config: EnvironmentConfig, log_level_override: Optional[str]
) -> None:
    """Configure logging; priority is CLI > environment > config file."""
    level = log_level_override or env_config.log_level or app_config.logging.level
    try:
        configure_logging(
            level=level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )
    except ValueError as e:
        raise ConfigurationError(
            str(e), suggestions=["LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"]
        ) from e


def load_candidates(app_config: AppConfig) -> Sequence[ServiceCandidate]:
    if app_config.matching.catalog_path:
        return load_catalog(app_config.matching.catalog_path)
    return DEFAULT_CATALOG


def rank_for_job(fields: JobFields, app_config: AppConfig) -> List[MatchScore]:
    requirements = JobRequirements.from_job_fields(fields)
    return MatchingEngine().rank(
        requirements, load_candidates(app_config), top_k=app_config.matching.top_k
    )


def run_publish(args: argparse.Namespace) -> int:
    app_config, env_config = load_config(args.config, require_credential=True)
    setup_logging(app_config, env_config, args.log_level)

    submission = load_submission(args.submission)
    uploader = get_uploader(app_config.storage, env_config)

    uses_drafts = bool(submission.draft_key or submission.published_key)
    draft_store = SqlDraftStore(env_config.drafts_database_url) if uses_drafts else None
    try:
        orchestrator = PublishOrchestrator(
            uploader, rules=app_config.attachments, draft_store=draft_store
        )
        manifest = orchestrator.publish(
            submission.fields,
            submission.attachments_by_role,
            draft_key=submission.draft_key,
            published_key=submission.published_key,
        )
    finally:
        if draft_store is not None:
            draft_store.close()

    print(f"Published {manifest.subject_type.value}: {manifest.manifest_reference.url}")
    print(f"Content ID: {manifest.manifest_reference.content_id}")

    if args.rank:
        if submission.subject_type is SubjectType.JOB:
            print()
            print(format_match_summary(rank_for_job(submission.fields, app_config)))
        else:
            print("Matches are only ranked for job submissions", file=sys.stderr)

    return 0


def run_match(args: argparse.Namespace) -> int:
    app_config, env_config = load_config(args.config, require_credential=False)
    setup_logging(app_config, env_config, args.log_level)

    submission = load_submission(args.submission)
    if submission.subject_type is not SubjectType.JOB:
        raise ConfigurationError(
            f"Cannot rank matches for a {submission.subject_type.value} submission",
            suggestions=["Pass a submission file with subject_type: job"],
        )

    print(format_match_summary(rank_for_job(submission.fields, app_config)))
    return 0


def run_validate_config(args: argparse.Namespace) -> int:
    return 0 if validate_config_file(args.path) else 1


COMMANDS = {
    "publish": run_publish,
    "match": run_match,
    "validate-config": run_validate_config,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the freelance hub CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        return COMMANDS[args.command](args)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e.message}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except ValidationError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        print(f"Storage Error: {e}", file=sys.stderr)
        return 1
    except DraftStoreError as e:
        print(f"Draft Store Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Attachment Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
