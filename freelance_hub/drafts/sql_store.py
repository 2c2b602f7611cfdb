"""SQLAlchemy-backed draft store."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from freelance_hub.domain.models import SubmissionDraft
from freelance_hub.logging import get_logger

from .exceptions import DraftStoreConnectionError, DraftStoreError
from .schema import DraftModel, create_schema
from .store import DraftStore

logger = get_logger(__name__, component="drafts")


class SqlDraftStore(DraftStore):
    """Draft store persisted in a relational database (SQLite by default).

    Each instance owns its engine and session factory; call close() when done.
    Writes are last-write-wins upserts keyed by draft key.
    """

    def __init__(self, database_url: str):
        """Open the database and create the drafts table if needed.

        Args:
            database_url: SQLAlchemy URL, e.g. "sqlite:///./data/drafts.db"

        Raises:
            DraftStoreConnectionError: If the database cannot be opened
        """
        if not database_url or not isinstance(database_url, str):
            raise DraftStoreConnectionError("Database URL must be a non-empty string")

        self.database_url = database_url

        try:
            in_memory = database_url.startswith("sqlite") and database_url.endswith(":memory:")
            if database_url.startswith("sqlite:///") and not in_memory:
                Path(database_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)

            engine_kwargs = {"pool_pre_ping": True}
            if database_url.startswith("sqlite"):
                engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
            if in_memory:
                # One shared connection, otherwise every connection sees its own empty database
                engine_kwargs["poolclass"] = StaticPool

            self._engine = create_engine(database_url, **engine_kwargs)
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            create_schema(self._engine)
        except (SQLAlchemyError, OSError) as e:
            raise DraftStoreConnectionError(f"Failed to open draft store: {e}") from e

        logger.info(
            "Draft store opened",
            extra={"event": "drafts.store.opened", "database_url": _redact_url(database_url)},
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, key: str) -> Optional[SubmissionDraft]:
        try:
            with self.session() as session:
                row = session.get(DraftModel, key)
                return row.to_domain() if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error reading draft {key}: {e}", exc_info=True)
            raise DraftStoreError(f"Failed to read draft: {e}") from e

    def set(self, key: str, draft: SubmissionDraft) -> None:
        try:
            with self.session() as session:
                row = session.get(DraftModel, key)
                if row is None:
                    session.add(DraftModel.from_domain(key, draft))
                else:
                    row.apply(draft)
        except SQLAlchemyError as e:
            logger.error(f"Error saving draft {key}: {e}", exc_info=True)
            raise DraftStoreError(f"Failed to save draft: {e}") from e

        logger.debug("Draft saved", extra={"event": "drafts.saved", "draft_key": key})

    def clear(self, key: str) -> None:
        try:
            with self.session() as session:
                row = session.get(DraftModel, key)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            logger.error(f"Error clearing draft {key}: {e}", exc_info=True)
            raise DraftStoreError(f"Failed to clear draft: {e}") from e

        logger.debug("Draft cleared", extra={"event": "drafts.cleared", "draft_key": key})

    def close(self) -> None:
        """Dispose of the engine's connections."""
        self._engine.dispose()


def _redact_url(url: str) -> str:
    """Hide the password of a database URL for logging."""
    if url.startswith("sqlite") or "@" not in url:
        return url
    credentials, host = url.rsplit("@", 1)
    if ":" in credentials.split("//", 1)[-1]:
        prefix = credentials.rsplit(":", 1)[0]
        return f"{prefix}:***@{host}"
    return url
