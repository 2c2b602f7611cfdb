"""Unit tests for draft stores."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from freelance_hub.domain.models import SubjectType, SubmissionDraft
from freelance_hub.drafts import (
    DraftStoreConnectionError,
    DraftStoreError,
    InMemoryDraftStore,
    SqlDraftStore,
)
from freelance_hub.drafts.schema import DraftModel


def make_draft(title="Solidity audit", minute=0):
    return SubmissionDraft(
        subject_type=SubjectType.JOB,
        values={"title": title, "skills": ["Solidity"], "budget_min": "50"},
        updated_at=datetime(2024, 5, 1, 12, minute, 0, 123456, tzinfo=timezone.utc),
    )


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each contract test runs against both store implementations."""
    if request.param == "memory":
        yield InMemoryDraftStore()
    else:
        sql_store = SqlDraftStore("sqlite:///:memory:")
        yield sql_store
        sql_store.close()


class TestDraftStoreContract:
    """Behavior shared by every draft store."""

    def test_get_unknown_key_returns_none(self, store):
        assert store.get("post_job_draft") is None

    def test_set_then_get(self, store):
        draft = make_draft()

        store.set("post_job_draft", draft)

        assert store.get("post_job_draft") == draft

    def test_last_write_wins(self, store):
        store.set("post_job_draft", make_draft("first", minute=1))
        store.set("post_job_draft", make_draft("second", minute=2))

        assert store.get("post_job_draft").values["title"] == "second"

    def test_clear_removes_draft(self, store):
        store.set("profile_draft", make_draft())

        store.clear("profile_draft")

        assert store.get("profile_draft") is None

    def test_clear_unknown_key_is_noop(self, store):
        store.clear("missing")

    def test_keys_are_independent(self, store):
        store.set("a", make_draft("A"))
        store.set("b", make_draft("B"))
        store.clear("a")

        assert store.get("b").values["title"] == "B"


class TestInMemoryDraftStore:
    def test_returned_drafts_are_copies(self):
        store = InMemoryDraftStore()
        store.set("k", make_draft())

        store.get("k").values["title"] = "changed"

        assert store.get("k").values["title"] == "Solidity audit"
        assert len(store) == 1


class TestSqlDraftStore:
    """SQLAlchemy-backed store specifics."""

    def test_persists_across_instances(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'nested' / 'drafts.db'}"

        first = SqlDraftStore(url)
        first.set("post_job_draft", make_draft())
        first.close()

        second = SqlDraftStore(url)
        try:
            draft = second.get("post_job_draft")
        finally:
            second.close()

        assert draft.values["skills"] == ["Solidity"]
        assert draft.updated_at == datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert (tmp_path / "nested" / "drafts.db").exists()

    def test_row_layout(self):
        store = SqlDraftStore("sqlite:///:memory:")
        store.set("post_job_draft", make_draft())

        with store.session() as session:
            row = session.get(DraftModel, "post_job_draft")
            assert row.subject_type == "job"
            assert row.updated_at == "2024-05-01T12:00:00.123456Z"
            assert '"title": "Solidity audit"' in row.values_json

        store.close()

    def test_session_rolls_back_on_error(self):
        store = SqlDraftStore("sqlite:///:memory:")

        with pytest.raises(RuntimeError):
            with store.session() as session:
                session.add(DraftModel.from_domain("k", make_draft()))
                session.flush()
                raise RuntimeError("abort")

        assert store.get("k") is None
        store.close()

    def test_empty_url_rejected(self):
        with pytest.raises(DraftStoreConnectionError):
            SqlDraftStore("")

    def test_unopenable_database_rejected(self):
        with pytest.raises(DraftStoreConnectionError):
            SqlDraftStore("notadialect://nowhere")

    def test_database_errors_wrapped(self):
        store = SqlDraftStore("sqlite:///:memory:")

        with patch.object(
            store, "_session_factory", side_effect=OperationalError("SELECT", {}, Exception("locked"))
        ):
            with pytest.raises(DraftStoreError, match="Failed to read draft"):
                store.get("k")

        store.close()
