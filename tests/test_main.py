"""Unit tests for the command-line entry point."""

import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from freelance_hub.domain.models import SubmissionDraft
from freelance_hub.drafts import SqlDraftStore
from freelance_hub.main import main
from tests.helpers import GATEWAY, RecordingUploader

JOB_SUBMISSION = """
subject_type: job
fields:
  title: Senior Solidity Engineer
  description: >-
    We are looking for an experienced smart contract engineer to design, implement
    and audit a set of upgradeable Solidity contracts for our lending protocol.
  category: Blockchain
  experience: Senior
  skills: [Solidity, Hardhat]
  budget_min: "50"
  budget_max: "100"
  duration_type: weeks
  duration_value: "6"
  location_pref: Remote
  deadline: "2024-06-30"
attachments:
  jobAttachment:
    - brief.pdf
"""


@pytest.fixture(autouse=True)
def isolated_run(tmp_path, monkeypatch):
    """Run each command from an empty directory with a clean environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WEB3_STORAGE_TOKEN", "test-token")
    monkeypatch.setenv("DRAFTS_DATABASE_URL", f"sqlite:///{tmp_path / 'drafts.db'}")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    with patch("freelance_hub.main.load_dotenv"):
        yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def job_file(tmp_path):
    (tmp_path / "brief.pdf").write_bytes(b"%PDF-1.4 brief")
    path = tmp_path / "job.yaml"
    path.write_text(JOB_SUBMISSION)
    return path


@pytest.fixture
def uploader():
    recording = RecordingUploader()
    with patch("freelance_hub.main.get_uploader", return_value=recording):
        yield recording


class TestPublishCommand:
    """Tests for `freelance-hub publish`."""

    def test_publish_prints_manifest_url(self, job_file, uploader, capsys):
        exit_code = main(["publish", str(job_file)])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert f"Published job: {GATEWAY}/" in out
        assert uploader.batch_count == 1
        assert uploader.batches[0][0] == "jobAttachment"
        assert uploader.document_count == 1

    def test_publish_with_rank(self, job_file, uploader, capsys):
        exit_code = main(["publish", str(job_file), "--rank"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Top Matches" in out
        assert "1. Solidity Engineer - 100% match" in out

    def test_publish_clears_draft(self, job_file, uploader, isolated_run):
        job_file.write_text(JOB_SUBMISSION + "draft_key: post_job_draft\n")
        store = SqlDraftStore(f"sqlite:///{isolated_run / 'drafts.db'}")
        store.set(
            "post_job_draft",
            SubmissionDraft(
                subject_type="job",
                values={"title": "Senior Solidity Engineer"},
                updated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
            ),
        )

        assert main(["publish", str(job_file)]) == 0

        assert store.get("post_job_draft") is None
        store.close()

    def test_publish_records_published_submission(self, job_file, uploader, isolated_run):
        job_file.write_text(JOB_SUBMISSION + "published_key: job_published\n")

        assert main(["publish", str(job_file)]) == 0

        store = SqlDraftStore(f"sqlite:///{isolated_run / 'drafts.db'}")
        record = store.get("job_published")
        store.close()
        assert record is not None
        assert record.values["title"] == "Senior Solidity Engineer"
        assert record.values["manifest"]["url"].startswith(f"{GATEWAY}/")

    def test_missing_token_exits_with_error(self, job_file, monkeypatch, capsys):
        monkeypatch.delenv("WEB3_STORAGE_TOKEN")

        exit_code = main(["publish", str(job_file)])

        assert exit_code == 1
        assert "WEB3_STORAGE_TOKEN" in capsys.readouterr().err

    def test_oversized_attachment_exits_with_error(self, job_file, uploader, tmp_path, capsys):
        (tmp_path / "freelance_hub.yaml").write_text(
            "attachments:\n  jobAttachment:\n    max_bytes_per_file: 4\n    max_files_per_role: 1\n"
        )

        exit_code = main(["publish", str(job_file)])

        assert exit_code == 1
        assert "Validation Error" in capsys.readouterr().err
        assert uploader.batch_count == 0

    def test_storage_failure_exits_with_error(self, job_file, capsys):
        failing = RecordingUploader(fail_targets=["manifest"])
        with patch("freelance_hub.main.get_uploader", return_value=failing):
            exit_code = main(["publish", str(job_file)])

        assert exit_code == 1
        assert "Storage Error" in capsys.readouterr().err

    def test_missing_attachment_file(self, job_file, uploader, tmp_path, capsys):
        (tmp_path / "brief.pdf").unlink()

        exit_code = main(["publish", str(job_file)])

        assert exit_code == 1
        assert "brief.pdf" in capsys.readouterr().err
        assert uploader.batch_count == 0


class TestMatchCommand:
    """Tests for `freelance-hub match`."""

    def test_match_does_not_need_token(self, job_file, monkeypatch, capsys):
        monkeypatch.delenv("WEB3_STORAGE_TOKEN")

        exit_code = main(["match", str(job_file)])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("Top Matches")
        assert out.count("% match") == 3

    def test_match_honors_top_k(self, job_file, tmp_path, capsys):
        (tmp_path / "freelance_hub.yaml").write_text("matching:\n  top_k: 1\n")

        assert main(["match", str(job_file)]) == 0
        assert capsys.readouterr().out.count("% match") == 1

    def test_match_rejects_profiles(self, tmp_path, capsys):
        path = tmp_path / "profile.yaml"
        path.write_text(
            """
subject_type: profile
fields:
  display_name: Ada Builder
  email: ada@example.com
  phone: "+15550100"
  country_code: US
  bio: Full-stack web3 developer focused on DeFi front ends and contract tooling.
  primary_occupation: Web3 Developer
  years_experience: "7"
  hourly_rate: "85"
  skills: [React, Solidity, Wagmi]
  languages: [English]
"""
        )

        assert main(["match", str(path)]) == 1
        assert "profile submission" in capsys.readouterr().err


class TestValidateConfigCommand:
    """Tests for `freelance-hub validate-config`."""

    def test_valid_config(self, tmp_path, capsys):
        path = tmp_path / "freelance_hub.yaml"
        path.write_text("matching:\n  top_k: 2\n")

        assert main(["validate-config", str(path)]) == 0

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "freelance_hub.yaml"
        path.write_text("storage:\n  provider: s3\n")

        assert main(["validate-config", str(path)]) == 1


def test_command_is_required(capsys):
    with pytest.raises(SystemExit):
        main([])
