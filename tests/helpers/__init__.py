"""Test helper utilities for Freelance Hub tests."""

from .recording_uploader import GATEWAY, RecordingUploader, fake_cid

__all__ = ["RecordingUploader", "fake_cid", "GATEWAY"]
