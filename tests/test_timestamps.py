"""Tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from freelance_hub.utils.timestamps import (
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)


def test_utc_now_is_aware():
    assert utc_now().tzinfo == timezone.utc


def test_ensure_utc_converts_offsets():
    dt = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(dt) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert ensure_utc(None) is None


def test_format_timestamp():
    dt = datetime(2024, 5, 1, 12, 0, 0, 42, tzinfo=timezone.utc)

    assert format_timestamp(dt) == "2024-05-01T12:00:00Z"
    assert format_timestamp(dt, include_microseconds=True) == "2024-05-01T12:00:00.000042Z"


def test_parse_iso_datetime_round_trip():
    dt = datetime(2024, 5, 1, 12, 0, 0, 42, tzinfo=timezone.utc)

    assert parse_iso_datetime(format_timestamp(dt, include_microseconds=True)) == dt


def test_parse_iso_datetime_invalid():
    assert parse_iso_datetime("not a date") is None
    assert parse_iso_datetime("") is None
    assert parse_iso_datetime("2024-05-01") == datetime(2024, 5, 1, tzinfo=timezone.utc)
