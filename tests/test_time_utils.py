"""Tests for time helpers."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter

from eventcare.schemas.common import UTCDateTime
from eventcare.utils.time import calendar_date, ensure_utc, resolve_zone


def test_ensure_utc_only_touches_naive_values() -> None:
    naive = datetime(2024, 7, 4, 12, 0)
    aware = datetime(2024, 7, 4, 12, 0, tzinfo=ZoneInfo("Europe/Paris"))

    assert ensure_utc(naive).tzinfo is timezone.utc
    assert ensure_utc(aware) is aware


def test_resolve_zone() -> None:
    assert resolve_zone("UTC") is timezone.utc
    assert resolve_zone("America/Denver") == ZoneInfo("America/Denver")
    assert resolve_zone("Nowhere/Special") is None
    assert resolve_zone(None) is None


def test_calendar_date_in_zone() -> None:
    instant = datetime(2024, 7, 4, 2, 0, tzinfo=timezone.utc)

    assert calendar_date(instant, timezone.utc) == date(2024, 7, 4)
    assert calendar_date(instant, ZoneInfo("America/Chicago")) == date(2024, 7, 3)


def test_schema_datetimes_are_normalized_to_utc() -> None:
    adapter = TypeAdapter(UTCDateTime)

    value = adapter.validate_python("2024-07-04T10:00:00-04:00")

    assert value == datetime(2024, 7, 4, 14, 0, tzinfo=timezone.utc)
    assert value.utcoffset().total_seconds() == 0
