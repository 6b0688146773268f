"""Time and datetime utilities."""

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return an aware datetime, treating naive values as UTC.

    SQLite drops tzinfo on round trips, so values read back from the
    test database arrive naive.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_zone(name: str | None) -> tzinfo | None:
    """Resolve an IANA zone name.

    Returns:
        The zone, or None when the name is empty or unknown
    """
    if not name:
        return None
    if name.upper() in ("UTC", "Z", "ETC/UTC"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def calendar_date(dt: datetime, zone: tzinfo) -> date:
    """Calendar date of an instant as seen in ``zone``."""
    return ensure_utc(dt).astimezone(zone).date()
