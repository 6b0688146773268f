"""Utility functions."""

from eventcare.utils.time import (
    calendar_date,
    ensure_utc,
    resolve_zone,
    utc_now,
)

__all__ = ["utc_now", "ensure_utc", "resolve_zone", "calendar_date"]
