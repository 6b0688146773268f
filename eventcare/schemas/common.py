"""Shared schema types."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator

from eventcare.utils.time import ensure_utc


def _to_utc(value: datetime) -> datetime:
    return ensure_utc(value).astimezone(timezone.utc)


# Datetime normalized to UTC; naive input is taken as UTC
UTCDateTime = Annotated[datetime, AfterValidator(_to_utc)]
