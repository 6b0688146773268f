"""Injectable clocks.

Policy code never samples wall time itself; the caller passes ``now``
obtained from one of these.
"""

from datetime import datetime, timedelta
from typing import Protocol

from eventcare.utils.time import ensure_utc, utc_now


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Clock backed by the system UTC time."""

    def now(self) -> datetime:
        return utc_now()


class FixedClock:
    """Clock pinned to a given instant, advanced manually."""

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant

    def __repr__(self) -> str:
        return f"<FixedClock {self._instant.isoformat()}>"
