"""Patient record access policy.

Decides whether a staff member may read or write a patient's record at a
given instant. ADMIN always has access. An EMT needs a staff assignment to
the patient's event, and then sees a patient if either:

- the patient was created within the rolling window (24h by default), or
- the patient was created on the same calendar day the event started.

Everything here is pure: the caller supplies ``now`` and the result of the
assignment lookup, and every input combination yields a decision.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo

from eventcare.policy.roles import Role
from eventcare.utils.time import calendar_date, ensure_utc, resolve_zone

DEFAULT_ACCESS_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class Actor:
    """The authenticated staff member asking for access."""

    id: str
    role: Role


@dataclass(frozen=True)
class EventRef:
    """The parts of an event the access rules depend on."""

    id: str
    start_date: datetime
    timezone: str | None = None


@dataclass(frozen=True)
class PatientRef:
    """The parts of a patient the access rules depend on."""

    id: str
    event_id: str
    created_at: datetime


@dataclass(frozen=True)
class AccessDecision:
    """Read/write permission for one patient record.

    There is no read-only tier: both flags always agree.
    """

    can_read: bool
    can_write: bool

    @classmethod
    def granted(cls) -> "AccessDecision":
        return cls(can_read=True, can_write=True)

    @classmethod
    def denied(cls) -> "AccessDecision":
        return cls(can_read=False, can_write=False)

    def __bool__(self) -> bool:
        return self.can_read


def can_view_event(actor: Actor, has_assignment: bool) -> bool:
    """Check event-level visibility (event detail, staff and patient lists)."""
    return actor.role is Role.ADMIN or has_assignment


def within_rolling_window(
    created_at: datetime,
    now: datetime,
    window: timedelta = DEFAULT_ACCESS_WINDOW,
) -> bool:
    """Check if a record was created no earlier than ``now - window``.

    The boundary instant itself is inside the window.
    """
    return ensure_utc(created_at) >= ensure_utc(now) - window


def same_calendar_day(a: datetime, b: datetime, zone: tzinfo = timezone.utc) -> bool:
    """Check if two instants fall on the same calendar date in ``zone``."""
    return calendar_date(a, zone) == calendar_date(b, zone)


def resolve_access(
    actor: Actor,
    event: EventRef,
    patient: PatientRef,
    now: datetime,
    has_assignment: bool,
    window: timedelta = DEFAULT_ACCESS_WINDOW,
    day_zone: tzinfo = timezone.utc,
) -> AccessDecision:
    """Resolve read/write access to a patient record.

    The caller must already have checked that ``patient`` belongs to
    ``event``; a mismatch is a NotFound, not a policy decision.

    Args:
        actor: Staff member requesting access
        event: Event owning the patient
        patient: Patient whose record is requested
        now: Current instant from the injected clock
        has_assignment: Result of the staff assignment lookup
        window: Rolling window length
        day_zone: Zone in which the same-day rule compares dates

    Returns:
        AccessDecision with equal read and write flags

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 7, 4, 12, tzinfo=timezone.utc)
        >>> admin = Actor(id="a", role=Role.ADMIN)
        >>> event = EventRef(id="e", start_date=t)
        >>> patient = PatientRef(id="p", event_id="e", created_at=t)
        >>> resolve_access(admin, event, patient, t, has_assignment=False).can_write
        True
    """
    if actor.role is Role.ADMIN:
        return AccessDecision.granted()

    if not has_assignment:
        return AccessDecision.denied()

    if within_rolling_window(patient.created_at, now, window):
        return AccessDecision.granted()

    if same_calendar_day(patient.created_at, event.start_date, day_zone):
        return AccessDecision.granted()

    return AccessDecision.denied()


def patient_window_start(now: datetime, window: timedelta = DEFAULT_ACCESS_WINDOW) -> datetime:
    """Earliest ``created_at`` admitted by the rolling window."""
    return ensure_utc(now) - window


def event_day_bounds(
    start_date: datetime, zone: tzinfo = timezone.utc
) -> tuple[datetime, datetime]:
    """UTC half-open interval ``[start, end)`` covering the event's start day.

    Used to express the same-day rule as a query filter.
    """
    day: date = calendar_date(start_date, zone)
    local_start = datetime(day.year, day.month, day.day, tzinfo=zone)
    start = local_start.astimezone(timezone.utc)
    next_day = day + timedelta(days=1)
    end = datetime(next_day.year, next_day.month, next_day.day, tzinfo=zone).astimezone(
        timezone.utc
    )
    return start, end


class AccessController:
    """Access policy bound to a window length and a date-comparison zone.

    Args:
        window: Rolling window length
        default_zone: Zone for the same-day rule
        use_event_timezone: Compare dates in the event's own zone when it
            names a known zone, falling back to ``default_zone``
    """

    def __init__(
        self,
        window: timedelta = DEFAULT_ACCESS_WINDOW,
        default_zone: tzinfo = timezone.utc,
        use_event_timezone: bool = False,
    ) -> None:
        self.window = window
        self.default_zone = default_zone
        self.use_event_timezone = use_event_timezone

    def zone_for(self, event: EventRef) -> tzinfo:
        """Zone in which the same-day rule is evaluated for ``event``."""
        if self.use_event_timezone:
            zone = resolve_zone(event.timezone)
            if zone is not None:
                return zone
        return self.default_zone

    def resolve(
        self,
        actor: Actor,
        event: EventRef,
        patient: PatientRef,
        now: datetime,
        has_assignment: bool,
    ) -> AccessDecision:
        return resolve_access(
            actor,
            event,
            patient,
            now,
            has_assignment,
            window=self.window,
            day_zone=self.zone_for(event),
        )

    def window_start(self, now: datetime) -> datetime:
        return patient_window_start(now, self.window)

    def event_day(self, event: EventRef) -> tuple[datetime, datetime]:
        return event_day_bounds(event.start_date, self.zone_for(event))
