"""Database-backed access resolution.

Loads the event, patient and staff assignment for a request, then defers
to the pure policy in ``eventcare.policy.access``. Every denial raises the
same ForbiddenError so callers cannot tell a missing assignment, an expired
window and a nonexistent record apart. Admins, who may see everything, get
NotFoundError for missing records.
"""

import logging
from datetime import timedelta
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.config import settings
from eventcare.models.event import Event, StaffAssignment
from eventcare.models.patient import Patient
from eventcare.models.user import User
from eventcare.policy.access import (
    AccessController,
    AccessDecision,
    Actor,
    EventRef,
    PatientRef,
    can_view_event,
)
from eventcare.policy.clock import Clock
from eventcare.services.exceptions import ForbiddenError, NotFoundError
from eventcare.utils.time import resolve_zone

logger = logging.getLogger(__name__)


@lru_cache
def get_access_controller() -> AccessController:
    """Access controller configured from settings."""
    default_zone = resolve_zone(settings.same_day_timezone)
    if default_zone is None:
        raise ValueError(f"Unknown SAME_DAY_TIMEZONE: {settings.same_day_timezone}")
    return AccessController(
        window=timedelta(hours=settings.access_window_hours),
        default_zone=default_zone,
        use_event_timezone=settings.same_day_use_event_timezone,
    )


def actor_for(user: User) -> Actor:
    return Actor(id=user.id, role=user.user_role)


def event_ref(event: Event) -> EventRef:
    return EventRef(id=event.id, start_date=event.start_date, timezone=event.timezone)


def patient_ref(patient: Patient) -> PatientRef:
    return PatientRef(id=patient.id, event_id=patient.event_id, created_at=patient.created_at)


class AssignmentLookup:
    """Answers whether a staff assignment exists."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def has_assignment(self, user_id: str, event_id: str) -> bool:
        result = await self.session.execute(
            select(StaffAssignment.id)
            .where(StaffAssignment.user_id == user_id)
            .where(StaffAssignment.event_id == event_id)
            .limit(1)
        )
        return result.first() is not None


class AccessService:
    """Resolves event and patient access for the current request."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock,
        controller: AccessController | None = None,
    ) -> None:
        self.session = session
        self.clock = clock
        self.controller = controller or get_access_controller()
        self.assignments = AssignmentLookup(session)

    async def get_event(self, event_id: str) -> Event | None:
        result = await self.session.execute(select(Event).where(Event.id == event_id))
        return result.scalar_one_or_none()

    async def get_patient(self, patient_id: str) -> Patient | None:
        result = await self.session.execute(select(Patient).where(Patient.id == patient_id))
        return result.scalar_one_or_none()

    async def require_event_visible(self, user: User, event_id: str) -> Event:
        """Return the event if the user may see it.

        Raises:
            NotFoundError: Admin asked for a missing event
            ForbiddenError: Non-admin without an assignment, or missing event
        """
        actor = actor_for(user)
        event = await self.get_event(event_id)

        if actor.role.is_admin:
            if event is None:
                raise NotFoundError(f"Event {event_id} not found")
            return event

        has_assignment = event is not None and await self.assignments.has_assignment(
            user.id, event_id
        )
        if not can_view_event(actor, has_assignment):
            self._log_denied(user, "event", event_id)
            raise ForbiddenError()
        return event

    async def resolve(self, user: User, event: Event, patient: Patient) -> AccessDecision:
        """Evaluate the patient access policy at the current instant."""
        actor = actor_for(user)
        has_assignment = actor.role.is_admin or await self.assignments.has_assignment(
            user.id, event.id
        )
        return self.controller.resolve(
            actor,
            event_ref(event),
            patient_ref(patient),
            self.clock.now(),
            has_assignment,
        )

    async def require_patient_access(
        self, user: User, event_id: str, patient_id: str
    ) -> tuple[Event, Patient]:
        """Return (event, patient) if the user may read and write the record.

        The patient must belong to ``event_id``.

        Raises:
            NotFoundError: Admin asked for a missing or mismatched record
            ForbiddenError: Any denial for a non-admin
        """
        event = await self.get_event(event_id)
        patient = await self.get_patient(patient_id)

        if event is None or patient is None or patient.event_id != event.id:
            if user.is_admin:
                raise NotFoundError(f"Patient {patient_id} not found in event {event_id}")
            self._log_denied(user, "patient", patient_id)
            raise ForbiddenError()

        decision = await self.resolve(user, event, patient)
        if not decision.can_read:
            self._log_denied(user, "patient", patient_id)
            raise ForbiddenError()
        return event, patient

    async def require_patient_access_by_id(
        self, user: User, patient_id: str
    ) -> tuple[Event, Patient]:
        """Same as require_patient_access, resolving the event from the patient."""
        patient = await self.get_patient(patient_id)
        if patient is None:
            if user.is_admin:
                raise NotFoundError(f"Patient {patient_id} not found")
            self._log_denied(user, "patient", patient_id)
            raise ForbiddenError()
        return await self.require_patient_access(user, patient.event_id, patient_id)

    def _log_denied(self, user: User, kind: str, record_id: str) -> None:
        logger.info(
            f"Access denied: user={user.id} role={user.role} {kind}={record_id}",
            extra={"user_id": user.id, "action": "access_denied", f"{kind}_id": record_id},
        )
