"""Event management and event-level visibility."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.event import Event, StaffAssignment
from eventcare.models.patient import Assessment, Patient, Treatment, Vital
from eventcare.models.user import User
from eventcare.models.venue import Venue
from eventcare.schemas.event import EventCreate, EventUpdate
from eventcare.services.access import AccessService
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import InvalidInputError, NotFoundError
from eventcare.utils.time import ensure_utc

logger = logging.getLogger(__name__)


class EventService:
    """Event CRUD. Reads respect assignment; writes are admin-only."""

    def __init__(
        self,
        session: AsyncSession,
        access: AccessService,
        audit: AuditRecorder,
    ) -> None:
        self.session = session
        self.access = access
        self.audit = audit

    async def list_events(self, user: User) -> list[Event]:
        """Events visible to ``user``, most recent first.

        Admins see all events; everyone else sees events they are assigned to.
        """
        query = select(Event).order_by(Event.start_date.desc())
        if not user.is_admin:
            query = query.join(StaffAssignment, StaffAssignment.event_id == Event.id).where(
                StaffAssignment.user_id == user.id
            )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_event(self, user: User, event_id: str) -> Event:
        return await self.access.require_event_visible(user, event_id)

    async def get_event_summary(self, user: User, event_id: str) -> dict:
        """Event plus venue, staff and counts.

        Returns:
            Mapping suitable for ``EventDetail.model_validate``
        """
        event = await self.access.require_event_visible(user, event_id)

        venue = None
        if event.venue_id:
            result = await self.session.execute(select(Venue).where(Venue.id == event.venue_id))
            venue = result.scalar_one_or_none()

        staff_rows = await self.session.execute(
            select(StaffAssignment, User)
            .join(User, User.id == StaffAssignment.user_id)
            .where(StaffAssignment.event_id == event.id)
            .order_by(User.name)
        )
        staff = [
            {
                "id": assignment.id,
                "event_id": assignment.event_id,
                "user_id": assignment.user_id,
                "role": assignment.role,
                "created_at": assignment.created_at,
                "user": member,
            }
            for assignment, member in staff_rows.all()
        ]

        patient_count = await self.session.scalar(
            select(func.count()).select_from(Patient).where(Patient.event_id == event.id)
        )

        return {
            "id": event.id,
            "name": event.name,
            "venue_id": event.venue_id,
            "start_date": event.start_date,
            "end_date": event.end_date,
            "state": event.state,
            "timezone": event.timezone,
            "notes": event.notes,
            "created_at": event.created_at,
            "venue": venue,
            "staff": staff,
            "staff_count": len(staff),
            "patient_count": patient_count or 0,
            "can_edit": user.is_admin,
        }

    async def _check_venue(self, venue_id: str | None) -> None:
        if venue_id is None:
            return
        result = await self.session.execute(select(Venue.id).where(Venue.id == venue_id))
        if result.first() is None:
            raise NotFoundError(f"Venue {venue_id} not found")

    async def create_event(self, actor: User, data: EventCreate) -> Event:
        await self._check_venue(data.venue_id)

        event = Event(**data.model_dump(), created_by=actor.id)
        self.session.add(event)
        await self.session.commit()
        await self.session.refresh(event)

        logger.info(f"Created event {event.id} ({event.name})")
        await self.audit.log(
            actor.id,
            AuditAction.CREATE,
            AuditResource.EVENT,
            event.id,
            {"name": event.name},
        )
        return event

    async def update_event(self, actor: User, event_id: str, data: EventUpdate) -> Event:
        event = await self.access.require_event_visible(actor, event_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("name", "start_date", "end_date", "state", "timezone"):
            if changes.get(required, "") is None:
                del changes[required]
        if "venue_id" in changes:
            await self._check_venue(changes["venue_id"])

        start = ensure_utc(changes.get("start_date", event.start_date))
        end = ensure_utc(changes.get("end_date", event.end_date))
        if end < start:
            raise InvalidInputError("end_date must be on or after start_date")

        for field, value in changes.items():
            setattr(event, field, value)

        await self.session.commit()
        await self.session.refresh(event)

        await self.audit.log(
            actor.id,
            AuditAction.UPDATE,
            AuditResource.EVENT,
            event.id,
            {"fields": sorted(changes)},
        )
        return event

    async def delete_event(self, actor: User, event_id: str) -> None:
        """Delete an event with its assignments, patients and care records."""
        event = await self.access.require_event_visible(actor, event_id)

        patient_ids = select(Patient.id).where(Patient.event_id == event.id)
        assessment_ids = select(Assessment.id).where(Assessment.patient_id.in_(patient_ids))

        await self.session.execute(delete(Vital).where(Vital.assessment_id.in_(assessment_ids)))
        await self.session.execute(
            delete(Treatment).where(Treatment.assessment_id.in_(assessment_ids))
        )
        await self.session.execute(delete(Assessment).where(Assessment.patient_id.in_(patient_ids)))
        await self.session.execute(delete(Patient).where(Patient.event_id == event.id))
        await self.session.execute(
            delete(StaffAssignment).where(StaffAssignment.event_id == event.id)
        )
        await self.session.delete(event)
        await self.session.commit()

        logger.warning(f"Deleted event {event_id} and its patient records")
        await self.audit.log(actor.id, AuditAction.DELETE, AuditResource.EVENT, event_id)
