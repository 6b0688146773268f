"""Staff assignments to events."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.event import StaffAssignment
from eventcare.models.user import User
from eventcare.schemas.event import StaffAssignmentCreate
from eventcare.services.access import AccessService
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class StaffService:
    """List, assign and unassign event staff.

    Assignments are what grant an EMT visibility into an event, so only
    admins may change them.
    """

    def __init__(
        self,
        session: AsyncSession,
        access: AccessService,
        audit: AuditRecorder,
    ) -> None:
        self.session = session
        self.access = access
        self.audit = audit

    async def list_staff(self, user: User, event_id: str) -> list[tuple[StaffAssignment, User]]:
        event = await self.access.require_event_visible(user, event_id)
        result = await self.session.execute(
            select(StaffAssignment, User)
            .join(User, User.id == StaffAssignment.user_id)
            .where(StaffAssignment.event_id == event.id)
            .order_by(User.name)
        )
        return [(assignment, member) for assignment, member in result.all()]

    async def assign(
        self, actor: User, event_id: str, data: StaffAssignmentCreate
    ) -> tuple[StaffAssignment, User]:
        """Assign a staff member to an event.

        Raises:
            NotFoundError: If the event or user does not exist
            ConflictError: If the user is already assigned
        """
        event = await self.access.require_event_visible(actor, event_id)

        result = await self.session.execute(select(User).where(User.id == data.user_id))
        member = result.scalar_one_or_none()
        if member is None:
            raise NotFoundError(f"User {data.user_id} not found")

        existing = await self.session.execute(
            select(StaffAssignment.id)
            .where(StaffAssignment.event_id == event.id)
            .where(StaffAssignment.user_id == member.id)
        )
        if existing.first() is not None:
            raise ConflictError("User is already assigned to this event")

        assignment = StaffAssignment(event_id=event.id, user_id=member.id, role=data.role)
        self.session.add(assignment)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # Concurrent assignment of the same user
            await self.session.rollback()
            raise ConflictError("User is already assigned to this event") from exc
        await self.session.refresh(assignment)

        logger.info(f"Assigned user {member.id} to event {event.id} as {data.role}")
        await self.audit.log(
            actor.id,
            AuditAction.CREATE,
            AuditResource.EVENT,
            event.id,
            {"staff_assignment_id": assignment.id, "user_id": member.id, "role": data.role},
        )
        return assignment, member

    async def unassign(self, actor: User, event_id: str, assignment_id: str) -> None:
        event = await self.access.require_event_visible(actor, event_id)

        result = await self.session.execute(
            select(StaffAssignment)
            .where(StaffAssignment.id == assignment_id)
            .where(StaffAssignment.event_id == event.id)
        )
        assignment = result.scalar_one_or_none()
        if assignment is None:
            raise NotFoundError(f"Staff assignment {assignment_id} not found")

        user_id = assignment.user_id
        await self.session.delete(assignment)
        await self.session.commit()

        logger.info(f"Removed user {user_id} from event {event.id}")
        await self.audit.log(
            actor.id,
            AuditAction.DELETE,
            AuditResource.EVENT,
            event.id,
            {"staff_assignment_id": assignment_id, "user_id": user_id},
        )
