"""Event staff assignment endpoints."""

from fastapi import APIRouter, Depends, Response, status

from eventcare.api.deps import Access, Audit, CurrentUser, DbSession, require_permissions
from eventcare.api.errors import service_errors
from eventcare.models.event import StaffAssignment
from eventcare.models.user import User
from eventcare.schemas.event import StaffAssignmentCreate, StaffAssignmentRead, StaffMember
from eventcare.services.rbac import Permission
from eventcare.services.staff import StaffService

router = APIRouter()

manage_staff = Depends(require_permissions(Permission.STAFF_MANAGE))


def _to_read(assignment: StaffAssignment, member: User) -> StaffAssignmentRead:
    return StaffAssignmentRead(
        id=assignment.id,
        event_id=assignment.event_id,
        user_id=assignment.user_id,
        role=assignment.role,
        created_at=assignment.created_at,
        user=StaffMember.model_validate(member),
    )


@router.get("/{event_id}/staff", response_model=list[StaffAssignmentRead])
async def list_staff(
    event_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> list[StaffAssignmentRead]:
    with service_errors():
        rows = await StaffService(session, access, audit).list_staff(user, event_id)
    return [_to_read(assignment, member) for assignment, member in rows]


@router.post(
    "/{event_id}/staff",
    response_model=StaffAssignmentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[manage_staff],
)
async def assign_staff(
    event_id: str,
    data: StaffAssignmentCreate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> StaffAssignmentRead:
    """Assign a staff member to the event. Returns 409 if already assigned."""
    with service_errors():
        assignment, member = await StaffService(session, access, audit).assign(
            user, event_id, data
        )
    return _to_read(assignment, member)


@router.delete(
    "/{event_id}/staff/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[manage_staff],
)
async def remove_staff(
    event_id: str,
    assignment_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> Response:
    with service_errors():
        await StaffService(session, access, audit).unassign(user, event_id, assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
