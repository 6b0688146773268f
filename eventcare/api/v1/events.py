"""Event endpoints."""

from fastapi import APIRouter, Depends, Response, status

from eventcare.api.deps import Access, Audit, CurrentUser, DbSession, require_permissions
from eventcare.api.errors import service_errors
from eventcare.schemas.event import EventCreate, EventDetail, EventRead, EventUpdate
from eventcare.services.events import EventService
from eventcare.services.rbac import Permission

router = APIRouter()

manage_events = Depends(require_permissions(Permission.EVENTS_MANAGE))


@router.get(
    "",
    response_model=list[EventRead],
    summary="List events",
    description="Admins see every event; other staff see events they are assigned to",
)
async def list_events(
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> list[EventRead]:
    events = await EventService(session, access, audit).list_events(user)
    return [EventRead.model_validate(e) for e in events]


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[manage_events],
)
async def create_event(
    data: EventCreate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> EventRead:
    with service_errors():
        event = await EventService(session, access, audit).create_event(user, data)
    return EventRead.model_validate(event)


@router.get("/{event_id}", response_model=EventDetail)
async def get_event(
    event_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> EventDetail:
    """Event with venue, staff list and patient count.

    Returns 403 unless the caller is an admin or assigned to the event.
    """
    with service_errors():
        summary = await EventService(session, access, audit).get_event_summary(user, event_id)
    return EventDetail.model_validate(summary, from_attributes=True)


@router.patch("/{event_id}", response_model=EventRead, dependencies=[manage_events])
async def update_event(
    event_id: str,
    data: EventUpdate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> EventRead:
    with service_errors():
        event = await EventService(session, access, audit).update_event(user, event_id, data)
    return EventRead.model_validate(event)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[manage_events],
)
async def delete_event(
    event_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
) -> Response:
    """Delete an event together with its staff assignments and patients."""
    with service_errors():
        await EventService(session, access, audit).delete_event(user, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
