"""Venue endpoints."""

from fastapi import APIRouter, Depends, Response, status

from eventcare.api.deps import Audit, CurrentUser, DbSession, require_permissions
from eventcare.api.errors import service_errors
from eventcare.schemas.venue import VenueCreate, VenueRead, VenueUpdate
from eventcare.services.rbac import Permission
from eventcare.services.venues import VenueService

router = APIRouter()

manage_venues = Depends(require_permissions(Permission.VENUES_MANAGE))


@router.get("", response_model=list[VenueRead])
async def list_venues(user: CurrentUser, session: DbSession, audit: Audit) -> list[VenueRead]:
    venues = await VenueService(session, audit).list_venues()
    return [VenueRead.model_validate(v) for v in venues]


@router.post(
    "",
    response_model=VenueRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[manage_venues],
)
async def create_venue(
    data: VenueCreate,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> VenueRead:
    venue = await VenueService(session, audit).create_venue(user, data)
    return VenueRead.model_validate(venue)


@router.get("/{venue_id}", response_model=VenueRead)
async def get_venue(
    venue_id: str,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> VenueRead:
    with service_errors():
        venue = await VenueService(session, audit).get_venue(venue_id)
    return VenueRead.model_validate(venue)


@router.patch("/{venue_id}", response_model=VenueRead, dependencies=[manage_venues])
async def update_venue(
    venue_id: str,
    data: VenueUpdate,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> VenueRead:
    with service_errors():
        venue = await VenueService(session, audit).update_venue(user, venue_id, data)
    return VenueRead.model_validate(venue)


@router.delete(
    "/{venue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[manage_venues],
)
async def delete_venue(
    venue_id: str,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> Response:
    """Delete a venue. Returns 409 while an event still uses it."""
    with service_errors():
        await VenueService(session, audit).delete_venue(user, venue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
