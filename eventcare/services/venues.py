"""Venue management."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.event import Event
from eventcare.models.user import User
from eventcare.models.venue import Venue
from eventcare.schemas.venue import VenueCreate, VenueUpdate
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import ConflictError, NotFoundError


class VenueService:
    """CRUD for venues. Writes are admin-only at the router."""

    def __init__(self, session: AsyncSession, audit: AuditRecorder) -> None:
        self.session = session
        self.audit = audit

    async def list_venues(self) -> list[Venue]:
        result = await self.session.execute(select(Venue).order_by(Venue.name))
        return list(result.scalars().all())

    async def get_venue(self, venue_id: str) -> Venue:
        result = await self.session.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if venue is None:
            raise NotFoundError(f"Venue {venue_id} not found")
        return venue

    async def create_venue(self, actor: User, data: VenueCreate) -> Venue:
        venue = Venue(**data.model_dump(), created_by=actor.id)
        self.session.add(venue)
        await self.session.commit()
        await self.session.refresh(venue)

        await self.audit.log(actor.id, AuditAction.CREATE, AuditResource.VENUE, venue.id)
        return venue

    async def update_venue(self, actor: User, venue_id: str, data: VenueUpdate) -> Venue:
        venue = await self.get_venue(venue_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("name", "address"):
            if changes.get(required, "") is None:
                del changes[required]
        for field, value in changes.items():
            setattr(venue, field, value)

        await self.session.commit()
        await self.session.refresh(venue)

        await self.audit.log(
            actor.id,
            AuditAction.UPDATE,
            AuditResource.VENUE,
            venue.id,
            {"fields": sorted(changes)},
        )
        return venue

    async def delete_venue(self, actor: User, venue_id: str) -> None:
        """Delete a venue no event refers to.

        Raises:
            NotFoundError: If the venue does not exist
            ConflictError: If an event still uses the venue
        """
        venue = await self.get_venue(venue_id)
        in_use = await self.session.execute(
            select(Event.id).where(Event.venue_id == venue_id).limit(1)
        )
        if in_use.first() is not None:
            raise ConflictError("Venue is used by one or more events")

        await self.session.delete(venue)
        await self.session.commit()

        await self.audit.log(actor.id, AuditAction.DELETE, AuditResource.VENUE, venue_id)
