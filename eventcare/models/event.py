"""Event and staff assignment models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from eventcare.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    """An emergency-response coverage event.

    ``timezone`` is stored for display; see the same-day access rule
    settings for how it takes part in access decisions.
    """

    __tablename__ = "events"
    __table_args__ = (Index("ix_events_dates", "start_date", "end_date"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    venue_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("venues.id"),
        nullable=True,
        index=True,
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    timezone: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Event {self.name} {self.start_date:%Y-%m-%d}>"


class StaffAssignment(Base, TimestampMixin):
    """Grants a staff member visibility into one event's patients."""

    __tablename__ = "staff_assignments"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_staff_assignments_user_event"),)

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("events.id"),
        nullable=False,
        index=True,
    )
    # Role on this event (e.g. "EMT", "Lead"), free text
    role: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<StaffAssignment user={self.user_id} event={self.event_id}>"
