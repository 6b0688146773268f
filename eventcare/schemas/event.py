"""Event and staff assignment schemas."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, model_validator

from eventcare.models.user import UserRole
from eventcare.schemas.common import UTCDateTime
from eventcare.schemas.venue import VenueRead
from eventcare.utils.time import resolve_zone


def _check_timezone(value: str) -> str:
    if len(value) > 50 or resolve_zone(value) is None:
        raise ValueError(f"Unknown timezone: {value}")
    return value


TimezoneName = Annotated[str, AfterValidator(_check_timezone)]


class EventCreate(BaseModel):
    """Schema for creating an event (admin only)."""

    name: str = Field(min_length=2, max_length=255)
    venue_id: str | None = None
    start_date: UTCDateTime
    end_date: UTCDateTime
    state: str = Field(min_length=2, max_length=50)
    timezone: TimezoneName
    notes: str | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "EventCreate":
        """End date must not precede start date."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class EventUpdate(BaseModel):
    """Schema for updating an event (admin only)."""

    name: str | None = Field(None, min_length=2, max_length=255)
    venue_id: str | None = None
    start_date: UTCDateTime | None = None
    end_date: UTCDateTime | None = None
    state: str | None = Field(None, min_length=2, max_length=50)
    timezone: TimezoneName | None = None
    notes: str | None = None


class EventRead(BaseModel):
    """Schema for reading an event."""

    id: str
    name: str
    venue_id: str | None
    start_date: UTCDateTime
    end_date: UTCDateTime
    state: str
    timezone: str
    notes: str | None
    created_at: UTCDateTime

    model_config = {"from_attributes": True}


class StaffMember(BaseModel):
    """Staff member summary embedded in assignment listings."""

    id: str
    name: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}


class StaffAssignmentCreate(BaseModel):
    """Schema for assigning a staff member to an event."""

    user_id: str
    role: str = Field(min_length=1, max_length=50)


class StaffAssignmentRead(BaseModel):
    """Schema for reading a staff assignment."""

    id: str
    event_id: str
    user_id: str
    role: str
    created_at: UTCDateTime
    user: StaffMember | None = None

    model_config = {"from_attributes": True}


class EventDetail(EventRead):
    """Event with venue, staff and counts."""

    venue: VenueRead | None = None
    staff: list[StaffAssignmentRead] = []
    staff_count: int = 0
    patient_count: int = 0
    can_edit: bool = False
