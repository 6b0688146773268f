"""Venue schemas."""

from pydantic import BaseModel, Field

from eventcare.schemas.common import UTCDateTime


class VenueCreate(BaseModel):
    """Schema for creating a venue."""

    name: str = Field(min_length=2, max_length=255)
    address: str = Field(min_length=1, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=50)
    zip_code: str | None = Field(None, max_length=20)
    notes: str | None = None


class VenueUpdate(BaseModel):
    """Schema for updating a venue."""

    name: str | None = Field(None, min_length=2, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=50)
    zip_code: str | None = Field(None, max_length=20)
    notes: str | None = None


class VenueRead(BaseModel):
    """Schema for reading a venue."""

    id: str
    name: str
    address: str
    city: str | None
    state: str | None
    zip_code: str | None
    notes: str | None
    created_at: UTCDateTime

    model_config = {"from_attributes": True}
