"""User schemas."""

from pydantic import BaseModel, Field

from eventcare.models.user import UserRole
from eventcare.schemas.auth import LenientEmail
from eventcare.schemas.common import UTCDateTime


class UserCreate(BaseModel):
    """Schema for creating a staff account (admin only)."""

    email: LenientEmail
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = UserRole.EMT
    certification_end_date: UTCDateTime | None = None
    region: str | None = Field(None, max_length=100)


class UserUpdate(BaseModel):
    """Schema for updating a staff account (admin only)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=128)
    role: UserRole | None = None
    is_active: bool | None = None
    certification_end_date: UTCDateTime | None = None
    region: str | None = Field(None, max_length=100)


class UserRead(BaseModel):
    """Schema for reading a staff account."""

    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool
    certification_end_date: UTCDateTime | None
    region: str | None
    created_at: UTCDateTime

    model_config = {"from_attributes": True}
