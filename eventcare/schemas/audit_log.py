"""Audit log schemas."""

from typing import Any

from pydantic import BaseModel, Field

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.schemas.common import UTCDateTime


class AuditLogRead(BaseModel):
    """Schema for reading an audit log row."""

    id: str
    user_id: str | None
    action: AuditAction
    resource: AuditResource
    resource_id: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    timestamp: UTCDateTime

    model_config = {"from_attributes": True}


class AuditLogFilter(BaseModel):
    """Filter parameters for querying audit logs."""

    user_id: str | None = None
    action: AuditAction | None = None
    resource: AuditResource | None = None
    resource_id: str | None = None
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)
