"""Append-only audit log model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from eventcare.db.base import Base
from eventcare.utils.time import utc_now


class AuditAction(str, Enum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


class AuditResource(str, Enum):
    """Kind of resource an audit entry refers to."""

    USER = "USER"
    EVENT = "EVENT"
    VENUE = "VENUE"
    PATIENT = "PATIENT"
    ASSESSMENT = "ASSESSMENT"
    VITAL = "VITAL"
    TREATMENT = "TREATMENT"


class AuditLog(Base):
    """Who did what to which record, and when.

    IMPORTANT: rows are never updated or deleted.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (Index("ix_audit_logs_resource", "resource", "resource_id"),)

    user_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=True,  # Null for failed logins
        index=True,
    )
    action: Mapped[AuditAction] = mapped_column(String(50), nullable=False)
    resource: Mapped[AuditResource] = mapped_column(String(50), nullable=False)
    resource_id: Mapped[str | None] = mapped_column(UUID(as_uuid=False), nullable=True)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog {self.action} {self.resource}:{self.resource_id} "
            f"by {self.user_id}>"
        )
