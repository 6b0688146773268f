"""Audit log service for append-only audit logging."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.logging import audit_logger
from eventcare.models.audit_log import AuditAction, AuditLog, AuditResource
from eventcare.policy.clock import Clock, SystemClock
from eventcare.schemas.audit_log import AuditLogFilter

logger = logging.getLogger(__name__)


async def write_audit_log(
    session: AsyncSession,
    user_id: str | None,
    action: AuditAction,
    resource: AuditResource,
    resource_id: str | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    clock: Clock | None = None,
) -> AuditLog | None:
    """Write an audit log row to the database.

    Rows are append-only. A failure to write is logged and swallowed so
    that auditing never undoes an operation that already committed.

    Args:
        session: Database session
        user_id: ID of the acting user (None for failed logins)
        action: Action performed
        resource: Kind of resource affected
        resource_id: ID of the affected resource
        details: Additional context as JSON
        ip_address: Client IP address
        user_agent: Client user agent string
        clock: Clock for the row timestamp

    Returns:
        Created AuditLog, or None if the write failed
    """
    entry = AuditLog(
        user_id=user_id,
        action=action.value,
        resource=resource.value,
        resource_id=resource_id,
        details=details,
        ip_address=ip_address,
        user_agent=user_agent,
        timestamp=(clock or SystemClock()).now(),
    )

    try:
        session.add(entry)
        await session.commit()
        await session.refresh(entry)
    except SQLAlchemyError:
        logger.exception(
            "Failed to write audit log %s %s:%s", action.value, resource.value, resource_id
        )
        await session.rollback()
        return None

    # Also log to structured logger
    audit_logger.log(
        action=action.value,
        resource=resource.value,
        actor_id=user_id or "anonymous",
        resource_id=resource_id or "none",
        details=details,
    )

    return entry


class AuditRecorder:
    """Records actions for one request.

    Binds the session and the request context so services only pass the
    actor, action and resource.
    """

    def __init__(
        self,
        session: AsyncSession,
        ip_address: str | None = None,
        user_agent: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.session = session
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.clock = clock

    async def log(
        self,
        actor_id: str | None,
        action: AuditAction,
        resource: AuditResource,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        return await write_audit_log(
            session=self.session,
            user_id=actor_id,
            action=action,
            resource=resource,
            resource_id=resource_id,
            details=details,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            clock=self.clock,
        )


class AuditService:
    """Service for querying audit logs.

    Note: This service only provides read operations.
    Rows are created via write_audit_log().
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_logs(self, filters: AuditLogFilter) -> list[AuditLog]:
        """Query audit logs with optional filters, newest first."""
        query = select(AuditLog).order_by(AuditLog.timestamp.desc())

        if filters.user_id:
            query = query.where(AuditLog.user_id == filters.user_id)
        if filters.action:
            query = query.where(AuditLog.action == filters.action.value)
        if filters.resource:
            query = query.where(AuditLog.resource == filters.resource.value)
        if filters.resource_id:
            query = query.where(AuditLog.resource_id == filters.resource_id)

        query = query.offset(filters.offset).limit(filters.limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
