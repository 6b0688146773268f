"""Audit log endpoints.

IMPORTANT: This module intentionally provides READ-ONLY access to the audit log.
Rows are created internally via write_audit_log().
"""

from fastapi import APIRouter, Depends, Query, status

from eventcare.api.deps import DbSession, require_permissions
from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.schemas.audit_log import AuditLogFilter, AuditLogRead
from eventcare.services.audit import AuditService
from eventcare.services.rbac import Permission

router = APIRouter()


@router.get(
    "/logs",
    response_model=list[AuditLogRead],
    status_code=status.HTTP_200_OK,
    summary="List audit log",
    description="Query the audit log with optional filters, newest first",
    dependencies=[Depends(require_permissions(Permission.AUDIT_READ))],
)
async def list_audit_logs(
    session: DbSession,
    user_id: str | None = None,
    action: AuditAction | None = None,
    resource: AuditResource | None = None,
    resource_id: str | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> list[AuditLogRead]:
    """Query the audit log.

    Args:
        session: Database session
        user_id: Filter by acting user
        action: Filter by action
        resource: Filter by resource kind
        resource_id: Filter by resource ID
        limit: Maximum results (max 500)
        offset: Results to skip

    Returns:
        Matching audit rows
    """
    filters = AuditLogFilter(
        user_id=user_id,
        action=action,
        resource=resource,
        resource_id=resource_id,
        limit=limit,
        offset=offset,
    )
    logs = await AuditService(session).get_logs(filters)
    return [AuditLogRead.model_validate(entry) for entry in logs]
