"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.security import decode_access_token
from eventcare.db.session import get_db
from eventcare.models.user import User
from eventcare.policy.clock import Clock, SystemClock
from eventcare.services.access import AccessService
from eventcare.services.audit import AuditRecorder
from eventcare.services.auth import AuthService
from eventcare.services.rbac import Permission, RBACService

# Security scheme
security = HTTPBearer(auto_error=False)

_system_clock = SystemClock()


def get_clock() -> Clock:
    """Clock used for every time-dependent decision in a request.

    Tests override this dependency with a FixedClock.
    """
    return _system_clock


async def get_current_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict | None:
    """Extract and decode the current JWT token.

    Args:
        credentials: Bearer token credentials

    Returns:
        Decoded token payload or None
    """
    if not credentials:
        return None

    return decode_access_token(credentials.credentials)


async def get_current_user(
    token: Annotated[dict | None, Depends(get_current_token)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated staff member.

    The role is taken from the database, not from the token.

    Raises:
        HTTPException: 401 if the token is missing or invalid, or the user
            is unknown or inactive
    """
    if not token or not token.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth_service = AuthService(session)
    user = await auth_service.get_user_by_id(token["sub"])

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def require_permissions(*permissions: Permission):
    """Create a dependency that requires specific permissions.

    Usage:
        @router.post("/", dependencies=[Depends(require_permissions(Permission.EVENTS_MANAGE))])

    Args:
        permissions: Required permissions (user must have all)

    Returns:
        Dependency function
    """

    async def permission_checker(
        user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if not RBACService.has_all_permissions(user.user_role, list(permissions)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return user

    return permission_checker


def get_client_ip(request: Request) -> str | None:
    """Extract client IP from request.

    Args:
        request: FastAPI request

    Returns:
        Client IP address or None
    """
    # Check for forwarded header (when behind proxy)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    # Fall back to direct client
    if request.client:
        return request.client.host

    return None


def get_audit_recorder(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> AuditRecorder:
    return AuditRecorder(
        session,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
        clock=clock,
    )


def get_access_service(
    session: Annotated[AsyncSession, Depends(get_db)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> AccessService:
    return AccessService(session, clock)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
RequestClock = Annotated[Clock, Depends(get_clock)]
Audit = Annotated[AuditRecorder, Depends(get_audit_recorder)]
Access = Annotated[AccessService, Depends(get_access_service)]
