"""Staff authentication endpoints."""

from fastapi import APIRouter, HTTPException, status

from eventcare.api.deps import Audit, CurrentUser, DbSession
from eventcare.core.config import settings
from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.schemas.auth import LoginRequest, TokenResponse
from eventcare.schemas.user import UserRead
from eventcare.services.auth import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Staff login",
    description="Authenticate with email and password",
)
async def login(
    credentials: LoginRequest,
    session: DbSession,
    audit: Audit,
) -> TokenResponse:
    """Authenticate a staff member and return a JWT.

    Raises:
        HTTPException: 401 if the credentials are invalid
    """
    auth_service = AuthService(session)
    user = await auth_service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )

    if not user:
        # Log failed attempt
        await audit.log(
            None,
            AuditAction.LOGIN,
            AuditResource.USER,
            details={"email": credentials.email, "success": False},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token = auth_service.create_token(user)

    await audit.log(
        user.id,
        AuditAction.LOGIN,
        AuditResource.USER,
        user.id,
        {"success": True, "role": user.user_role.value},
    )

    return TokenResponse(
        access_token=access_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current user",
)
async def me(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)
