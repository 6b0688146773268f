"""Staff account endpoints (admin only, except reading oneself)."""

from fastapi import APIRouter, Depends, HTTPException, status

from eventcare.api.deps import Audit, CurrentUser, DbSession, require_permissions
from eventcare.api.errors import service_errors
from eventcare.schemas.user import UserCreate, UserRead, UserUpdate
from eventcare.services.rbac import Permission
from eventcare.services.users import UserService

router = APIRouter()

manage_users = Depends(require_permissions(Permission.USERS_MANAGE))


@router.get("", response_model=list[UserRead], dependencies=[manage_users])
async def list_users(session: DbSession, audit: Audit) -> list[UserRead]:
    users = await UserService(session, audit).list_users()
    return [UserRead.model_validate(u) for u in users]


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[manage_users],
)
async def create_user(
    data: UserCreate,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> UserRead:
    """Create a staff account.

    Returns 409 if the email is already registered.
    """
    with service_errors():
        created = await UserService(session, audit).create_user(user, data)
    return UserRead.model_validate(created)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> UserRead:
    """Get a staff account. Non-admins may only read their own."""
    if not user.is_admin and user.id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    with service_errors():
        found = await UserService(session, audit).get_user(user_id)
    return UserRead.model_validate(found)


@router.patch("/{user_id}", response_model=UserRead, dependencies=[manage_users])
async def update_user(
    user_id: str,
    data: UserUpdate,
    user: CurrentUser,
    session: DbSession,
    audit: Audit,
) -> UserRead:
    with service_errors():
        updated = await UserService(session, audit).update_user(user, user_id, data)
    return UserRead.model_validate(updated)
