"""Staff account management."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.security import hash_password
from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.user import User
from eventcare.schemas.user import UserCreate, UserUpdate
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """Create, list and update staff accounts."""

    def __init__(self, session: AsyncSession, audit: AuditRecorder) -> None:
        self.session = session
        self.audit = audit

    async def list_users(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    async def get_user(self, user_id: str) -> User:
        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def create_user(self, actor: User, data: UserCreate) -> User:
        """Create a staff account.

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.get_by_email(data.email) is not None:
            raise ConflictError(f"User with email {data.email} already exists")

        user = User(
            email=data.email.lower(),
            name=data.name,
            hashed_password=hash_password(data.password),
            role=data.role.value,
            certification_end_date=data.certification_end_date,
            region=data.region,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"Created user {user.id} with role {user.role}")
        await self.audit.log(
            actor.id,
            AuditAction.CREATE,
            AuditResource.USER,
            user.id,
            {"email": user.email, "role": user.role},
        )
        return user

    async def update_user(self, actor: User, user_id: str, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True)
        # Required columns ignore an explicit null
        for required in ("name", "role", "is_active"):
            if changes.get(required, "") is None:
                del changes[required]

        password = changes.pop("password", None)
        if password:
            user.hashed_password = hash_password(password)
        if changes.get("role") is not None:
            changes["role"] = changes["role"].value

        for field, value in changes.items():
            setattr(user, field, value)

        await self.session.commit()
        await self.session.refresh(user)

        await self.audit.log(
            actor.id,
            AuditAction.UPDATE,
            AuditResource.USER,
            user.id,
            {"fields": sorted(set(changes) | ({"password"} if password else set()))},
        )
        return user
