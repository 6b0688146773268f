"""Authentication service for staff accounts."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.security import create_access_token, verify_password
from eventcare.models.user import User


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a staff member with email and password.

        Args:
            email: Staff email address
            password: Plain text password

        Returns:
            User if credentials are valid and the account is active, None otherwise
        """
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        user = result.scalar_one_or_none()

        if not user:
            return None

        if not user.is_active:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    def create_token(self, user: User) -> str:
        """Create JWT access token for a staff member.

        The role claim is informational; requests re-read the role from
        the database.
        """
        return create_access_token(user.id, user.user_role, email=user.email)

    async def get_user_by_id(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()
