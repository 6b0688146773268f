"""Database initialization utilities."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.config import settings
from eventcare.core.security import hash_password
from eventcare.db.base import Base
from eventcare.db.session import engine
from eventcare.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all database tables."""
    # Register every model on the metadata
    import eventcare.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def create_admin(
    session: AsyncSession,
    email: str,
    password: str,
    name: str = "System Admin",
) -> User:
    """Create an ADMIN account, or promote the existing account with that email."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(
            email=email.lower(),
            name=name,
            hashed_password=hash_password(password),
            role=UserRole.ADMIN.value,
            is_active=True,
        )
        session.add(user)
        logger.info(f"Created admin user {email}")
    else:
        user.role = UserRole.ADMIN.value
        user.hashed_password = hash_password(password)
        user.is_active = True
        logger.info(f"Promoted existing user {email} to admin")

    await session.commit()
    await session.refresh(user)
    return user


async def create_initial_admin(session: AsyncSession) -> User | None:
    """Create the configured initial admin if no admin exists.

    Returns:
        Created admin user or None if an admin already exists
    """
    result = await session.execute(
        select(User).where(User.role == UserRole.ADMIN.value).limit(1)
    )
    if result.scalar_one_or_none():
        logger.info("Admin user already exists, skipping creation")
        return None

    admin = await create_admin(
        session,
        settings.initial_admin_email,
        settings.initial_admin_password,
    )
    if settings.initial_admin_password == "CHANGE_ME_IMMEDIATELY":
        logger.warning(
            "Created initial admin user with default password. "
            "CHANGE THE PASSWORD IMMEDIATELY!"
        )
    return admin


async def init_db(session: AsyncSession) -> None:
    """Initialize database with required data."""
    await create_initial_admin(session)
    logger.info("Database initialization complete")
