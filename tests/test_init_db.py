"""Tests for database bootstrap helpers."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.config import settings
from eventcare.core.security import verify_password
from eventcare.db.init_db import create_admin, create_initial_admin
from eventcare.models.user import User, UserRole


@pytest.mark.asyncio
async def test_initial_admin_created_once(async_session: AsyncSession) -> None:
    first = await create_initial_admin(async_session)
    second = await create_initial_admin(async_session)

    assert first is not None
    assert first.email == settings.initial_admin_email
    assert first.user_role is UserRole.ADMIN
    assert second is None
    assert await async_session.scalar(select(func.count()).select_from(User)) == 1


@pytest.mark.asyncio
async def test_create_admin_promotes_existing_user(
    async_session: AsyncSession, emt_user: User
) -> None:
    user = await create_admin(async_session, emt_user.email, "newpassword1")

    assert user.id == emt_user.id
    assert user.is_admin
    assert verify_password("newpassword1", user.hashed_password)
