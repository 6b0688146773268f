"""Tests for login and token handling."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from jose import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.core.config import settings
from eventcare.core.security import create_access_token, decode_access_token
from eventcare.models.audit_log import AuditLog
from eventcare.models.user import User, UserRole
from tests.conftest import TEST_PASSWORD, auth_headers_for, create_user


class TestLogin:
    """Tests for POST /auth/login."""

    @pytest.mark.asyncio
    async def test_login_returns_token_with_role(
        self, client: AsyncClient, emt_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "EMT@eventcare.local", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        payload = decode_access_token(data["access_token"])
        assert payload["sub"] == emt_user.id
        assert payload["role"] == "EMT"

    @pytest.mark.asyncio
    async def test_wrong_password(
        self, client: AsyncClient, async_session: AsyncSession, emt_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": emt_user.email, "password": "wrongpassword"},
        )

        assert response.status_code == 401

        result = await async_session.execute(select(AuditLog).where(AuditLog.action == "LOGIN"))
        entry = result.scalar_one()
        assert entry.user_id is None
        assert entry.details == {"email": emt_user.email, "success": False}

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_login(
        self, client: AsyncClient, async_session: AsyncSession
    ) -> None:
        await create_user(async_session, "retired@eventcare.local", is_active=False)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "retired@eventcare.local", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401


class TestCurrentUser:
    """Tests for bearer token resolution."""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, admin_user: User, admin_headers: dict) -> None:
        response = await client.get("/api/v1/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, client: AsyncClient, emt_user: User) -> None:
        token = create_access_token(
            emt_user.id, emt_user.user_role, expires_delta=timedelta(seconds=-1)
        )

        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "claims",
        [
            {"role": "PARAMEDIC", "type": "access"},
            {"role": "EMT", "type": "refresh"},
            {"type": "access"},
        ],
    )
    def test_decode_rejects_foreign_claims(self, claims: dict) -> None:
        issued_at = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "someone",
                "iat": issued_at,
                "exp": issued_at + timedelta(minutes=5),
                **claims,
            },
            settings.secret_key,
            algorithm=settings.algorithm,
        )

        assert decode_access_token(token) is None

    def test_token_carries_role_and_email(self) -> None:
        token = create_access_token("user-1", UserRole.ADMIN, email="a@eventcare.local")

        payload = decode_access_token(token)

        assert payload["role"] == "ADMIN"
        assert payload["email"] == "a@eventcare.local"
        assert payload["type"] == "access"

    @pytest.mark.asyncio
    async def test_role_comes_from_database(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        emt_user: User,
    ) -> None:
        # Token issued while the user was EMT, then promoted
        headers = auth_headers_for(emt_user)
        emt_user.role = UserRole.ADMIN.value
        await async_session.commit()

        response = await client.get("/api/v1/audit/logs", headers=headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_deactivated_user_rejected(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        emt_user: User,
        emt_headers: dict,
    ) -> None:
        emt_user.is_active = False
        await async_session.commit()

        response = await client.get("/api/v1/auth/me", headers=emt_headers)

        assert response.status_code == 401
