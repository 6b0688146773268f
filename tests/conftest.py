"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from eventcare.api.deps import get_clock
from eventcare.core.security import create_access_token, hash_password
from eventcare.db.base import Base
from eventcare.db.session import get_db
from eventcare.main import app
from eventcare.models.event import Event, StaffAssignment
from eventcare.models.patient import Assessment, Patient
from eventcare.models.user import User, UserRole
from eventcare.policy.clock import FixedClock

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Frozen "now" for every test
NOW = datetime(2024, 7, 4, 15, 0, tzinfo=timezone.utc)

TEST_PASSWORD = "testpassword123"
PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW; tests may advance it."""
    return FixedClock(NOW)


@pytest.fixture(scope="function")
async def client(
    async_session: AsyncSession, clock: FixedClock
) -> AsyncGenerator[AsyncClient, None]:
    """Create API test client with overridden dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def create_user(
    session: AsyncSession,
    email: str,
    role: UserRole = UserRole.EMT,
    name: str = "Test User",
    is_active: bool = True,
) -> User:
    user = User(
        email=email,
        name=name,
        hashed_password=PASSWORD_HASH,
        role=role.value,
        is_active=is_active,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_patient(
    session: AsyncSession,
    event: Event,
    creator: User,
    created_at: datetime,
    first_name: str = "Pat",
) -> Patient:
    """Insert a patient and its care record directly."""
    patient = Patient(
        event_id=event.id,
        first_name=first_name,
        last_name="Doe",
        dob=datetime(1990, 1, 1, tzinfo=timezone.utc),
        created_by=creator.id,
        updated_by=creator.id,
        created_at=created_at,
    )
    session.add(patient)
    await session.flush()
    session.add(
        Assessment(patient_id=patient.id, status="incomplete", version=1, created_at=created_at)
    )
    await session.commit()
    await session.refresh(patient)
    return patient


def auth_headers_for(user: User) -> dict[str, str]:
    """Create authorization headers for a user."""
    token = create_access_token(user.id, user.user_role, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    return await create_user(
        async_session, "admin@eventcare.local", UserRole.ADMIN, name="Admin User"
    )


@pytest.fixture
async def emt_user(async_session: AsyncSession) -> User:
    return await create_user(async_session, "emt@eventcare.local", name="Assigned EMT")


@pytest.fixture
async def other_emt(async_session: AsyncSession) -> User:
    """EMT with no assignment to the test event."""
    return await create_user(async_session, "other@eventcare.local", name="Other EMT")


@pytest.fixture
async def event(async_session: AsyncSession, admin_user: User) -> Event:
    """Event that started two hours before NOW."""
    event = Event(
        name="Summer Festival",
        start_date=NOW - timedelta(hours=2),
        end_date=NOW + timedelta(hours=8),
        state="NY",
        timezone="America/New_York",
        created_by=admin_user.id,
    )
    async_session.add(event)
    await async_session.commit()
    await async_session.refresh(event)
    return event


@pytest.fixture
async def assignment(
    async_session: AsyncSession, event: Event, emt_user: User
) -> StaffAssignment:
    assignment = StaffAssignment(user_id=emt_user.id, event_id=event.id, role="EMT")
    async_session.add(assignment)
    await async_session.commit()
    await async_session.refresh(assignment)
    return assignment


@pytest.fixture
async def patient(
    async_session: AsyncSession, event: Event, emt_user: User, assignment: StaffAssignment
) -> Patient:
    """Patient registered an hour before NOW by the assigned EMT."""
    return await create_patient(async_session, event, emt_user, NOW - timedelta(hours=1))


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture
def emt_headers(emt_user: User) -> dict[str, str]:
    return auth_headers_for(emt_user)


@pytest.fixture
def other_headers(other_emt: User) -> dict[str, str]:
    return auth_headers_for(other_emt)
