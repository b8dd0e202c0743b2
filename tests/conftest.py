"""
Shared test fixtures for the feed notification engine.

Provides database session management, services, and user fixtures.
"""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from feed.config import settings
from feed.database import Base
from feed.services.identity import ActorIdentity
from feed.services.notifications import NotificationService

# Import models so they're registered with Base.metadata before table creation
from feed.models import Notification, User  # noqa: F401

from tests.factories import create_user

# Test database URL (uses separate test database)
TEST_DATABASE_URL = settings.test_database_url

# Create test engine with NullPool to avoid connection issues
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


if test_engine.dialect.name == "sqlite":

    @event.listens_for(test_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        """SQLite ignores foreign keys unless asked per connection."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory(db_session: AsyncSession) -> async_sessionmaker[AsyncSession]:
    """Session factory for tests that need several independent sessions."""
    return TestSessionLocal


@pytest.fixture
def service(db_session: AsyncSession) -> NotificationService:
    """Notification service bound to the test session, suppressing unknown actors."""
    return NotificationService(db_session, notify_on_missing_actor=False)


# --- Identity Fixtures ---


class RecordingDirectory:
    """In-memory identity directory that records every lookup."""

    def __init__(self, identities: dict[UUID, ActorIdentity] | None = None):
        self.identities = identities or {}
        self.lookups: list[UUID] = []

    async def get(self, actor_id: UUID) -> ActorIdentity | None:
        self.lookups.append(actor_id)
        return self.identities.get(actor_id)


@pytest.fixture
def directory() -> RecordingDirectory:
    """Empty recording directory; tests register identities as needed."""
    return RecordingDirectory()


# --- User Fixtures ---


@pytest_asyncio.fixture
async def alice(db_session: AsyncSession) -> User:
    """Actor with a handle and display name."""
    return await create_user(db_session, handle="alice", display_name="Alice A")


@pytest_asyncio.fixture
async def bob(db_session: AsyncSession) -> User:
    """Recipient user."""
    return await create_user(db_session, handle="bob", display_name="Bob B")


@pytest_asyncio.fixture
async def carol(db_session: AsyncSession) -> User:
    """Third user for ownership scenarios."""
    return await create_user(db_session, handle="carol", display_name="Carol C")
