"""
Pytest fixtures for test database, client, and authentication.

Each test gets its own in-memory SQLite database (aiosqlite driver) with all
tables created, so tests need no running PostgreSQL and never see each
other's rows.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_booking.main import app
from hotel_booking.db.base import Base
from hotel_booking.db.session import get_db
from hotel_booking.core.security import create_session
from hotel_booking.models import User, Room
from tests import factories

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await factories.create_user(db_session)


@pytest_asyncio.fixture
async def auth_headers(db_session: AsyncSession, test_user: User) -> dict:
    """Authorization headers with a token backed by a session row."""
    token = await create_session(db_session, test_user.id)
    await db_session.commit()
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def eligible_user(db_session: AsyncSession, test_user: User) -> User:
    """The test user, enrolled, with a paid ticket that includes the hotel."""
    await factories.create_paid_hotel_ticket(db_session, test_user)
    return test_user


@pytest_asyncio.fixture
async def test_room(db_session: AsyncSession) -> Room:
    hotel = await factories.create_hotel(db_session)
    return await factories.create_room(db_session, hotel.id, capacity=3)
