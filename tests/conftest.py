"""Pytest configuration and fixtures for the back office.

Unit tests run against the in-memory fakes in tests/support.py. DB tests
use backoffice.infrastructure.persistence.database and skip when
DATABASE_URL is not set.
"""

import os

# Settings validation requires SECRET_KEY; set it before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import pytest
from httpx import ASGITransport, AsyncClient

from support import (
    FixedClock,
    InMemoryApplicationRepository,
    InMemoryReviewBoardRepository,
    InMemoryUserRepository,
    RecordingSleep,
)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def application_repo() -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository()


@pytest.fixture
def review_board_repo() -> InMemoryReviewBoardRepository:
    return InMemoryReviewBoardRepository()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def app():
    """FastAPI app with dependency overrides cleared after each test."""
    from backoffice.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    """Database session for repository tests. Rolls back after test.

    Skips when DATABASE_URL is not set. Mark such tests with
    @pytest.mark.requires_db; run without DB via: pytest -m 'not requires_db'.
    """
    from backoffice.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
