"""Pytest configuration and fixtures for roster.

Uses roster.main:app for HTTP tests and roster.infrastructure.persistence.database
for DB-dependent fixtures. SECRET_KEY is set before the app is imported.
"""

import os
import uuid

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.limiter import limiter
from roster.infrastructure.persistence import database
from roster.main import app


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Rate-limit counters are process-wide; start every test from zero."""
    limiter.reset()
    yield


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _require_postgres() -> None:
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )


@pytest.fixture
def session_factory():
    """Session factory for tests that commit from several sessions at once.

    Rows are committed; use a throwaway test database.
    """
    _require_postgres()
    return database.AsyncSessionLocal


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after test.

    Skips when Postgres is not configured. Mark such tests with
    @pytest.mark.requires_db; run without DB via: pytest -m 'not requires_db'.
    """
    _require_postgres()
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def owner_headers(client: AsyncClient) -> dict[str, str]:
    """Sign up a fresh company via API and return bearer headers for its owner.

    Creates real rows; use a throwaway test database.
    """
    _require_postgres()
    email = f"owner-{uuid.uuid4().hex[:12]}@example.com"
    resp = await client.post(
        "/api/v1/users/signup",
        json={
            "email": email,
            "password": "OwnerPassword123!",
            "company_name": f"Company {email}",
        },
    )
    if resp.status_code != 201:
        pytest.skip(f"Could not sign up test owner: {resp.status_code} {resp.text}")
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
