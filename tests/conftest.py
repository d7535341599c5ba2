"""
Malls API Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database file (sqlite+aiosqlite) with
       freshly created tables. API tests talk to the ASGI app through an
       httpx AsyncClient whose get_db_session dependency is bound to that
       database.

Fixture Hierarchy:
    Function-scoped:
    ├── test_engine:     async engine on a per-test SQLite file
    ├── db_session:      AsyncSession for service-level tests
    ├── mock_db_session: AsyncMock session for error-path tests
    ├── test_client:     httpx AsyncClient against the app
    ├── user_token:      x-auth-token of a regular user
    └── admin_token:     x-auth-token of an admin user
"""

import os
import tempfile

# Settings are read at import time, so the environment is set first
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="mallsapi_test_"), "app.db")
)
os.environ["JWT_PRIVATE_KEY"] = "test-signing-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from mallsapi import database  # noqa: E402
from mallsapi.database import Base, build_engine, create_tables, get_db_session  # noqa: E402
from mallsapi.main import app  # noqa: E402
from mallsapi.schemas.user import UserCreate  # noqa: E402
from mallsapi.services.user_service import user_service  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Sample payloads
# ══════════════════════════════════════════════════════════════════════════

MALL_PAYLOAD = {
    "name": "FrunPark",
    "address": "krekelstraat 35",
    "city": "Izegem",
    "province": "West-Vlaanderen",
    "postalCode": 8870,
}

STORE_PAYLOAD = {"name": "McDonalds", "type": "Fast Food"}

EMPLOYEE_PAYLOAD = {
    "firstName": "John B.",
    "lastName": "Derick",
    "type": "Manager",
    "salary": 3200,
    "hireDate": "2023-09-01",
}


@pytest.fixture
def mall_payload() -> Dict:
    return dict(MALL_PAYLOAD)


@pytest.fixture
def store_payload() -> Dict:
    return dict(STORE_PAYLOAD)


@pytest.fixture
def employee_payload() -> Dict:
    return dict(EMPLOYEE_PAYLOAD)


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """A fresh database file with all tables, disposed after the test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'malls.db'}")
    await create_tables(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, test_engine, monkeypatch):
    """
    httpx AsyncClient routed straight into the ASGI app.

    Each request gets its own session from the per-test factory and commits
    or rolls back exactly like get_db_session does in production.
    """

    async def _test_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    monkeypatch.setattr(database, "engine", test_engine)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def register_and_login(
    client: AsyncClient,
    email: str,
    name: str = "Fabian E.",
    password: str = "secret123",
) -> str:
    """Registers a user through the API and returns its x-auth-token."""
    response = await client.post(
        "/api/users", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    response = await client.post("/api/auth", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.headers["x-auth-token"]


@pytest_asyncio.fixture
async def user_token(test_client) -> str:
    return await register_and_login(test_client, "firstuser@test.com")


@pytest_asyncio.fixture
async def admin_token(test_client, session_factory) -> str:
    """Registers a user, promotes it out-of-band, then logs in."""
    async with session_factory() as session:
        await user_service.register(
            session,
            UserCreate(name="Admin User", email="admin@test.com", password="adminpass"),
        )
        await user_service.set_admin(session, "admin@test.com", True)
        await session.commit()

    response = await test_client.post(
        "/api/auth", json={"email": "admin@test.com", "password": "adminpass"}
    )
    assert response.status_code == 200, response.text
    return response.headers["x-auth-token"]


def auth(token: str) -> Dict[str, str]:
    return {"x-auth-token": token}
