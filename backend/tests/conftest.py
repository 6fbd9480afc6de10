"""
Catalog API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── db_engine:       In-memory SQLite engine with all tables created
    ├── session_factory: Sessions bound to db_engine
    ├── app:             Fresh FastAPI app whose DB dependency uses db_engine
    ├── test_client:     HTTPX AsyncClient talking to `app`
    └── auth_headers:    Authorization header carrying a valid bearer token
"""

import os

# Override settings for testing BEFORE any catalog_api import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"  # Fastest cost factor; keeps the suite quick
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from catalog_api import models  # noqa: F401
from catalog_api.database import Base, get_db_session
from catalog_api.security import create_access_token


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
            with pytest.raises(NotFoundError):
                await service.get_category(mock_db_session, str(uuid4()))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Endpoint Fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database. Foreign keys are switched on to match PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(session_factory):
    """
    A fresh application instance (fresh rate-limit state) whose
    get_db_session dependency is bound to the test database.
    """
    from catalog_api.main import create_app

    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_ping(test_client):
            response = await test_client.get("/ping")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Authorization header with a valid token for an arbitrary user id."""
    return {"Authorization": f"Bearer {create_access_token(str(uuid4()))}"}


@pytest.fixture
def create_category(test_client, auth_headers):
    """Factory fixture: POST /category and return the created record."""
    async def _create(name: str, parent_id: str = None) -> Dict:
        body = {"name": name}
        if parent_id is not None:
            body["parent"] = {"id": parent_id}
        response = await test_client.post("/category", json=body, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_product(test_client, auth_headers):
    """Factory fixture: POST /product and return the created record."""
    async def _create(name: str, category_ids, price: float = 9.99, qty: int = 1) -> Dict:
        body = {
            "name": name,
            "price": price,
            "qty": qty,
            "categories": [{"id": cid} for cid in category_ids],
        }
        response = await test_client.post("/product", json=body, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
