"""
BrandAgent Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file under tmp_path, so tests never
       share rows and never touch ./brand.db.

Fixture Hierarchy (all function-scoped):
    test_settings ─┬─ store ──────── auth_service-backed service tests
                   ├─ auth_service
                   └─ app ── test_client (lifespan entered: schema + demo seed)
    failing_store: a Store stand-in whose sessions always raise
"""

import os
from contextlib import asynccontextmanager

# Set before any brandagent import so the module-level default settings are safe
os.environ.setdefault("JWT_SECRET", "test-secret-not-real-0123456789abcdef")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("SEED_DEMO_ACCOUNTS", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from brandagent.config import Settings
from brandagent.database import Store
from brandagent.main import create_app
from brandagent.services.auth_service import AuthService

TEST_SECRET = "test-secret-not-real-0123456789abcdef"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh SQLite file; bcrypt at its minimum cost."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'brand_test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        seed_demo_accounts=True,
        log_level="WARNING",
        _env_file=None,
    )


@pytest_asyncio.fixture
async def store(test_settings):
    store = Store(test_settings.database_url)
    await store.create_schema()
    yield store
    await store.dispose()


@pytest.fixture
def auth_service(test_settings):
    return AuthService(test_settings)


class _FailingStore:
    """Quacks like Store; every session raises a driver-level error."""

    @asynccontextmanager
    async def session(self):
        raise OperationalError("INSERT INTO ...", {}, Exception("disk I/O error at /var/lib/brand.db"))
        yield  # pragma: no cover


@pytest.fixture
def failing_store():
    return _FailingStore()


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan is entered
    here explicitly: tables are created and demo accounts seeded.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


async def login_token(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest_asyncio.fixture
async def admin_headers(test_client):
    token = await login_token(test_client, "admin@brandagent.com", "admin123")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def jobseeker_headers(test_client):
    token = await login_token(test_client, "jobseeker@gmail.com", "123456")
    return {"Authorization": f"Bearer {token}"}
