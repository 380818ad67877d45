"""Pytest configuration and fixtures for cascade.

Each test gets a fresh file-backed SQLite database (aiosqlite). HTTP tests
run app.main:app through httpx ASGITransport with get_db and
get_db_transactional overridden to use that database. Environment is set
before any app import so Settings validation passes.
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="cascade-storage-")
os.environ["REFRESH_COOKIE_SECURE"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.persistence import models  # noqa: E402,F401
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from app.main import app  # noqa: E402

limiter.enabled = False

PASSWORD = "CorrectHorse42!"


@pytest.fixture
async def engine(tmp_path):
    """Async engine on a throwaway SQLite file with all tables created."""
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'cascade.db'}", poolclass=NullPool
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session for repository/service tests. Rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(session_factory) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) bound to the test database."""

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login_user(client: AsyncClient):
    """Log in and return bearer headers."""

    async def _login(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
def register_user(client: AsyncClient, login_user):
    """Register a user, log in and return bearer headers."""

    async def _register(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "first_name": "Test",
                "last_name": "User",
                "email": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return await login_user(email, password)

    return _register


@pytest.fixture
def make_company(client: AsyncClient):
    """Create a company; return its creation data and headers with the new token."""

    async def _make(
        headers: dict[str, str], name: str = "Acme"
    ) -> tuple[dict, dict[str, str]]:
        response = await client.post(
            "/api/v1/companies", json={"name": name}, headers=headers
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data, {"Authorization": f"Bearer {data['access_token']}"}

    return _make


@pytest.fixture
async def admin(register_user, make_company) -> dict:
    """A registered user who created a company (and so is its COMPANY_ADMIN)."""
    headers = await register_user("admin@example.com")
    company, headers = await make_company(headers)
    return {
        "headers": headers,
        "company_id": company["company"]["id"],
        "department_id": company["department_id"],
        "admin_role_id": company["admin_role_id"],
    }
