import os

# Settings are read at import time, so the test environment goes first
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-with-enough-entropy-1234567890")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CURRENT_ENVIRONMENT"] = "dev"
os.environ["LOG_TO_FILE"] = "false"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from faker import Faker  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import repos  # noqa: E402
from app.core.auth import get_password_hash  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.db import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base, User  # noqa: E402
from app.schemas import UserCreateDB  # noqa: E402
from app.services.rate_limiter import login_rate_limiter  # noqa: E402
from app.services.token_service import token_service  # noqa: E402

DEFAULT_PASSWORD = "P@ssword123"


@pytest.fixture(scope="session")
def pre_hashed_password():
    """Pre-compute the hashed password once for all tests to avoid repeated argon2 operations."""
    return get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_login_rate_limiter():
    """The login limiter is process wide; every test starts with a clean slate."""
    login_rate_limiter.clear()
    yield
    login_rate_limiter.clear()


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """In-memory SQLite database shared by every connection of one test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(test_engine, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def test_app(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[FastAPI, None]:
    """FastAPI application whose database session points at the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def faker() -> Faker:
    """Create a Faker instance for generating test data."""
    return Faker()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for a test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def user(db_session: AsyncSession, faker: Faker, pre_hashed_password: str) -> User:
    """Create a test user."""
    user_data = UserCreateDB(
        name=faker.name(),
        email=faker.unique.safe_email(),
        hashed_password=pre_hashed_password,
    )
    return await repos.UserRepo(db_session).create_one(user_data)


@pytest.fixture
async def other_user(db_session: AsyncSession, faker: Faker, pre_hashed_password: str) -> User:
    """Create another test user."""
    user_data = UserCreateDB(
        name=faker.name(),
        email=faker.unique.safe_email(),
        hashed_password=pre_hashed_password,
    )
    return await repos.UserRepo(db_session).create_one(user_data)


@pytest.fixture
async def default_password() -> str:
    return DEFAULT_PASSWORD


@pytest.fixture
async def token(user: User) -> str:
    """Create a valid bearer token for the test user."""
    return token_service.issue(user.id, user.email, settings.jwt_secret)


@pytest.fixture
async def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
