"""Shared fixtures: in-memory database, services and an HTTP client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from prepository.api.main import create_app
from prepository.core.config import get_settings
from prepository.core.security import TokenService
from prepository.models.database import close_db, create_tables, get_engine, init_db
from prepository.models.user import User
from prepository.services import StoryService, UserService


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh in-memory SQLite database per test."""
    init_db(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables()
    yield
    await close_db()


@pytest.fixture
async def session(database: None) -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSession(get_engine(), expire_on_commit=False) as session:
        yield session


@pytest.fixture
def story_service(session: AsyncSession) -> StoryService:
    return StoryService(session)


@pytest.fixture
def user_service(session: AsyncSession) -> UserService:
    return UserService(session)


@pytest.fixture
async def alice(user_service: UserService) -> User:
    return await user_service.signup("alice@b.com", "secret1")


@pytest.fixture
async def bob(user_service: UserService) -> User:
    return await user_service.signup("bob@b.com", "secret2")


@pytest.fixture
def token_service() -> TokenService:
    return TokenService("test-secret")


@pytest.fixture
async def client(database: None) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app sharing the test database."""
    app = create_app(get_settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def signup(client: AsyncClient, email: str, password: str = "secret1") -> dict:
    """Sign up through the API and return the JSON body."""
    response = await client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
