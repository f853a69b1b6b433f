"""
Shared test fixtures.

Every test gets its own SQLite database file (aiosqlite driver) and a
low bcrypt cost so password hashing stays fast.
"""

from typing import Any, AsyncIterator, Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.auth import PasswordHasher, TokenService
from app.api.config import Settings
from app.api.db import (
    ExpenseStore,
    UserStore,
    create_engine,
    create_schema,
    create_session_factory,
)
from app.api.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


# ============================================================================
# SETTINGS / STORAGE
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'expenses.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        service_env="test",
        db_timeout_seconds=5.0,
    )


@pytest.fixture
async def sessions(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(settings)
    await create_schema(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def expense_store(sessions, settings: Settings) -> ExpenseStore:
    return ExpenseStore(sessions, settings.db_timeout_seconds)


@pytest.fixture
def user_store(sessions, settings: Settings) -> UserStore:
    return UserStore(sessions, settings.db_timeout_seconds)


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest.fixture
def hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(settings.bcrypt_rounds)


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def signup(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register and log in a user; returns the login body plus ready-made headers."""

    def _signup(email: str = "alice@example.com", password: str = "s3cret-pass") -> dict[str, Any]:
        registered = client.post("/users/register", json={"email": email, "password": password})
        assert registered.status_code == 201, registered.text
        login = client.post("/users/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return _signup
