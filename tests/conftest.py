"""
Pytest configuration and core fixtures.

Every test gets its own in-memory SQLite database with the full schema and
foreign keys enforced. Requests made through ``client`` get a fresh session
per request, exactly like ``get_async_session`` in production, while tests
seed and inspect data through ``db_session`` or ``session_factory``.
"""

import os
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

TEST_PASSWORD = "P@ssw0rd1"


def pytest_configure(config):
    """Point the application at SQLite before anything imports settings."""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
    os.environ["SENTRY_DSN"] = ""
    os.environ.setdefault("PASSWORD_ITERATIONS", "1000")
    os.environ.setdefault("OTP_MAX_ATTEMPTS", "3")


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a private in-memory database with every table."""
    from app.core.db import Base, enable_sqlite_foreign_keys

    import app.core.db.models  # noqa: F401
    import app.apps.inventory.db.models  # noqa: F401

    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield test_engine
    finally:
        await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
        autobegin=True,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_gateway():
    """Replace outgoing email with mocks that report successful delivery."""
    from app.core.services.email_manager import EmailManagerService

    with patch.object(
        EmailManagerService,
        "send_otp_email",
        new_callable=AsyncMock,
        return_value=True,
    ) as send_otp, patch.object(
        EmailManagerService,
        "send_password_reset_email",
        new_callable=AsyncMock,
        return_value=True,
    ) as send_reset:
        yield SimpleNamespace(
            send_otp_email=send_otp, send_password_reset_email=send_reset
        )


@pytest.fixture
def app():
    """Create FastAPI application for testing."""
    from app.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
async def client(
    app, session_factory: async_sessionmaker[AsyncSession], email_gateway
) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client bound to the test database."""
    from app.core.dependencies import get_async_session

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_session

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_async_session, None)


async def create_account(
    session: AsyncSession,
    email: str = "testuser@example.com",
    username: str = "testuser123",
    password: str = TEST_PASSWORD,
    confirmed: bool = True,
):
    from app.core.db.models import Account
    from app.core.services.password_hasher import password_hasher

    account = Account(
        email=email,
        username=username,
        password_hash=password_hasher.hash(password),
        confirmed=confirmed,
    )
    session.add(account)
    await session.commit()
    return account


@pytest.fixture
def make_account(db_session: AsyncSession):
    async def _make(**kwargs):
        return await create_account(db_session, **kwargs)

    return _make


@pytest.fixture
def make_pending(db_session: AsyncSession):
    """Store a pending registration, optionally already expired."""
    from app.core.db.crud import pending_registration_db
    from app.core.services.password_hasher import password_hasher
    from app.core.utils import expiry_from_now

    async def _make(
        email: str = "a@x.com",
        username: str = "alice123456",
        password: str = TEST_PASSWORD,
        expires_in_minutes: int = 30,
    ):
        return await pending_registration_db.create(
            db_session,
            data={
                "email": email,
                "username": username,
                "password_hash": password_hasher.hash(password),
                "expires_at": expiry_from_now(expires_in_minutes),
            },
        )

    return _make


@pytest.fixture
async def test_account(db_session: AsyncSession):
    return await create_account(db_session)


@pytest.fixture
async def other_account(db_session: AsyncSession):
    return await create_account(
        db_session, email="other@example.com", username="otheruser123"
    )


@pytest.fixture
async def auth_headers(test_account) -> dict[str, str]:
    """Generate authentication headers for the test account."""
    from app.core.services.tokens import jwt_issuer

    return {"Authorization": f"Bearer {jwt_issuer.issue(test_account)}"}


@pytest.fixture
async def other_auth_headers(other_account) -> dict[str, str]:
    from app.core.services.tokens import jwt_issuer

    return {"Authorization": f"Bearer {jwt_issuer.issue(other_account)}"}


@pytest.fixture
async def authenticated_client(
    client: AsyncClient,
    auth_headers: dict[str, str],
) -> AsyncClient:
    """Provide authenticated async client."""
    client.headers.update(auth_headers)
    return client
