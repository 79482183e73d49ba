"""Test fixtures and configuration."""

import logging
import os
import sys
from collections.abc import Callable

# Point the application at SQLite before taskflow.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["ENVIRONMENT"] = "testing"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import structlog  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from taskflow import database  # noqa: E402
from taskflow.database import Base, enable_sqlite_foreign_keys  # noqa: E402
from taskflow.models import User  # noqa: E402
from taskflow.security import issue_token  # noqa: E402
from tests.factories import UserFactory  # noqa: E402


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys/caplog capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


@pytest.fixture
def test_database_url(tmp_path) -> str:
    """Fresh SQLite file per test unless TEST_DATABASE_URL points elsewhere."""
    return os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'taskflow_test.db'}"


@pytest_asyncio.fixture
async def db_engine(test_database_url):
    """Create a test database engine with an empty schema.

    NullPool gives every session its own connection, so data committed by
    the API is visible to the test session and vice versa.
    """
    engine = create_async_engine(test_database_url, echo=False, poolclass=NullPool)
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(autouse=True)
async def patch_database_connection(db_engine):
    """Override global database session maker to use test engine."""
    test_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    previous = database.set_test_session_maker(test_maker)
    yield
    database.set_test_session_maker(previous)


@pytest_asyncio.fixture
async def db(db_engine):
    """Session for arranging and inspecting data directly.

    Commit before calling the API so request sessions can see the rows.
    """
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def test_user(db) -> User:
    """Committed user owning the default client's token."""
    user = await UserFactory.create_async(db, full_name="Test User", email="test.user@example.com")
    await db.commit()
    return user


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build bearer headers for any user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(user.email)}"}

    return _headers


@pytest_asyncio.fixture
async def public_client():
    """Create async test client without auth headers."""
    from taskflow.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def client(test_user, auth_headers):
    """Create async test client authenticated as test_user."""
    from taskflow.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers(test_user),
    ) as client:
        yield client
