"""Shared test fixtures."""

import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

TEST_DB_PATH = Path(tempfile.gettempdir()) / "storefront_test.db"

# Mock auth and a throwaway SQLite file unless the caller points elsewhere
os.environ.setdefault("AUTH_MOCK", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{TEST_DB_PATH}")
os.environ.setdefault("BASE_DOMAIN", "loukify.website")
os.environ.setdefault("S3_BUCKET", "test-bucket")

import storefront.models  # noqa: E402, F401
from storefront.core.config import settings  # noqa: E402
from storefront.db.base import Base  # noqa: E402
from storefront.db.session import engine as app_engine  # noqa: E402
from storefront.main import app  # noqa: E402


async def _recreate_schema() -> None:
    engine = create_async_engine(settings.DATABASE_URL, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def database_schema() -> None:
    """Build the schema from the ORM metadata once per test session."""
    asyncio.run(_recreate_schema())


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Async DB session with transaction rollback after each test.

    Do not combine with ``client`` writes in the same test: SQLite holds the
    write lock for the lifetime of this session's transaction.
    """
    engine = create_async_engine(settings.DATABASE_URL, poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app.

    Data committed by the app persists across tests, so tests use unique
    subs, emails and subdomains and never assert global empty state.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    await app_engine.dispose()
