"""
Shared fixtures: in-memory SQLite database and an HTTP client bound to it.
"""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.dependencies import db_session, get_auth_settings
from config.settings import AuthSettings
from database.models import Base

TEST_SECRET = "test-secret"


@pytest.fixture
def auth_settings() -> AuthSettings:
    # bcrypt's minimum cost keeps the suite fast
    return AuthSettings(jwt_secret=TEST_SECRET, token_ttl_seconds=86400, bcrypt_rounds=4)


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def app(session_factory, auth_settings):
    from main import create_app

    application = create_app()

    async def _test_db_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    application.dependency_overrides[db_session] = _test_db_session
    application.dependency_overrides[get_auth_settings] = lambda: auth_settings
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
