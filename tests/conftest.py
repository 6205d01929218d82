import os
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from filmorate_api.core.config import settings
from filmorate_api.db.postgres import (
    close_engine,
    get_sessionmaker,
    init_schema,
)
from filmorate_api.main import app

# in-memory SQLite: новая пустая база на каждый тест
TEST_DSN = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["DATABASE_DSN"] = TEST_DSN
    os.environ["SENTRY_DSN"] = ""  # отключаем Sentry
    settings.database_dsn = TEST_DSN
    settings.sentry_dsn = ""


@pytest.fixture
async def client():
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def session():
    """Bare AsyncSession over a fresh schema, for service-level tests."""
    await init_schema()
    try:
        async with get_sessionmaker()() as s:
            yield s
    finally:
        await close_engine()
