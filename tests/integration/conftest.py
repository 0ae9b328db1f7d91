"""Integration-test fixtures.

Runs against a real PostgreSQL with migrations applied (alembic upgrade head).
Opt-in: set INTEGRATION_DATABASE_URL, otherwise every test here is skipped.
All tests share one session-scoped event loop so the engine pool stays valid.
"""

import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

INTEGRATION_DATABASE_URL = os.environ.get("INTEGRATION_DATABASE_URL", "")


def pytest_collection_modifyitems(config, items) -> None:
    if INTEGRATION_DATABASE_URL:
        return
    skip = pytest.mark.skip(reason="INTEGRATION_DATABASE_URL not set")
    for item in items:
        if "tests/integration" in str(item.fspath).replace(os.sep, "/"):
            item.add_marker(skip)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def engine() -> AsyncEngine:
    eng = create_async_engine(INTEGRATION_DATABASE_URL, pool_size=5)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)
