"""Unit tests for DatabaseHandle connection retry and lifecycle."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.bk_common import database
from src.bk_common.database import DatabaseHandle
from src.bk_common.errors import DatabaseUnavailableError


class _Conn:
    async def __aenter__(self) -> "_Conn":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def execute(self, statement) -> None:
        return None


class _FlakyEngine:
    """Fails the first ``failures`` connects, then answers."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.connects = 0
        self.disposals = 0

    def connect(self) -> _Conn:
        self.connects += 1
        if self.connects <= self.failures:
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))
        return _Conn()

    async def dispose(self) -> None:
        self.disposals += 1


@pytest.fixture
def engine_factory(monkeypatch):
    def install(failures: int) -> _FlakyEngine:
        engine = _FlakyEngine(failures)
        monkeypatch.setattr(database, "create_async_engine", lambda *a, **kw: engine)
        monkeypatch.setattr(database, "async_sessionmaker", MagicMock())
        return engine

    return install


async def test_connects_first_time(engine_factory) -> None:
    engine = engine_factory(0)
    handle = DatabaseHandle("postgresql+asyncpg://x", retries=3, backoff_seconds=0)

    await handle.connect()

    assert handle.is_ready
    assert engine.connects == 1


async def test_retries_until_reachable(engine_factory) -> None:
    engine = engine_factory(2)
    handle = DatabaseHandle("postgresql+asyncpg://x", retries=3, backoff_seconds=0)

    await handle.connect()

    assert handle.is_ready
    assert engine.connects == 3
    assert engine.disposals == 2


async def test_gives_up_after_retries(engine_factory) -> None:
    engine = engine_factory(5)
    handle = DatabaseHandle("postgresql+asyncpg://x", retries=3, backoff_seconds=0)

    with pytest.raises(DatabaseUnavailableError) as exc_info:
        await handle.connect()

    assert exc_info.value.http_status == 503
    assert engine.connects == 3
    assert not handle.is_ready


async def test_idempotent_once_ready(engine_factory) -> None:
    engine = engine_factory(0)
    handle = DatabaseHandle("postgresql+asyncpg://x", backoff_seconds=0)

    await handle.connect()
    await handle.connect()

    assert engine.connects == 1


async def test_stale_handle_reverifies(engine_factory) -> None:
    engine = engine_factory(0)
    handle = DatabaseHandle("postgresql+asyncpg://x", backoff_seconds=0)
    await handle.connect()

    handle.mark_stale()
    await handle.connect()

    assert engine.connects == 2


async def test_dispose_resets(engine_factory) -> None:
    engine_factory(0)
    handle = DatabaseHandle("postgresql+asyncpg://x", backoff_seconds=0)
    await handle.connect()

    await handle.dispose()

    assert not handle.is_ready
