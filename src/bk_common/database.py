"""Process-wide database handle with an explicit lazy-init-once lifecycle.

The engine is created on first use, verified with ``SELECT 1`` and reused by
every later call. If the store is briefly unreachable, ``connect()`` retries
the *connection* (never the business operation) with linear backoff. A
connection invalidated mid-request marks the handle stale so the next call
re-verifies before handing out sessions.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings
from src.bk_common.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models across modules."""

    pass


class DatabaseHandle:
    def __init__(
        self,
        url: str,
        retries: int = 3,
        backoff_seconds: float = 0.5,
        echo: bool = False,
    ) -> None:
        self._url = url
        self._retries = max(1, retries)
        self._backoff_seconds = backoff_seconds
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._ready = False
        self._connect_lock = asyncio.Lock()

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self._url,
                echo=self._echo,
                pool_size=20,
                max_overflow=10,
                pool_pre_ping=True,
            )
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._engine

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def connect(self) -> AsyncEngine:
        """Ensure the engine exists and the store answers. Idempotent once ready."""
        if self._ready:
            return self.engine
        async with self._connect_lock:
            if self._ready:
                return self.engine
            last_error: Exception | None = None
            for attempt in range(1, self._retries + 1):
                try:
                    async with self.engine.connect() as conn:
                        await conn.execute(text("SELECT 1"))
                except (OperationalError, OSError) as exc:
                    last_error = exc
                    logger.warning(
                        "Database connect attempt %d/%d failed: %s",
                        attempt, self._retries, exc,
                    )
                    await self.engine.dispose()
                    if attempt < self._retries:
                        await asyncio.sleep(self._backoff_seconds * attempt)
                    continue
                self._ready = True
                logger.info("Database connection established")
                return self.engine
        raise DatabaseUnavailableError(f"Database unavailable: {last_error}")

    def mark_stale(self) -> None:
        self._ready = False

    def session(self) -> AsyncSession:
        _ = self.engine
        assert self._session_factory is not None
        return self._session_factory()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._ready = False


db_handle = DatabaseHandle(
    settings.DATABASE_URL,
    retries=settings.DB_CONNECT_RETRIES,
    backoff_seconds=settings.DB_CONNECT_BACKOFF_SECONDS,
    echo=settings.DEBUG,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    await db_handle.connect()
    async with db_handle.session() as session:
        try:
            yield session
        except DBAPIError as exc:
            if exc.connection_invalidated:
                db_handle.mark_stale()
            raise
