"""Detached (fire-and-forget) tasks.

The caller never awaits the result; completion and failure are observable
through logging only. References are kept until the task finishes so the
event loop does not garbage-collect a running task.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)

_pending: set[asyncio.Task[Any]] = set()


def _on_done(task: asyncio.Task[Any]) -> None:
    _pending.discard(task)
    if task.cancelled():
        logger.warning("Detached task %s was cancelled", task.get_name())
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Detached task %s failed: %s", task.get_name(), exc)
    else:
        logger.info("Detached task %s completed", task.get_name())


def spawn_detached(coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
    task = asyncio.create_task(coro, name=name)
    _pending.add(task)
    task.add_done_callback(_on_done)
    return task


async def drain_detached(timeout: float | None = None) -> None:
    """Wait for outstanding detached tasks (used on shutdown and in tests)."""
    if not _pending:
        return
    await asyncio.wait(set(_pending), timeout=timeout)
