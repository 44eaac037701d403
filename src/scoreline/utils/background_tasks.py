"""Fire-and-forget asyncio tasks with failure logging."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from scoreline.limits import SHUTDOWN_TIMEOUT

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Keeps strong references to spawned tasks and logs their failures.

    A failing task is logged and dropped; it never propagates into the code
    that spawned it or into its siblings.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task failed: %s", task.get_name(), exc_info=exc)

    async def cancel_all(self, *, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        """Cancel every pending task and wait briefly for them to finish."""
        pending = [task for task in self._tasks if not task.done()]
        if not pending:
            return

        for task in pending:
            task.cancel()

        done, _pending = await asyncio.wait(pending, timeout=timeout)
        if done:
            await asyncio.gather(*done, return_exceptions=True)
