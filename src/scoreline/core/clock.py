"""Injectable time source for the animation core (milliseconds)."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Minimal scheduler surface used by scopes, fades and the poller."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` after ``delay`` milliseconds."""
        ...


class AsyncioClock:
    """Clock backed by the running asyncio event loop."""

    def now(self) -> float:
        return asyncio.get_running_loop().time() * 1000.0

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(max(delay, 0.0) / 1000.0, callback)
