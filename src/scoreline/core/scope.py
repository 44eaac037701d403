"""Cancellation scopes: one per accepted update generation.

A scope is the only thing a running fade or rotation consults to learn that it
has become stale. Cancelling a scope wakes every hold bound to it, so stale work
stops at its next suspension point instead of after its full delay.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scoreline.core.clock import Clock


class Outcome(Enum):
    """Result of a cancellable animation primitive."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


def _resolve(waiter: asyncio.Future[Outcome], outcome: Outcome) -> None:
    if not waiter.done():
        waiter.set_result(outcome)


class CancellationScope:
    """Lifetime token for one update generation.

    Transitions active -> inactive exactly once and never back.
    """

    __slots__ = ("_active", "_waiters", "generation")

    def __init__(self, generation: int = 0) -> None:
        self.generation = generation
        self._active = True
        self._waiters: set[asyncio.Future[Outcome]] = set()

    @classmethod
    def create(cls, generation: int = 0) -> CancellationScope:
        return cls(generation)

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"<CancellationScope generation={self.generation} {state}>"

    def is_active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Deactivate the scope and wake every pending hold with CANCELLED."""
        if not self._active:
            return
        self._active = False
        for waiter in list(self._waiters):
            _resolve(waiter, Outcome.CANCELLED)
        self._waiters.clear()

    async def hold(self, clock: Clock, delay: float) -> Outcome:
        """Wait ``delay`` milliseconds unless the scope is cancelled first.

        The scope is re-checked on resumption: a timer that fired in the same
        loop iteration as ``cancel()`` still reports CANCELLED.
        """
        if not self._active:
            return Outcome.CANCELLED
        if delay <= 0:
            return Outcome.COMPLETED

        waiter: asyncio.Future[Outcome] = asyncio.get_running_loop().create_future()
        handle = clock.call_later(delay, lambda: _resolve(waiter, Outcome.COMPLETED))
        self._waiters.add(waiter)
        try:
            outcome = await waiter
        finally:
            handle.cancel()
            self._waiters.discard(waiter)
        return outcome if self._active else Outcome.CANCELLED


class ScopeFactory:
    """Hands out scopes with increasing generation numbers."""

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def create(self) -> CancellationScope:
        self._generation += 1
        return CancellationScope(self._generation)
