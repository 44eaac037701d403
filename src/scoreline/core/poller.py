"""Fixed-interval snapshot polling with timestamp diffing."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from scoreline.core.scope import CancellationScope, Outcome
from scoreline.debug_log import log
from scoreline.errors import FetchError
from scoreline.utils.background_tasks import BackgroundTasks

if TYPE_CHECKING:
    from scoreline.core.clock import Clock
    from scoreline.core.models import Snapshot
    from scoreline.core.presenter import Presenter
    from scoreline.feed.base import SnapshotSource


class DataPoller:
    """Fetches snapshots every ``interval`` ms and forwards changed ones.

    Fetches may overlap when the feed is slower than the interval. Every fetch
    takes a request number; a response older than the newest accepted one is
    dropped so a slow request can never roll the overlay back.
    """

    def __init__(
        self,
        source: SnapshotSource,
        presenter: Presenter,
        *,
        interval: float,
        clock: Clock,
        tasks: BackgroundTasks | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._source = source
        self._presenter = presenter
        self._interval = interval
        self._clock = clock
        self._tasks = tasks or BackgroundTasks()
        self._scope = CancellationScope.create()
        self._requests = itertools.count(1)
        self._newest_response = 0
        self._last: Snapshot | None = None

    @property
    def last_snapshot(self) -> Snapshot | None:
        return self._last

    @property
    def running(self) -> bool:
        return self._scope.is_active()

    async def poll_once(self) -> bool:
        """Run one fetch; return True when a snapshot reached the presenter."""
        request_id = next(self._requests)
        try:
            snapshot = await self._source.fetch()
        except FetchError as exc:
            log.warning("Skipping poll", request=request_id, error=str(exc))
            return False

        if request_id < self._newest_response:
            log.debug("Dropping stale response", request=request_id, newest=self._newest_response)
            return False
        self._newest_response = request_id

        if self._last is not None and self._last.timestamp == snapshot.timestamp:
            return False
        self._last = snapshot

        if self._presenter.initialized:
            await self._presenter.update(snapshot)
        else:
            await self._presenter.initialize(snapshot)
        return True

    async def run(self) -> None:
        """Poll until ``stop()``; the first delivery is awaited before ticking."""
        while self._scope.is_active() and not self._presenter.initialized:
            if await self.poll_once():
                break
            if await self._scope.hold(self._clock, self._interval) is Outcome.CANCELLED:
                return

        while self._scope.is_active():
            if await self._scope.hold(self._clock, self._interval) is Outcome.CANCELLED:
                return
            self._tasks.spawn(self.poll_once(), name="poll")

    async def stop(self) -> None:
        self._scope.cancel()
        await self._tasks.cancel_all()
