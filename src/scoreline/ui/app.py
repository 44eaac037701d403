"""Main scoreline overlay application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Label, Static

from scoreline.core.clock import AsyncioClock
from scoreline.core.poller import DataPoller
from scoreline.core.presenter import PLAYERS, Presenter
from scoreline.debug_log import setup_debug_logging
from scoreline.feed.base import open_source
from scoreline.keybindings import APP_BINDINGS
from scoreline.ui.modals.debug_log import DebugLogModal
from scoreline.ui.surface import TextualSurface

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from scoreline.config import ScorelineConfig
    from scoreline.core.clock import Clock
    from scoreline.feed.base import SnapshotSource


class OverlayApp(App):
    """Match overlay: event header plus two player rows over a background layer."""

    TITLE = "scoreline"
    CSS_PATH = "styles/overlay.tcss"

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: ScorelineConfig,
        *,
        source: SnapshotSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.source = source or open_source(
            config.general.data_url, timeout=config.general.request_timeout
        )
        self._clock = clock or AsyncioClock()
        self.surface: TextualSurface | None = None
        self.presenter: Presenter | None = None
        self.poller: DataPoller | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="header"):
            yield Label("", id="event")
        with Container(id="players"):
            with Horizontal(id="player-background"):
                yield Static(classes="player-background")
                yield Static(classes="player-background-wide")
                yield Static(classes="score-background")
            with Vertical(id="player-text"):
                for player in PLAYERS:
                    with Horizontal(id=f"player{player}-row", classes="player-row"):
                        yield Label("", id=f"player{player}-name", classes="name-text")
                        with Container(id=f"player{player}-score-outer", classes="score-outer"):
                            yield Label("", id=f"player{player}-score", classes="score-text")

    async def on_mount(self) -> None:
        setup_debug_logging()

        self.surface = TextualSurface(self.screen)
        self.presenter = Presenter(
            self.surface,
            self.config.durations.to_durations(),
            clock=self._clock,
        )
        self.poller = DataPoller(
            self.source,
            self.presenter,
            interval=self.config.general.update_interval,
            clock=self._clock,
        )
        self.log("Polling snapshots", source=self.source.location)
        self.run_worker(self.poller.run(), name="poller", exclusive=True, exit_on_error=False)

    async def stop_overlay(self) -> None:
        """Stop polling and every running animation."""
        if self.poller is not None:
            await self.poller.stop()
        if self.presenter is not None:
            await self.presenter.shutdown()
        await self.source.aclose()

    async def action_quit(self) -> None:
        await self.stop_overlay()
        self.exit()

    def action_toggle_debug_log(self) -> None:
        if isinstance(self.screen, DebugLogModal):
            self.screen.dismiss(None)
            return
        self.push_screen(DebugLogModal())
