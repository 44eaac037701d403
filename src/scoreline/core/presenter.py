"""Presenter: turns accepted snapshots into scoped fades and rotations."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

from scoreline.core.fade import FadeAnimator
from scoreline.core.models import RotationConfig, RotationState, ScoreVisibility
from scoreline.core.rotation import RotationLoop
from scoreline.core.scope import CancellationScope, Outcome, ScopeFactory
from scoreline.debug_log import log
from scoreline.utils.background_tasks import BackgroundTasks

if TYPE_CHECKING:
    from collections.abc import Mapping

    from scoreline.core.clock import Clock
    from scoreline.core.models import Durations, Snapshot
    from scoreline.core.surface import RenderSurface


STATIC_FIELDS: tuple[tuple[str, str], ...] = (
    ("event", "match_event"),
    ("player1-score", "match_player1_score"),
    ("player2-score", "match_player2_score"),
)
ROTATING_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("player1-name", "match_player1_name_main", "match_player1_name_sub"),
    ("player2-name", "match_player2_name_main", "match_player2_name_sub"),
)
LAYOUT_LAYERS: tuple[str, ...] = ("player-background", "player-text")
PLAYERS: tuple[int, ...] = (1, 2)


class Presenter:
    """Owns the current update generation and the global layout mode.

    ``update`` cancels the previous generation before anything of the new one
    starts, so two generations never animate the same field concurrently.
    """

    def __init__(
        self,
        surface: RenderSurface,
        durations: Durations,
        *,
        clock: Clock,
        animator: FadeAnimator | None = None,
        tasks: BackgroundTasks | None = None,
    ) -> None:
        self._surface = surface
        self._clock = clock
        self._durations = replace(durations)
        self._animator = animator or FadeAnimator(surface, clock)
        self._tasks = tasks or BackgroundTasks()
        self._scopes = ScopeFactory()
        self._scope: CancellationScope | None = None
        # Layout toggles and the entrance wait outlive update generations.
        self._lifetime = CancellationScope.create()
        self._rotations: dict[str, RotationLoop] = {}
        self._score_visibility = ScoreVisibility.VISIBLE
        self._layout_lock = asyncio.Lock()
        self.initialized = False
        self.layout_toggles = 0

    @property
    def durations(self) -> Durations:
        return self._durations

    @property
    def scope(self) -> CancellationScope | None:
        return self._scope

    @property
    def rotations(self) -> Mapping[str, RotationLoop]:
        return self._rotations

    @property
    def score_visibility(self) -> ScoreVisibility:
        return self._score_visibility

    async def initialize(self, snapshot: Snapshot) -> None:
        """Play the entrance effect once, then apply the first snapshot."""
        if not self.initialized:
            self._durations.apply_overrides(snapshot)
            fade = self._durations.fade
            self._surface.play_entrance(fade)
            await self._lifetime.hold(self._clock, fade)
            self.initialized = True
            log.info("Overlay initialized", timestamp=snapshot.timestamp)
        await self.update(snapshot)

    async def update(self, snapshot: Snapshot) -> None:
        """Apply a snapshot whose timestamp differs from the last one."""
        if changed := self._durations.apply_overrides(snapshot):
            log.info("Durations overridden", fields=changed, durations=self._durations)

        if self._scope is not None:
            self._scope.cancel()
        scope = self._scope = self._scopes.create()
        fade = self._durations.fade
        log.debug("Applying snapshot", timestamp=snapshot.timestamp, generation=scope.generation)

        for element_id, attr in STATIC_FIELDS:
            self._tasks.spawn(
                self._show_static(element_id, getattr(snapshot, attr), fade, scope),
                name=f"text:{element_id}:{scope.generation}",
            )

        for element_id, main_attr, sub_attr in ROTATING_FIELDS:
            config = RotationConfig(
                main_text=getattr(snapshot, main_attr),
                sub_text=getattr(snapshot, sub_attr),
                main_duration=self._durations.main_language,
                sub_duration=self._durations.sub_language,
                fade_duration=fade,
            )
            self._start_rotation(element_id, config, scope)

        await self._apply_score_visibility(snapshot.score_visibility)

    async def shutdown(self) -> None:
        """Stop every animation, including a running layout toggle."""
        if self._scope is not None:
            self._scope.cancel()
        self._lifetime.cancel()
        await self._tasks.cancel_all()
        self._rotations.clear()

    async def _show_static(
        self, element_id: str, text: str, fade: float, scope: CancellationScope
    ) -> Outcome:
        # A previous generation may have been cut mid-fade; finish at full opacity.
        outcome = await self._animator.set_text_with_fade(element_id, text, fade, scope)
        if outcome is Outcome.CANCELLED:
            return outcome
        return await self._animator.reveal(element_id, fade / 2, scope)

    def _start_rotation(
        self, element_id: str, config: RotationConfig, scope: CancellationScope
    ) -> None:
        initial = RotationState.MAIN_VISIBLE
        previous = self._rotations.get(element_id)
        if (
            previous is not None
            and previous.state is not None
            and previous.config.main_text == config.main_text
            and previous.config.sub_text == config.sub_text
        ):
            # Same texts: continue from the phase on screen instead of snapping back.
            initial = previous.state

        loop = RotationLoop(element_id, config, self._animator, scope, initial=initial)
        self._rotations[element_id] = loop
        self._tasks.spawn(loop.run(), name=f"rotation:{element_id}:{scope.generation}")

    async def _apply_score_visibility(self, requested: ScoreVisibility | None) -> None:
        if requested is None or requested == self._score_visibility:
            return
        self._score_visibility = requested
        self.layout_toggles += 1
        log.info("Score visibility changed", mode=requested.name)

        # Toggles are never cancelled by updates; a second change queues here.
        async with self._layout_lock:
            half = self._durations.fade / 2
            if await self._fade_layers(0.0, half) is Outcome.CANCELLED:
                return
            self._swap_layout(requested)
            await self._fade_layers(1.0, half)

    async def _fade_layers(self, target: float, duration: float) -> Outcome:
        outcomes = await asyncio.gather(
            *(
                self._animator.fade_to(layer, target, duration, self._lifetime)
                for layer in LAYOUT_LAYERS
            )
        )
        if Outcome.CANCELLED in outcomes:
            return Outcome.CANCELLED
        return Outcome.COMPLETED

    def _swap_layout(self, mode: ScoreVisibility) -> None:
        visible = mode is ScoreVisibility.VISIBLE
        surface = self._surface
        surface.set_display(".player-background", visible)
        surface.set_display(".player-background-wide", not visible)
        surface.set_display(".score-background", visible)
        for player in PLAYERS:
            name_id = f"player{player}-name"
            if visible:
                surface.switch_class(name_id, "name-text-wide", "name-text")
            else:
                surface.switch_class(name_id, "name-text", "name-text-wide")
            surface.set_display(f"#player{player}-score-outer", visible)
