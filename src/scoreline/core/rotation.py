"""Perpetual main/sub text rotation for a single field."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scoreline.core.models import RotationState
from scoreline.core.scope import Outcome

if TYPE_CHECKING:
    from scoreline.core.fade import FadeAnimator
    from scoreline.core.models import RotationConfig
    from scoreline.core.scope import CancellationScope

logger = logging.getLogger(__name__)


class RotationLoop:
    """Alternates one element between a main and a sub text until its scope ends.

    Each phase costs one full fade plus its hold, so a cycle lasts
    ``config.period``. A phase whose text is already shown still pays the fade
    as a hold, keeping the period stable when main and sub are identical.
    """

    def __init__(
        self,
        element_id: str,
        config: RotationConfig,
        animator: FadeAnimator,
        scope: CancellationScope,
        *,
        initial: RotationState = RotationState.MAIN_VISIBLE,
    ) -> None:
        self.element_id = element_id
        self.config = config
        self.scope = scope
        self.initial = initial
        self.state: RotationState | None = None
        self.cycles = 0
        self._animator = animator

    def __repr__(self) -> str:
        return (
            f"<RotationLoop {self.element_id} state={self.state} "
            f"generation={self.scope.generation}>"
        )

    async def run(self) -> None:
        phase = self.initial
        while self.scope.is_active():
            if await self._enter(phase) is Outcome.CANCELLED:
                break
            hold = self.config.hold_for(phase)
            if hold <= 0 and self.config.fade_duration <= 0:
                # Nothing else in the phase suspends; one frame keeps the loop yielding.
                hold = self._animator.frame_interval
            if await self.scope.hold(self._animator.clock, hold) is Outcome.CANCELLED:
                break
            if phase is not self.initial:
                self.cycles += 1
            phase = phase.other
        logger.debug("Rotation of %s stopped at generation %d", self.element_id, self.scope.generation)

    async def _enter(self, phase: RotationState) -> Outcome:
        """Show the phase text and make sure the element ends up visible."""
        animator = self._animator
        surface = animator.surface
        fade = self.config.fade_duration
        text = self.config.text_for(phase)

        outcome = await animator.set_text_with_fade(self.element_id, text, fade, self.scope)
        if outcome is Outcome.CANCELLED:
            return outcome

        if outcome is Outcome.SKIPPED and surface.get_opacity(self.element_id) >= 1.0:
            self.state = phase
            return await self.scope.hold(animator.clock, fade)

        self.state = phase
        return await animator.reveal(self.element_id, fade / 2, self.scope)
