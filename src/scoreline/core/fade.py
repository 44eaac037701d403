"""Opacity fades and faded text swaps bound to a cancellation scope."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from scoreline.core.scope import Outcome
from scoreline.limits import FADE_FRAME_MS

if TYPE_CHECKING:
    from scoreline.core.clock import Clock
    from scoreline.core.scope import CancellationScope
    from scoreline.core.surface import RenderSurface

logger = logging.getLogger(__name__)


class FadeAnimator:
    """Steps element opacity on a fixed frame interval.

    Each element has at most one owning fade: starting a new fade on an element
    retires the previous one at its next step, so two transitions never write
    the same element's opacity.
    """

    def __init__(
        self,
        surface: RenderSurface,
        clock: Clock,
        *,
        frame_interval: float = FADE_FRAME_MS,
    ) -> None:
        self.surface = surface
        self.clock = clock
        self.frame_interval = frame_interval
        self._owners: dict[str, object] = {}

    def is_fading(self, element_id: str) -> bool:
        return element_id in self._owners

    async def fade_to(
        self,
        element_id: str,
        target: float,
        duration: float,
        scope: CancellationScope,
    ) -> Outcome:
        """Move opacity to ``target`` over ``duration`` ms.

        Returns CANCELLED without touching the element again once ``scope`` is
        inactive or a newer fade has claimed the element.
        """
        if not scope.is_active():
            return Outcome.CANCELLED

        token = object()
        self._owners[element_id] = token
        try:
            if duration <= 0:
                self.surface.set_opacity(element_id, target)
                return Outcome.COMPLETED

            start = self.surface.get_opacity(element_id)
            steps = max(1, math.ceil(duration / self.frame_interval))
            step_delay = duration / steps
            for step in range(1, steps + 1):
                outcome = await scope.hold(self.clock, step_delay)
                if outcome is Outcome.CANCELLED or self._owners.get(element_id) is not token:
                    return Outcome.CANCELLED
                opacity = target if step == steps else start + (target - start) * step / steps
                self.surface.set_opacity(element_id, opacity)
            return Outcome.COMPLETED
        finally:
            if self._owners.get(element_id) is token:
                del self._owners[element_id]

    async def reveal(self, element_id: str, duration: float, scope: CancellationScope) -> Outcome:
        """Bring an element back to full opacity if a cut-short fade left it dimmed."""
        if not scope.is_active():
            return Outcome.CANCELLED
        if self.surface.get_opacity(element_id) >= 1.0:
            return Outcome.COMPLETED
        return await self.fade_to(element_id, 1.0, duration, scope)

    async def set_text_with_fade(
        self,
        element_id: str,
        text: str,
        duration: float,
        scope: CancellationScope,
    ) -> Outcome:
        """Swap an element's text behind a fade out / fade in pair.

        Unchanged text is SKIPPED without any opacity call. A fully transparent
        element gets its text set directly.
        """
        if self.surface.get_text(element_id) == text:
            return Outcome.SKIPPED
        if not scope.is_active():
            return Outcome.CANCELLED

        if self.surface.is_hidden(element_id):
            self.surface.set_text(element_id, text)
            return Outcome.COMPLETED

        half = duration / 2
        if await self.fade_to(element_id, 0.0, half, scope) is Outcome.CANCELLED:
            logger.debug("Fade out of %s cancelled (generation %d)", element_id, scope.generation)
            return Outcome.CANCELLED

        self.surface.set_text(element_id, text)

        if not scope.is_active():
            return Outcome.CANCELLED
        return await self.fade_to(element_id, 1.0, half, scope)
