"""Render surface contract the animation core draws on."""

from __future__ import annotations

from typing import Protocol


class RenderSurface(Protocol):
    """Narrow element-level API provided by the rendering layer.

    Elements are addressed by id; ``set_display`` takes a CSS-style selector so
    the layout toggle can show or hide whole groups at once. Fades are stepped
    by the core through ``set_opacity`` so each frame can observe cancellation.
    """

    def get_text(self, element_id: str) -> str: ...

    def set_text(self, element_id: str, text: str) -> None: ...

    def get_opacity(self, element_id: str) -> float: ...

    def set_opacity(self, element_id: str, opacity: float) -> None: ...

    def is_hidden(self, element_id: str) -> bool:
        """True when the element is fully transparent."""
        ...

    def switch_class(self, element_id: str, remove: str, add: str) -> None: ...

    def set_display(self, selector: str, visible: bool) -> None: ...

    def play_entrance(self, duration: float) -> None:
        """Start the one-shot start-up effect (fire and forget)."""
        ...
