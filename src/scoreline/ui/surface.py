"""Render surface backed by Textual widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Label, Static

if TYPE_CHECKING:
    from textual.dom import DOMNode
    from textual.widget import Widget


class TextualSurface:
    """Maps element ids onto widgets below ``root``.

    Text is tracked here rather than read back from widgets, so the surface is
    the single record of what each element last displayed.
    """

    def __init__(self, root: DOMNode) -> None:
        self._root = root
        self._texts: dict[str, str] = {}

    def _widget(self, element_id: str) -> Widget:
        return self._root.query_one(f"#{element_id}")

    def get_text(self, element_id: str) -> str:
        return self._texts.get(element_id, "")

    def set_text(self, element_id: str, text: str) -> None:
        widget = self._widget(element_id)
        if isinstance(widget, (Label, Static)):
            widget.update(text)
        self._texts[element_id] = text

    def get_opacity(self, element_id: str) -> float:
        return float(self._widget(element_id).styles.opacity)

    def set_opacity(self, element_id: str, opacity: float) -> None:
        self._widget(element_id).styles.opacity = min(1.0, max(0.0, opacity))

    def is_hidden(self, element_id: str) -> bool:
        return self.get_opacity(element_id) <= 0.0

    def switch_class(self, element_id: str, remove: str, add: str) -> None:
        widget = self._widget(element_id)
        widget.remove_class(remove)
        widget.add_class(add)

    def set_display(self, selector: str, visible: bool) -> None:
        for widget in self._root.query(selector):
            widget.display = visible

    def play_entrance(self, duration: float) -> None:
        self._widget("header").styles.animate("opacity", value=1.0, duration=duration / 1000)
