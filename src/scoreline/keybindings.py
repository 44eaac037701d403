"""Overlay keybindings, as plain Textual ``Binding`` lists."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit"),
    Binding("f12", "toggle_debug_log", "Debug", show=False),
]

# The modal swallows f12 so the app-level toggle only ever opens it.
DEBUG_LOG_BINDINGS: list[BindingType] = [
    Binding("escape", "close", "Close"),
    Binding("f12", "close", "Close", show=False),
    Binding("w", "toggle_problems", "Warnings"),
    Binding("c", "clear_logs", "Clear"),
    Binding("s", "save_logs", "Save"),
]
