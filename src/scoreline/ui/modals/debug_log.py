"""F12 log viewer for the running overlay."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Label, RichLog, Rule

from scoreline.debug_log import LogEntry, LogSource, clear_log_buffer, export_logs_to_file, log_buffer
from scoreline.keybindings import DEBUG_LOG_BINDINGS
from scoreline.paths import get_debug_log_path

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.timer import Timer


LEVEL_COLORS = {
    "DEBUG": "dim",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}
PROBLEM_LEVELS = frozenset({"WARNING", "ERROR", "CRITICAL"})
REFRESH_INTERVAL = 0.5


class DebugLogModal(ModalScreen[None]):
    """Tails the debug buffer: poll failures, override changes, task errors."""

    BINDINGS = DEBUG_LOG_BINDINGS

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._seen = 0
        self._generation = log_buffer.generation
        self.problems_only = False
        self._refresh_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="debug-log-container"):
            yield Label("Overlay Log", classes="modal-title")
            yield Label(
                "[dim]F12/Escape close | w warnings only | c clear | s save[/dim]",
                classes="modal-subtitle",
            )
            yield Rule()
            yield RichLog(id="debug-log", highlight=True, markup=True, auto_scroll=True, wrap=True)
        yield Footer()

    def on_mount(self) -> None:
        self._refresh()
        self._refresh_timer = self.set_interval(REFRESH_INTERVAL, self._refresh)

    def on_unmount(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
            self._refresh_timer = None

    @property
    def _view(self) -> RichLog:
        return self.query_one("#debug-log", RichLog)

    def _redraw(self) -> None:
        self._seen = 0
        self._generation = log_buffer.generation
        self._view.clear()
        self._refresh()

    def _refresh(self) -> None:
        if log_buffer.generation != self._generation or len(log_buffer) < self._seen:
            self._seen = 0
            self._generation = log_buffer.generation
            self._view.clear()

        view = self._view
        for entry in log_buffer.entries_after(self._seen):
            if self.problems_only and entry.group not in PROBLEM_LEVELS:
                continue
            view.write(self._format(entry))
        self._seen = len(log_buffer)

    @staticmethod
    def _format(entry: LogEntry) -> str:
        ts = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M:%S")
        color = LEVEL_COLORS.get(entry.group, "white")
        origin = " [PY]" if entry.source is LogSource.LOGGING else ""
        return f"[{color}]{ts} [{entry.group}]{origin}[/{color}] {entry.message}"

    def action_close(self) -> None:
        self.dismiss(None)

    def action_toggle_problems(self) -> None:
        self.problems_only = not self.problems_only
        self._redraw()

    def action_clear_logs(self) -> None:
        clear_log_buffer()
        self._redraw()
        self._view.write("[dim]Logs cleared[/dim]")

    def action_save_logs(self) -> None:
        log_path = get_debug_log_path()
        try:
            count = export_logs_to_file(log_path)
        except OSError as e:
            self._view.write(f"[red]✗ Failed to export logs: {e}[/red]")
            return
        self._view.write(f"[green]✓ Exported {count} log entries to {log_path}[/green]")
