"""Debug logging with in-app viewer support.

Direct ``log`` calls and ``scoreline.*`` logging records land in one bounded
buffer. The overlay shows it on F12 and ``scoreline run --log-file`` writes it
out when the overlay exits.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from scoreline.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterator


class LogSource(Enum):
    DIRECT = "DIRECT"
    LOGGING = "LOGGING"


@dataclass(slots=True)
class LogEntry:
    """A captured log entry."""

    group: str  # Level name (DEBUG, INFO, WARNING, ERROR)
    message: str
    timestamp: float
    source: LogSource

    def format_line(self) -> str:
        ts = datetime.fromtimestamp(self.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        origin = "[PY]" if self.source is LogSource.LOGGING else "[SL]"
        return f"{ts} {origin} [{self.group}] {self.message}"


class LogBuffer:
    """Ring buffer of log entries with a generation bumped on every clear.

    Viewers remember how many entries they have shown and the generation they
    saw; a changed generation or a shrunken buffer means they must redraw.
    """

    def __init__(self, maxlen: int = MAX_LOG_LINES) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=maxlen)
        self.generation = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self._entries[index]

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def clear(self) -> None:
        self._entries.clear()
        self.generation += 1

    def entries_after(self, seen: int) -> list[LogEntry]:
        """Entries past the first ``seen``; everything when the buffer wrapped."""
        if seen > len(self._entries):
            seen = 0
        return list(self._entries)[seen:]

    def export(self, file_path: str | Path) -> int:
        """Write every entry to ``file_path`` and return how many were written."""
        output_path = Path(file_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        entries = list(self._entries)
        with output_path.open("w", encoding="utf-8") as f:
            f.write("# Scoreline Debug Log Export\n")
            f.write(f"# Total entries: {len(entries)}\n")
            f.write(f"# Buffer generation: {self.generation}\n")
            f.write("# " + "=" * 76 + "\n\n")
            for entry in entries:
                f.write(entry.format_line() + "\n")
        return len(entries)


log_buffer = LogBuffer()


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


class ScorelineLogger:
    """Structured logger: positional text plus ``key=value`` fields.

    ``log.warning("Skipping poll", request=3)`` records
    ``Skipping poll request=3`` and forwards it to Textual's devtools console.
    """

    def __call__(self, *args: object, **kwargs: Any) -> None:
        self.info(*args, **kwargs)

    def _log(self, level: str, *args: object, **kwargs: Any) -> None:
        parts = [str(arg) for arg in args]
        parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
        output = _truncate(" ".join(parts))

        log_buffer.append(LogEntry(level, output, time.time(), LogSource.DIRECT))

        from textual import log as textual_log

        textual_log(output)

    def debug(self, *args: object, **kwargs: Any) -> None:
        self._log("DEBUG", *args, **kwargs)

    def info(self, *args: object, **kwargs: Any) -> None:
        self._log("INFO", *args, **kwargs)

    def warning(self, *args: object, **kwargs: Any) -> None:
        self._log("WARNING", *args, **kwargs)

    def error(self, *args: object, **kwargs: Any) -> None:
        self._log("ERROR", *args, **kwargs)


class DebugLogHandler(logging.Handler):
    """Copies logging records into the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = _truncate(self.format(record))
            log_buffer.append(LogEntry(record.levelname, message, record.created, LogSource.LOGGING))
        except Exception:
            self.handleError(record)


_debug_logging_initialized: bool = False


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Attach the buffer handler to the ``scoreline`` logger.

    Idempotent: later calls have no effect.
    """
    global _debug_logging_initialized

    if _debug_logging_initialized:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger("scoreline")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    _debug_logging_initialized = True
    log.info("Debug logging initialized - press F12 to view logs")


def clear_log_buffer() -> None:
    log_buffer.clear()


def get_buffer_generation() -> int:
    return log_buffer.generation


def export_logs_to_file(file_path: str | Path) -> int:
    return log_buffer.export(file_path)


log = ScorelineLogger()
