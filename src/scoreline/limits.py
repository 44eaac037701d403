"""Numeric limits, default timings and timeouts - no circular dependencies."""

from __future__ import annotations

# All animation timings are in milliseconds.
FADE_FRAME_MS = 20.0
"""Interval between opacity steps of a fade (50 FPS)."""

DEFAULT_UPDATE_INTERVAL_MS = 1000
DEFAULT_MAIN_LANGUAGE_MS = 5000
DEFAULT_SUB_LANGUAGE_MS = 5000
DEFAULT_FADE_MS = 1000

FETCH_TIMEOUT = 5.0
SHUTDOWN_TIMEOUT = 5.0

MAX_LOG_MESSAGE_LENGTH = 4096
MAX_LOG_LINES = 2000
