"""Modal screens."""

from __future__ import annotations

from scoreline.ui.modals.debug_log import DebugLogModal

__all__ = ["DebugLogModal"]
