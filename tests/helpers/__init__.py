"""Test helpers package."""

from tests.helpers.clock import VirtualClock
from tests.helpers.surface import RecordingSurface, SurfaceEvent
from tests.helpers.wait import wait_for_text, wait_until

__all__ = ["RecordingSurface", "SurfaceEvent", "VirtualClock", "wait_for_text", "wait_until"]
