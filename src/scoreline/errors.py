"""Exception types shared across scoreline."""

from __future__ import annotations


class FetchError(Exception):
    """The snapshot feed was unavailable or returned something unusable."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class ConfigError(Exception):
    """The configuration file could not be read or validated."""
