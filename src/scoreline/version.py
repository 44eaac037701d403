"""Installed package version."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "scoreline"


@lru_cache(maxsize=1)
def get_scoreline_version() -> str:
    """Version from package metadata; ``dev`` for an uninstalled checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "dev"
