"""Snapshot feeds."""

from __future__ import annotations

from scoreline.errors import FetchError
from scoreline.feed.base import SnapshotSource, open_source, parse_snapshot
from scoreline.feed.file_source import FileSnapshotSource
from scoreline.feed.http_source import HttpSnapshotSource

__all__ = [
    "FetchError",
    "FileSnapshotSource",
    "HttpSnapshotSource",
    "SnapshotSource",
    "open_source",
    "parse_snapshot",
]
