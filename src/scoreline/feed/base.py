"""Snapshot source abstraction and JSON decoding."""

from __future__ import annotations

import json
from typing import Protocol
from urllib.parse import urlparse

from pydantic import ValidationError

from scoreline.core.models import Snapshot
from scoreline.errors import FetchError


class SnapshotSource(Protocol):
    """A source of timestamped snapshots."""

    @property
    def location(self) -> str: ...

    async def fetch(self) -> Snapshot:
        """Return the current snapshot or raise FetchError."""
        ...

    async def aclose(self) -> None: ...


def parse_snapshot(payload: str | bytes, location: str) -> Snapshot:
    """Decode a StreamControl JSON document, mapping failures to FetchError."""
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FetchError(location, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise FetchError(location, "expected a JSON object")
    try:
        return Snapshot.model_validate(data)
    except ValidationError as exc:
        raise FetchError(location, f"invalid snapshot: {exc.error_count()} error(s)") from exc


def open_source(location: str, *, timeout: float | None = None) -> SnapshotSource:
    """Pick an HTTP or file source from the location's scheme."""
    from scoreline.feed.file_source import FileSnapshotSource
    from scoreline.feed.http_source import HttpSnapshotSource
    from scoreline.limits import FETCH_TIMEOUT

    scheme = urlparse(location).scheme.lower()
    if scheme in ("http", "https"):
        return HttpSnapshotSource(location, timeout=timeout or FETCH_TIMEOUT)
    return FileSnapshotSource(location)
