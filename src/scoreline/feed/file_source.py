"""Local file snapshot source (StreamControl writes its JSON to disk)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from scoreline.errors import FetchError
from scoreline.feed.base import parse_snapshot

if TYPE_CHECKING:
    from scoreline.core.models import Snapshot


class FileSnapshotSource:
    def __init__(self, path: str | Path) -> None:
        if isinstance(path, str) and path.startswith("file:"):
            path = unquote(urlparse(path).path)
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    async def fetch(self) -> Snapshot:
        try:
            payload = await asyncio.to_thread(self._path.read_bytes)
        except OSError as exc:
            raise FetchError(self.location, exc.strerror or str(exc)) from exc
        return parse_snapshot(payload, self.location)

    async def aclose(self) -> None:
        return None
