"""HTTP snapshot source."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import httpx

from scoreline.errors import FetchError
from scoreline.feed.base import parse_snapshot
from scoreline.limits import FETCH_TIMEOUT

if TYPE_CHECKING:
    from scoreline.core.models import Snapshot


class HttpSnapshotSource:
    """GETs the StreamControl JSON with a cache-busting ``v`` parameter."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = FETCH_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def location(self) -> str:
        return self._url

    async def fetch(self) -> Snapshot:
        try:
            response = await self._client.get(
                self._url, params={"v": str(int(time.time() * 1000))}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(self._url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(self._url, str(exc) or type(exc).__name__) from exc
        return parse_snapshot(response.content, self._url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
