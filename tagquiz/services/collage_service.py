import asyncio
import logging
from typing import Optional

import aiohttp

from tagquiz.services.errors import DownstreamUnavailable

# 2x2 collage
TILES = 4
GRID = (2, 2)


class CollageService:
    """Client for the image service that composes a collage for a tag."""

    def __init__(
        self, base_url: str, api_key: Optional[str] = None, timeout: float = 30.0
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def fetch(self, tag: str, count: int = TILES) -> bytes:
        """
        Get a composed image for the tag.

        Returns:
            bytes: encoded image, passed through unmodified

        Raises:
            DownstreamUnavailable: on HTTP errors, timeouts or an empty body
        """
        rows, cols = GRID
        params = {"tag": tag, "count": str(count), "rows": str(rows), "cols": str(cols)}
        if self.api_key:
            params["client_id"] = self.api_key

        try:
            async with self._get_session().get(self.base_url, params=params) as resp:
                if resp.status != 200:
                    raise DownstreamUnavailable("image", f"bad status: {resp.status}")
                body = await resp.read()
        except aiohttp.ClientError as e:
            raise DownstreamUnavailable("image", str(e)) from e
        except asyncio.TimeoutError as e:
            raise DownstreamUnavailable("image", "timeout") from e

        if not body:
            raise DownstreamUnavailable("image", "empty body")
        logging.debug(f"Collage for {tag!r}: {len(body)} bytes")
        return body

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
