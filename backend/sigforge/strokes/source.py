"""Per-character stroke data from hanzi-writer-data (https://github.com/chanind/hanzi-writer-data).

Each character file is JSON: {"strokes": [path, ...], "medians": [...]}, with
paths in a 1024-unit box, Y up.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from sigforge.engine.glyphs import is_cjk
from sigforge.strokes.cache import StrokeCache

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://cdn.jsdelivr.net/npm/hanzi-writer-data@2.0/data/{char}.json"
DEFAULT_TIMEOUT = 5.0


class HanziStrokeSource:
    """Async stroke lookup with an injected cache.

    Concurrent lookups for the same character share one in-flight request.
    Misses (non-OK responses, malformed payloads) are cached; transport
    errors are not, so a later request can retry.
    """

    def __init__(
        self,
        cache: StrokeCache | None = None,
        url_template: str = DEFAULT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cache = cache if cache is not None else StrokeCache()
        self.url_template = url_template
        self.timeout = timeout
        self._transport = transport
        self._inflight: dict[str, asyncio.Task[list[str] | None]] = {}

    async def lookup(self, char: str) -> list[str] | None:
        if not is_cjk(char):
            return None
        if char in self.cache:
            return self.cache.get(char)

        task = self._inflight.get(char)
        if task is None:
            task = asyncio.ensure_future(self._fetch(char))
            self._inflight[char] = task
            task.add_done_callback(lambda _t, c=char: self._inflight.pop(c, None))
        return await task

    async def _fetch(self, char: str) -> list[str] | None:
        url = self.url_template.format(char=char)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Stroke data request for %r failed: %s", char, e)
            return None

        if response.status_code != 200:
            logger.info("No stroke data for %r (HTTP %d)", char, response.status_code)
            self.cache.put(char, None)
            return None

        strokes = _parse_strokes(response)
        if strokes is None:
            logger.warning("Malformed stroke data for %r", char)
        self.cache.put(char, strokes)
        return strokes


def _parse_strokes(response: httpx.Response) -> list[str] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    strokes = data.get("strokes") if isinstance(data, dict) else None
    if not isinstance(strokes, list) or not strokes:
        return None
    if not all(isinstance(s, str) and s.strip() for s in strokes):
        return None
    return strokes
