import asyncio
import time

import httpx

USER_AGENT = "chainledger/0.1"


class RateLimitedClient:
    """Async HTTP client that spaces requests at least 1/rate seconds apart.

    Public explorer APIs without a key allow a handful of calls per second; paging through
    a busy wallet easily exceeds that.
    """

    def __init__(self, rate_per_second: float = 2.0, timeout: float = 30.0) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(timeout=timeout, headers={"User-Agent": USER_AGENT})

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._wait_for_slot()
        return await self._client.get(url, params=params)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
