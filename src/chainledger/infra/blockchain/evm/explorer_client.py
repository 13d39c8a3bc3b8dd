"""Client for Etherscan-compatible explorer APIs (Etherscan, Blockscout, Mantle explorer, ...)."""

import logging
from dataclasses import dataclass
from typing import Any

from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from chainledger.exceptions import ExternalServiceError, UnknownChainError
from chainledger.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 10_000  # explorer max results per call


@dataclass(frozen=True)
class ExplorerChain:
    api_url: str
    native_symbol: str


KNOWN_CHAINS: dict[str, ExplorerChain] = {
    "zora": ExplorerChain("https://explorer.zora.energy/api", "ETH"),
    "ethereum": ExplorerChain("https://api.etherscan.io/api", "ETH"),
    "base": ExplorerChain("https://api.basescan.org/api", "ETH"),
    "optimism": ExplorerChain("https://api-optimistic.etherscan.io/api", "ETH"),
    "arbitrum": ExplorerChain("https://api.arbiscan.io/api", "ETH"),
    "polygon": ExplorerChain("https://api.polygonscan.com/api", "POL"),
    "mantle": ExplorerChain("https://explorer.mantle.xyz/api", "MNT"),
}


def resolve_chain(chain: str, api_url: str | None = None, native_symbol: str | None = None) -> ExplorerChain:
    """Explicit URL/symbol win over the known-chain table."""
    known = KNOWN_CHAINS.get(chain.lower())
    url = api_url or (known.api_url if known else None)
    if not url:
        raise UnknownChainError(
            f"Unknown chain {chain!r}. Provide an API URL or use one of: {', '.join(KNOWN_CHAINS)}"
        )
    symbol = native_symbol or (known.native_symbol if known else "ETH")
    return ExplorerChain(api_url=url, native_symbol=symbol)


class ExplorerClient:
    def __init__(self, api_url: str, http_client: RateLimitedClient, api_key: str = "") -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._http = http_client

    async def close(self) -> None:
        await self._http.close()

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call(self, params: dict[str, Any]) -> list[dict]:
        if self._api_key:
            params = {**params, "apikey": self._api_key}
        resp = await self._http.get(self._api_url, params=params)
        if resp.status_code >= 400:
            raise ExternalServiceError(f"Explorer request failed: HTTP {resp.status_code}")
        data = resp.json()

        status = data.get("status")
        message = data.get("message", "")
        result = data.get("result")

        # "No transactions found" is a valid empty result
        if message.startswith("No transactions found") or (status == "0" and result == []):
            return []

        # Rate limit or server error → retriable
        if message == "NOTOK" or status is None:
            raise ExternalServiceError(f"Explorer error: {data.get('result', message)}")

        if status == "0":
            error_msg = result if isinstance(result, str) else message
            raise ExternalServiceError(f"Explorer API error: {error_msg}")

        if not isinstance(result, list):
            return []

        return result

    async def _fetch_all_pages(self, action: str, address: str) -> list[dict]:
        results: list[dict] = []
        page = 1
        while True:
            batch = await self._call({
                "module": "account",
                "action": action,
                "address": address,
                "startblock": 0,
                "endblock": 99999999,
                "sort": "asc",
                "page": page,
                "offset": PAGE_SIZE,
            })
            logger.info("Fetched %s page %d: %d results", action, page, len(batch))
            results.extend(batch)
            if len(batch) < PAGE_SIZE:
                return results
            page += 1

    async def get_transactions(self, address: str) -> list[dict]:
        return await self._fetch_all_pages("txlist", address)

    async def get_erc20_transfers(self, address: str) -> list[dict]:
        return await self._fetch_all_pages("tokentx", address)

    async def get_internal_transactions(self, address: str) -> list[dict]:
        return await self._fetch_all_pages("txlistinternal", address)

    async def get_erc721_transfers(self, address: str) -> list[dict]:
        return await self._fetch_all_pages("tokennfttx", address)

    async def get_erc1155_transfers(self, address: str) -> list[dict]:
        return await self._fetch_all_pages("token1155tx", address)
