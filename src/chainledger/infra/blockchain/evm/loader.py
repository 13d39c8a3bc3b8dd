"""Fetch every export category for a wallet and assemble pipeline inputs."""

import logging

from chainledger.infra.blockchain.evm import export_rows
from chainledger.infra.blockchain.evm.explorer_client import ExplorerClient
from chainledger.parser.pipeline import ConversionInputs

logger = logging.getLogger(__name__)


class ExplorerLoader:
    def __init__(self, client: ExplorerClient) -> None:
        self._client = client

    async def load(self, address: str, native_symbol: str) -> ConversionInputs:
        native = await self._client.get_transactions(address)
        tokens = await self._client.get_erc20_transfers(address)
        internal = await self._client.get_internal_transactions(address)
        nft721 = await self._client.get_erc721_transfers(address)
        nft1155 = await self._client.get_erc1155_transfers(address)

        logger.info(
            "Fetched %s: %d native, %d token, %d internal, %d ERC-721, %d ERC-1155",
            address, len(native), len(tokens), len(internal), len(nft721), len(nft1155),
        )
        return ConversionInputs(
            native=export_rows.native_rows(native, address, native_symbol),
            tokens=export_rows.token_rows(tokens),
            internal=export_rows.internal_rows(internal, address, native_symbol),
            nft721=export_rows.nft_rows(nft721, is_erc1155=False),
            nft1155=export_rows.nft_rows(nft1155, is_erc1155=True),
        )
