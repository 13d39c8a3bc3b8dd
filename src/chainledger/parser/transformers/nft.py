"""NftTransformer: ERC-721 and ERC-1155 ownership transfers.

CoinTracking has no NFT concept, so each token is booked as its own currency
``NFT:{symbol}#{token_id}``.
"""

import logging
from typing import Iterable, Mapping

from chainledger.domain.enums import LedgerType, NftTransferKind
from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.transformers.base import BaseTransformer, TransformResult
from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.fees import claim_fee
from chainledger.parser.utils.fields import format_amount
from chainledger.parser.utils.rows import make_deposit, make_trade, make_withdrawal
from chainledger.parser.utils.transfers import parse_nft_rows
from chainledger.parser.utils.types import Address, ParsedNativeTx, ParsedNftTransfer, is_zero_address

logger = logging.getLogger(__name__)


def format_nft_currency(transfer: ParsedNftTransfer) -> str:
    return f"NFT:{transfer.token_symbol or 'NFT'}#{transfer.token_id}"


def classify_nft_transfer(
    transfer: ParsedNftTransfer, native_tx: ParsedNativeTx | None, address: Address
) -> NftTransferKind:
    if transfer.to_address == address and transfer.from_address != address:
        is_mint = is_zero_address(transfer.from_address)
        if native_tx is not None and native_tx.value_out > 0:
            return NftTransferKind.MINT_TRADE if is_mint else NftTransferKind.PURCHASE_TRADE
        return NftTransferKind.MINT if is_mint else NftTransferKind.DEPOSIT

    if transfer.from_address == address and transfer.to_address != address:
        return NftTransferKind.BURN if is_zero_address(transfer.to_address) else NftTransferKind.WITHDRAWAL

    return NftTransferKind.UNRELATED


_COMMENTS = {
    NftTransferKind.MINT_TRADE: "NFT mint (trade)",
    NftTransferKind.PURCHASE_TRADE: "NFT purchase (trade)",
    NftTransferKind.MINT: "NFT mint",
    NftTransferKind.DEPOSIT: "NFT in",
    NftTransferKind.BURN: "NFT burn",
    NftTransferKind.WITHDRAWAL: "NFT out",
}


class NftTransformer(BaseTransformer):
    """Shared logic; the two token standards differ only in where quantity comes from."""

    TRANSFORMER_NAME = "NftTransformer"
    IS_ERC1155: bool = False

    def transform(self, rows: Iterable[Mapping[str, str]], context: TransformContext) -> TransformResult:
        result: list[CoinTrackingRow] = []
        for transfer in parse_nft_rows(rows, self.IS_ERC1155):
            row = self.transform_transfer(transfer, context)
            if row is not None:
                result.append(row)
        return self._make_result(result)

    def transform_transfer(self, transfer: ParsedNftTransfer, context: TransformContext) -> CoinTrackingRow | None:
        native_tx = context.native_tx(transfer.tx_hash)
        kind = classify_nft_transfer(transfer, native_tx, context.config.address)
        if kind is NftTransferKind.UNRELATED:
            logger.debug("NFT transfer %s does not involve the wallet", transfer.tx_hash)
            return None

        config = context.config
        currency = format_nft_currency(transfer)
        quantity = format_amount(transfer.quantity)
        fee = claim_fee(context, transfer.tx_hash)
        comment = f"{_COMMENTS[kind]} {transfer.tx_hash}"

        if kind in (NftTransferKind.MINT_TRADE, NftTransferKind.PURCHASE_TRADE):
            return make_trade(
                buy=(quantity, currency),
                sell=(format_amount(native_tx.value_out), config.native_symbol),  # type: ignore[union-attr]
                fee=fee,
                exchange=config.exchange,
                comment=comment,
                date=transfer.date_time,
            )
        if kind is NftTransferKind.MINT:
            return make_deposit(quantity, currency, fee, config.exchange, comment, transfer.date_time, LedgerType.AIRDROP)
        if kind is NftTransferKind.DEPOSIT:
            return make_deposit(quantity, currency, fee, config.exchange, comment, transfer.date_time)
        if kind is NftTransferKind.BURN:
            return make_withdrawal(quantity, currency, fee, config.exchange, comment, transfer.date_time, LedgerType.LOST)
        return make_withdrawal(quantity, currency, fee, config.exchange, comment, transfer.date_time)


class Erc721Transformer(NftTransformer):
    TRANSFORMER_NAME = "Erc721Transformer"
    IS_ERC1155 = False


class Erc1155Transformer(NftTransformer):
    TRANSFORMER_NAME = "Erc1155Transformer"
    IS_ERC1155 = True
