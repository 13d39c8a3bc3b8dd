"""TokenTransformer: ERC-20 legs grouped by transaction hash, with swap detection.

Runs first in a conversion so that it claims fees and hashes of swaps (and of native-paid
token receipts) before the native transformer can report the same transaction again.
"""

import logging
from typing import Iterable, Mapping, NamedTuple

from chainledger.domain.enums import LedgerType, TokenGroupKind
from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.transformers.base import BaseTransformer, TransformResult
from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.fees import claim_fee
from chainledger.parser.utils.fields import format_amount
from chainledger.parser.utils.rows import make_deposit, make_trade, make_withdrawal
from chainledger.parser.utils.transfers import group_by_tx_hash, parse_token_rows
from chainledger.parser.utils.types import Address, ParsedNativeTx, ParsedTokenTransfer, TxHash, is_zero_address

logger = logging.getLogger(__name__)


class ClassifiedTransfers(NamedTuple):
    outgoing: list[ParsedTokenTransfer]
    incoming: list[ParsedTokenTransfer]

    @property
    def kind(self) -> TokenGroupKind:
        if len(self.outgoing) == 1 and len(self.incoming) == 1:
            return TokenGroupKind.SWAP
        if self.outgoing and self.incoming:
            return TokenGroupKind.MULTI_LEG_SWAP
        if self.outgoing or self.incoming:
            return TokenGroupKind.TRANSFERS
        return TokenGroupKind.EMPTY


def classify_transfers(transfers: list[ParsedTokenTransfer], address: Address) -> ClassifiedTransfers:
    """Split one hash's legs into the user's outgoing and incoming legs. Order is preserved."""
    outgoing = [
        t for t in transfers
        if t.from_address == address and t.to_address != address and not is_zero_address(t.from_address)
    ]
    incoming = [t for t in transfers if t.to_address == address and t.from_address != address]
    return ClassifiedTransfers(outgoing, incoming)


class TokenTransformer(BaseTransformer):
    TRANSFORMER_NAME = "TokenTransformer"

    def transform(self, rows: Iterable[Mapping[str, str]], context: TransformContext) -> TransformResult:
        result: list[CoinTrackingRow] = []
        processed: set[TxHash] = set()

        for tx_hash, legs in group_by_tx_hash(parse_token_rows(rows)).items():
            classified = classify_transfers(legs, context.config.address)
            group_rows = self.transform_group(classified, context.native_tx(tx_hash), context)
            if group_rows:
                processed.add(tx_hash)
                result.extend(group_rows)
            else:
                logger.debug("No user legs in token transfers of %s", tx_hash)

        return self._make_result(result, processed)

    def transform_group(
        self,
        classified: ClassifiedTransfers,
        native_tx: ParsedNativeTx | None,
        context: TransformContext,
    ) -> list[CoinTrackingRow]:
        kind = classified.kind

        if kind is TokenGroupKind.SWAP:
            return [self._swap_row(classified.outgoing[0], classified.incoming[0], context)]

        if kind is TokenGroupKind.MULTI_LEG_SWAP:
            # Routed swap: first leg out, last leg in. Intermediate legs are absorbed.
            return [self._swap_row(classified.outgoing[0], classified.incoming[-1], context)]

        rows: list[CoinTrackingRow] = []
        for transfer in classified.incoming:
            if native_tx is not None and native_tx.value_out > 0:
                rows.append(self._native_trade_row(transfer, native_tx, context))
            else:
                rows.append(self._deposit_row(transfer, context))
        for transfer in classified.outgoing:
            rows.append(self._withdrawal_row(transfer, context))
        return rows

    # --- Row builders ---

    def _swap_row(
        self, outgoing: ParsedTokenTransfer, incoming: ParsedTokenTransfer, context: TransformContext
    ) -> CoinTrackingRow:
        return make_trade(
            buy=(format_amount(incoming.value), incoming.symbol),
            sell=(format_amount(outgoing.value), outgoing.symbol),
            fee=claim_fee(context, outgoing.tx_hash),
            exchange=context.config.exchange,
            comment=f"Swap {outgoing.tx_hash}",
            date=outgoing.date_time,
        )

    def _native_trade_row(
        self, incoming: ParsedTokenTransfer, native_tx: ParsedNativeTx, context: TransformContext
    ) -> CoinTrackingRow:
        """Token received in a transaction that also paid out native currency: a purchase."""
        label = "NFT mint (trade)" if is_zero_address(incoming.from_address) else "NFT purchase (trade)"
        return make_trade(
            buy=(format_amount(incoming.value), incoming.symbol),
            sell=(format_amount(native_tx.value_out), context.config.native_symbol),
            fee=claim_fee(context, incoming.tx_hash),
            exchange=context.config.exchange,
            comment=f"{label} {incoming.tx_hash}",
            date=incoming.date_time,
        )

    def _deposit_row(self, transfer: ParsedTokenTransfer, context: TransformContext) -> CoinTrackingRow:
        ledger_type = LedgerType.AIRDROP if is_zero_address(transfer.from_address) else LedgerType.DEPOSIT
        return make_deposit(
            format_amount(transfer.value),
            transfer.symbol,
            claim_fee(context, transfer.tx_hash),
            context.config.exchange,
            f"Token in {transfer.tx_hash}",
            transfer.date_time,
            ledger_type=ledger_type,
        )

    def _withdrawal_row(self, transfer: ParsedTokenTransfer, context: TransformContext) -> CoinTrackingRow:
        verb = "burn" if is_zero_address(transfer.to_address) else "out"
        return make_withdrawal(
            format_amount(transfer.value),
            transfer.symbol,
            claim_fee(context, transfer.tx_hash),
            context.config.exchange,
            f"Token {verb} {transfer.tx_hash}",
            transfer.date_time,
        )
