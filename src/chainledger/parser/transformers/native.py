"""NativeTransformer: top-level native currency transfers and fee-only calls."""

import logging
from collections.abc import Set
from typing import Iterable, Mapping

from chainledger.domain.enums import LedgerType, NativeTxKind
from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.transformers.base import BaseTransformer, TransformResult
from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.fees import NO_FEE, claim_fee
from chainledger.parser.utils.fields import format_amount
from chainledger.parser.utils.rows import make_deposit, make_row, make_withdrawal
from chainledger.parser.utils.transfers import parse_native_rows
from chainledger.parser.utils.types import Address, ParsedNativeTx, TxHash

logger = logging.getLogger(__name__)


def classify_native_tx(tx: ParsedNativeTx, address: Address) -> NativeTxKind:
    """First match wins."""
    if tx.value_in == 0 and tx.value_out == 0 and tx.fee == 0:
        return NativeTxKind.SKIP

    is_self = tx.from_address == address and tx.to_address == address
    is_incoming = tx.to_address == address and tx.from_address != address
    is_outgoing = tx.from_address == address

    if tx.value_in > 0 and is_self:
        # Some L2 bridges credit deposits as a self-transfer
        return NativeTxKind.BRIDGE_DEPOSIT
    if tx.value_in > 0 and is_incoming:
        return NativeTxKind.DEPOSIT
    if tx.value_out > 0 and is_outgoing:
        return NativeTxKind.WITHDRAWAL
    if tx.value_in == 0 and tx.value_out == 0 and tx.fee > 0:
        return NativeTxKind.FEE_ONLY
    return NativeTxKind.UNCLASSIFIED


class NativeTransformer(BaseTransformer):
    TRANSFORMER_NAME = "NativeTransformer"

    def __init__(self, skip_hashes: Set[TxHash] = frozenset()) -> None:
        self._skip_hashes = skip_hashes

    def transform(self, rows: Iterable[Mapping[str, str]], context: TransformContext) -> TransformResult:
        result: list[CoinTrackingRow] = []
        for tx in parse_native_rows(rows):
            if tx.tx_hash in self._skip_hashes:
                continue
            row = self.transform_tx(tx, context)
            if row is not None:
                result.append(row)
        return self._make_result(result)

    def transform_tx(self, tx: ParsedNativeTx, context: TransformContext) -> CoinTrackingRow | None:
        kind = classify_native_tx(tx, context.config.address)
        if kind in (NativeTxKind.SKIP, NativeTxKind.UNCLASSIFIED):
            if kind is NativeTxKind.UNCLASSIFIED:
                logger.debug("Dropping unclassified native tx %s", tx.tx_hash)
            return None
        return self._build_row(kind, tx, context)

    def _build_row(self, kind: NativeTxKind, tx: ParsedNativeTx, context: TransformContext) -> CoinTrackingRow:
        config = context.config
        symbol = config.native_symbol

        if kind is NativeTxKind.FEE_ONLY:
            # CoinTracking has no fee without a principal; the fee is reported as the sale itself.
            context.fee_ledger.mark(tx.tx_hash)
            comment = f"{tx.method} {tx.tx_hash}" if tx.method else f"Fee {tx.tx_hash}"
            return make_row(
                LedgerType.OTHER_FEE,
                sell=(format_amount(tx.fee), symbol),
                fee=NO_FEE,
                exchange=config.exchange,
                comment=comment,
                date=tx.date_time,
            )

        fee = claim_fee(context, tx.tx_hash, tx.fee)

        if kind is NativeTxKind.BRIDGE_DEPOSIT:
            return make_deposit(
                format_amount(tx.value_in), symbol, fee, config.exchange, f"Bridge deposit {tx.tx_hash}", tx.date_time
            )
        if kind is NativeTxKind.DEPOSIT:
            return make_deposit(
                format_amount(tx.value_in), symbol, fee, config.exchange, f"Native in {tx.tx_hash}", tx.date_time
            )

        comment = f"{tx.method} {tx.tx_hash}" if tx.method else f"Native out {tx.tx_hash}"
        return make_withdrawal(format_amount(tx.value_out), symbol, fee, config.exchange, comment, tx.date_time)
