"""InternalTransformer: native value moved by contract execution."""

import logging
from typing import Iterable, Mapping

from chainledger.domain.enums import InternalTxKind
from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.transformers.base import BaseTransformer, TransformResult
from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.fees import claim_fee
from chainledger.parser.utils.fields import format_amount
from chainledger.parser.utils.rows import make_deposit, make_withdrawal
from chainledger.parser.utils.transfers import parse_internal_rows
from chainledger.parser.utils.types import Address, ParsedInternalTx, ParsedNativeTx

logger = logging.getLogger(__name__)


def is_duplicate_of_native(tx: ParsedInternalTx, native_tx: ParsedNativeTx | None, address: Address) -> bool:
    """Some explorers repeat a transaction's top-level transfer in the internal feed.

    Same hash, same direction and exactly equal value means the native export already has it.
    """
    if native_tx is None:
        return False
    if tx.to_address == address and native_tx.value_in > 0 and native_tx.value_in == tx.value_in:
        return True
    if tx.from_address == address and native_tx.value_out > 0 and native_tx.value_out == tx.value_out:
        return True
    return False


def classify_internal_tx(tx: ParsedInternalTx, native_tx: ParsedNativeTx | None, address: Address) -> InternalTxKind:
    if tx.value_in == 0 and tx.value_out == 0:
        return InternalTxKind.SKIP
    if is_duplicate_of_native(tx, native_tx, address):
        return InternalTxKind.DUPLICATE
    if tx.value_in > 0 and tx.to_address == address and tx.from_address != address:
        return InternalTxKind.DEPOSIT
    if tx.value_out > 0 and tx.from_address == address:
        return InternalTxKind.WITHDRAWAL
    return InternalTxKind.UNCLASSIFIED


class InternalTransformer(BaseTransformer):
    TRANSFORMER_NAME = "InternalTransformer"

    def transform(self, rows: Iterable[Mapping[str, str]], context: TransformContext) -> TransformResult:
        result: list[CoinTrackingRow] = []
        for tx in parse_internal_rows(rows):
            row = self.transform_tx(tx, context)
            if row is not None:
                result.append(row)
        return self._make_result(result)

    def transform_tx(self, tx: ParsedInternalTx, context: TransformContext) -> CoinTrackingRow | None:
        native_tx = context.native_tx(tx.tx_hash)
        kind = classify_internal_tx(tx, native_tx, context.config.address)

        if kind is InternalTxKind.DUPLICATE:
            logger.debug("Internal tx %s already reported by native export", tx.tx_hash)
            return None
        if kind not in (InternalTxKind.DEPOSIT, InternalTxKind.WITHDRAWAL):
            return None

        config = context.config
        fee = claim_fee(context, tx.tx_hash)
        if kind is InternalTxKind.DEPOSIT:
            return make_deposit(
                format_amount(tx.value_in), config.native_symbol, fee, config.exchange,
                f"Internal in {tx.tx_hash}", tx.date_time,
            )
        return make_withdrawal(
            format_amount(tx.value_out), config.native_symbol, fee, config.exchange,
            f"Internal out {tx.tx_hash}", tx.date_time,
        )
