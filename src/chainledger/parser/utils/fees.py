"""Fee attribution: the only place a hash's gas fee is turned into Fee/FeeCurrency values."""

from decimal import Decimal
from typing import NamedTuple

from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.fields import format_amount
from chainledger.parser.utils.types import TxHash


class FeeColumns(NamedTuple):
    amount: str = ""
    currency: str = ""


NO_FEE = FeeColumns()


def claim_fee(context: TransformContext, tx_hash: TxHash, fee: Decimal | None = None) -> FeeColumns:
    """Fee columns for a row about tx_hash; empty unless this call wins the ledger claim.

    ``fee`` defaults to the correlated native transaction's fee. A zero fee is never claimed,
    so a later row for the same hash is not blocked by an empty attribution.
    """
    if fee is None:
        native_tx = context.native_tx(tx_hash)
        fee = native_tx.fee if native_tx is not None else Decimal(0)
    if fee <= 0:
        return NO_FEE
    if not context.fee_ledger.claim(tx_hash):
        return NO_FEE
    return FeeColumns(format_amount(fee), context.config.native_symbol)
