"""Reusable builders for ledger rows.

Every builder takes already formatted amount strings; empty strings mean "not applicable".
"""

from chainledger.domain.enums import LedgerType
from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.utils.fees import NO_FEE, FeeColumns


def make_row(
    ledger_type: LedgerType,
    *,
    buy: tuple[str, str] = ("", ""),
    sell: tuple[str, str] = ("", ""),
    fee: FeeColumns = NO_FEE,
    exchange: str,
    comment: str,
    date: str,
) -> CoinTrackingRow:
    return CoinTrackingRow(
        type=ledger_type,
        buy_amount=buy[0],
        buy_currency=buy[1],
        sell_amount=sell[0],
        sell_currency=sell[1],
        fee=fee.amount,
        fee_currency=fee.currency,
        exchange=exchange,
        comment=comment,
        date=date,
    )


def make_trade(
    buy: tuple[str, str], sell: tuple[str, str], fee: FeeColumns, exchange: str, comment: str, date: str
) -> CoinTrackingRow:
    """Trade: something came in (buy) and something went out (sell)."""
    return make_row(LedgerType.TRADE, buy=buy, sell=sell, fee=fee, exchange=exchange, comment=comment, date=date)


def make_deposit(
    amount: str,
    currency: str,
    fee: FeeColumns,
    exchange: str,
    comment: str,
    date: str,
    ledger_type: LedgerType = LedgerType.DEPOSIT,
) -> CoinTrackingRow:
    """Incoming-only row (Deposit, or Airdrop for mints)."""
    return make_row(ledger_type, buy=(amount, currency), fee=fee, exchange=exchange, comment=comment, date=date)


def make_withdrawal(
    amount: str,
    currency: str,
    fee: FeeColumns,
    exchange: str,
    comment: str,
    date: str,
    ledger_type: LedgerType = LedgerType.WITHDRAWAL,
) -> CoinTrackingRow:
    """Outgoing-only row (Withdrawal, or Lost for burns)."""
    return make_row(ledger_type, sell=(amount, currency), fee=fee, exchange=exchange, comment=comment, date=date)
