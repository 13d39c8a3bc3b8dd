"""Unified ledger output (CoinTracking CSV import format) and conversion settings."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator

from chainledger.domain.enums import LedgerType
from chainledger.parser.utils.types import Address

COINTRACKING_HEADERS: tuple[str, ...] = (
    "Type",
    "Buy Amount",
    "Buy Currency",
    "Sell Amount",
    "Sell Currency",
    "Fee",
    "Fee Currency",
    "Exchange",
    "Trade Group",
    "Comment",
    "Date",
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CoinTrackingRow(BaseModel):
    """One ledger line. Amounts are decimal strings; "" means not applicable, not zero."""

    model_config = ConfigDict(frozen=True)

    type: LedgerType
    buy_amount: str = ""
    buy_currency: str = ""
    sell_amount: str = ""
    sell_currency: str = ""
    fee: str = ""
    fee_currency: str = ""
    exchange: str = ""
    trade_group: str = ""
    comment: str = ""
    date: str = ""

    def as_record(self) -> list[str]:
        """Values in COINTRACKING_HEADERS order."""
        return [
            self.type.value,
            self.buy_amount,
            self.buy_currency,
            self.sell_amount,
            self.sell_currency,
            self.fee,
            self.fee_currency,
            self.exchange,
            self.trade_group,
            self.comment,
            self.date,
        ]


class ConvertConfig(BaseModel):
    """Per-run conversion settings."""

    model_config = ConfigDict(frozen=True)

    address: Address
    native_symbol: str
    exchange: str
    chain: str = ""
    cutoff: datetime | None = None

    @field_validator("cutoff")
    @classmethod
    def _cutoff_as_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @property
    def cutoff_text(self) -> str | None:
        """Cutoff in the ledger's zero-padded UTC date format, comparable as a string."""
        if self.cutoff is None:
            return None
        return self.cutoff.strftime(DATE_FORMAT)
