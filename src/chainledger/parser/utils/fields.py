"""Field resolver: maps explorer-specific CSV headers onto a fixed set of semantic keys.

Explorers (Etherscan, Blockscout, Mantlescan, ...) name the same column differently and
suffix value columns with the chain symbol, e.g. ``Value_IN(MNT)``. Plain string patterns
match case-insensitively; compiled regexes match as written.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Mapping, Pattern, Sequence, Union

FieldPattern = Union[str, Pattern[str]]

FIELD_PATTERNS: dict[str, tuple[FieldPattern, ...]] = {
    # Common
    "tx_hash": ("Transaction Hash", "Txhash", "TxHash", "Hash"),
    "date_time": ("DateTime (UTC)", "DateTime UTC", "Date Time (UTC)", "DateTime", "Timestamp"),
    "unix_timestamp": ("UnixTimestamp", "Unix Timestamp", "Timestamp"),
    "from": ("From",),
    "to": ("To",),
    "method": ("Method", "Function"),
    "contract_address": ("ContractAddress", "Contract Address"),
    # Native transactions
    "value_in": (re.compile(r"^Value_IN\(.+\)$"), re.compile(r"^Value IN\(.+\)$"), "Value_IN", "ValueIN", "Value In"),
    "value_out": (re.compile(r"^Value_OUT\(.+\)$"), re.compile(r"^Value OUT\(.+\)$"), "Value_OUT", "ValueOUT", "Value Out"),
    "fee": (re.compile(r"^TxnFee\(.+\)$"), re.compile(r"^Txn Fee\(.+\)$"), "TxnFee", "Txn Fee", "Transaction Fee"),
    # Token transfers
    "token_value": ("TokenValue", "Token Value", "Value", "Quantity"),
    "token_symbol": ("TokenSymbol", "Token Symbol", "Symbol"),
    "token_name": ("TokenName", "Token Name", "Name"),
    # Internal transactions
    "parent_tx_from": ("ParentTxFrom", "Parent Tx From"),
    "parent_tx_to": ("ParentTxTo", "Parent Tx To"),
    # NFTs
    "token_id": ("TokenId", "Token ID", "TokenID", "NFT Token ID"),
}


def _matches(field_name: str, pattern: FieldPattern) -> bool:
    if isinstance(pattern, str):
        return field_name.lower() == pattern.lower()
    return pattern.search(field_name) is not None


def find_matching_key(row: Mapping[str, str], patterns: Sequence[FieldPattern]) -> str | None:
    """Return the row's column name matching the first pattern that matches anything."""
    keys = list(row.keys())
    for pattern in patterns:
        for key in keys:
            if _matches(key, pattern):
                return key
    return None


def get_field(row: Mapping[str, str], patterns: Sequence[FieldPattern]) -> str:
    key = find_matching_key(row, patterns)
    if key is None:
        return ""
    return row.get(key) or ""


def get_field_by_key(row: Mapping[str, str], field_key: str) -> str:
    return get_field(row, FIELD_PATTERNS[field_key])


def headers_have_field(headers: Sequence[str], patterns: Sequence[FieldPattern]) -> bool:
    return any(_matches(h, p) for p in patterns for h in headers)


# --- Numbers ---

_WHITESPACE = re.compile(r"\s+")


def normalize_number(value: str | None) -> Decimal:
    """Parse an explorer amount. Strips whitespace and thousands separators; never raises.

    Anything that is not a finite number becomes 0.
    """
    if not value:
        return Decimal(0)
    cleaned = _WHITESPACE.sub("", value).replace(",", "")
    try:
        number = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def format_amount(value: Decimal) -> str:
    """Fixed-point string without exponent or trailing zeros: 100, 0.05, 0.0000001."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")
