"""Row parsers: turn explorer export rows into typed, normalized records.

Rows without a transaction hash (header echoes, totals, garbage) are dropped. Token and NFT
rows with a non-positive amount are dropped as zero-value transfer noise. A malformed number
never raises: it parses as 0.
"""

from typing import Iterable, Mapping

from chainledger.parser.utils.fields import get_field_by_key, normalize_number
from chainledger.parser.utils.types import (
    Address,
    ParsedInternalTx,
    ParsedNativeTx,
    ParsedNftTransfer,
    ParsedTokenTransfer,
    TxHash,
)

CsvRow = Mapping[str, str]


def parse_native_row(row: CsvRow) -> ParsedNativeTx:
    return ParsedNativeTx(
        tx_hash=TxHash(get_field_by_key(row, "tx_hash")),
        date_time=get_field_by_key(row, "date_time"),
        from_address=Address(get_field_by_key(row, "from")),
        to_address=Address(get_field_by_key(row, "to")),
        value_in=normalize_number(get_field_by_key(row, "value_in")),
        value_out=normalize_number(get_field_by_key(row, "value_out")),
        fee=normalize_number(get_field_by_key(row, "fee")),
        method=get_field_by_key(row, "method"),
    )


def parse_native_rows(rows: Iterable[CsvRow]) -> list[ParsedNativeTx]:
    return [tx for tx in map(parse_native_row, rows) if tx.tx_hash]


def parse_token_row(row: CsvRow) -> ParsedTokenTransfer:
    return ParsedTokenTransfer(
        tx_hash=TxHash(get_field_by_key(row, "tx_hash")),
        date_time=get_field_by_key(row, "date_time"),
        from_address=Address(get_field_by_key(row, "from")),
        to_address=Address(get_field_by_key(row, "to")),
        value=normalize_number(get_field_by_key(row, "token_value")),
        symbol=get_field_by_key(row, "token_symbol") or "UNKNOWN",
        token_name=get_field_by_key(row, "token_name"),
        contract_address=Address(get_field_by_key(row, "contract_address")),
    )


def parse_token_rows(rows: Iterable[CsvRow]) -> list[ParsedTokenTransfer]:
    return [t for t in map(parse_token_row, rows) if t.tx_hash and t.value > 0]


def parse_internal_row(row: CsvRow) -> ParsedInternalTx:
    return ParsedInternalTx(
        tx_hash=TxHash(get_field_by_key(row, "tx_hash")),
        date_time=get_field_by_key(row, "date_time"),
        from_address=Address(get_field_by_key(row, "from")),
        to_address=Address(get_field_by_key(row, "to")),
        value_in=normalize_number(get_field_by_key(row, "value_in")),
        value_out=normalize_number(get_field_by_key(row, "value_out")),
        contract_address=Address(get_field_by_key(row, "contract_address")),
    )


def parse_internal_rows(rows: Iterable[CsvRow]) -> list[ParsedInternalTx]:
    return [tx for tx in map(parse_internal_row, rows) if tx.tx_hash]


def parse_nft_row(row: CsvRow, is_erc1155: bool) -> ParsedNftTransfer:
    """ERC-721 transfers always move one token; ERC-1155 carries a unit count in the value column."""
    quantity = normalize_number(get_field_by_key(row, "token_value")) if is_erc1155 else 1
    return ParsedNftTransfer(
        tx_hash=TxHash(get_field_by_key(row, "tx_hash")),
        date_time=get_field_by_key(row, "date_time"),
        from_address=Address(get_field_by_key(row, "from")),
        to_address=Address(get_field_by_key(row, "to")),
        token_id=get_field_by_key(row, "token_id"),
        token_symbol=get_field_by_key(row, "token_symbol") or "NFT",
        token_name=get_field_by_key(row, "token_name"),
        contract_address=Address(get_field_by_key(row, "contract_address")),
        quantity=quantity,
    )


def parse_nft_rows(rows: Iterable[CsvRow], is_erc1155: bool) -> list[ParsedNftTransfer]:
    return [t for t in (parse_nft_row(r, is_erc1155) for r in rows) if t.tx_hash and t.quantity > 0]


def group_by_tx_hash(transfers: Iterable[ParsedTokenTransfer]) -> dict[TxHash, list[ParsedTokenTransfer]]:
    """Group legs by hash, keeping first-seen hash order and in-file leg order."""
    groups: dict[TxHash, list[ParsedTokenTransfer]] = {}
    for transfer in transfers:
        groups.setdefault(transfer.tx_hash, []).append(transfer)
    return groups


def index_native_by_hash(txs: Iterable[ParsedNativeTx]) -> dict[TxHash, ParsedNativeTx]:
    """Hash → native tx. A duplicate hash overwrites the earlier entry."""
    by_hash: dict[TxHash, ParsedNativeTx] = {}
    for tx in txs:
        if tx.tx_hash:
            by_hash[tx.tx_hash] = tx
    return by_hash
