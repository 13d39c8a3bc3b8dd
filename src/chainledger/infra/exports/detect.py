"""Detect which explorer export a CSV is from its header row."""

from pathlib import Path
from typing import Iterable

from chainledger.domain.enums import CsvType
from chainledger.infra.exports.reader import read_headers
from chainledger.parser.utils.fields import FIELD_PATTERNS, headers_have_field


def detect_csv_type(headers: list[str]) -> CsvType:
    """Rules, in order:

    - ParentTxFrom → internal transactions
    - TokenId → ERC-1155 if there is a token value column, else ERC-721
    - TokenValue + TokenSymbol without Value_IN/OUT → ERC-20 token transfers
    - Value_IN(*) or Value_OUT(*) → native transactions
    """
    has_value_in = headers_have_field(headers, FIELD_PATTERNS["value_in"])
    has_value_out = headers_have_field(headers, FIELD_PATTERNS["value_out"])
    has_token_value = headers_have_field(headers, FIELD_PATTERNS["token_value"])

    if headers_have_field(headers, FIELD_PATTERNS["parent_tx_from"]):
        return CsvType.INTERNAL
    if headers_have_field(headers, FIELD_PATTERNS["token_id"]):
        return CsvType.NFT1155 if has_token_value else CsvType.NFT721
    if (
        has_token_value
        and headers_have_field(headers, FIELD_PATTERNS["token_symbol"])
        and not has_value_in
        and not has_value_out
    ):
        return CsvType.TOKENS
    if has_value_in or has_value_out:
        return CsvType.NATIVE
    return CsvType.UNKNOWN


def detect_file_type(path: Path | str) -> CsvType:
    return detect_csv_type(read_headers(path))


def list_csv_files(directory: Path | str) -> list[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix.lower() == ".csv" and p.is_file())


def categorize_files(paths: Iterable[Path | str]) -> dict[CsvType, list[Path]]:
    result: dict[CsvType, list[Path]] = {t: [] for t in CsvType}
    for path in paths:
        result[detect_file_type(path)].append(Path(path))
    return result
