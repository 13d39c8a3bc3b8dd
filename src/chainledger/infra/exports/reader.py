"""Read explorer CSV exports into header-keyed rows."""

import csv
import io
from pathlib import Path

from chainledger.exceptions import InvalidCsvError


def decode_csv_bytes(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")  # explorers often prepend a BOM
    except UnicodeDecodeError as exc:
        raise InvalidCsvError("CSV must be UTF-8 encoded") from exc


def read_csv_text(text: str) -> list[dict[str, str]]:
    """Parse CSV text. Keys and values are trimmed; blank lines and surplus cells are dropped."""
    reader = csv.DictReader(io.StringIO(text))
    rows: list[dict[str, str]] = []
    for raw in reader:
        row = {key.strip(): (value or "").strip() for key, value in raw.items() if key is not None}
        if any(row.values()):
            rows.append(row)
    return rows


def read_csv(path: Path | str) -> list[dict[str, str]]:
    return read_csv_text(Path(path).read_text(encoding="utf-8-sig"))


def read_headers_text(text: str) -> list[str]:
    first_line = next(iter(text.splitlines()), "")
    if not first_line:
        return []
    return [h.strip() for h in next(csv.reader([first_line]), [])]


def read_headers(path: Path | str) -> list[str]:
    with Path(path).open(encoding="utf-8-sig", newline="") as fh:
        return read_headers_text(fh.readline())
