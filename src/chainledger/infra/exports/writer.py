"""Write ledger rows in CoinTracking's CSV import layout."""

import csv
import io
from pathlib import Path
from typing import Iterable

from chainledger.domain.models.ledger import COINTRACKING_HEADERS, CoinTrackingRow


def to_cointracking_csv(rows: Iterable[CoinTrackingRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(COINTRACKING_HEADERS)
    for row in rows:
        writer.writerow(row.as_record())
    return buffer.getvalue()


def write_cointracking_csv(path: Path | str, rows: Iterable[CoinTrackingRow]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_cointracking_csv(rows), encoding="utf-8")
    return path
