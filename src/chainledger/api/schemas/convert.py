"""Schemas for /api/convert and /api/fetch."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from chainledger.domain.models.ledger import CoinTrackingRow


class ConversionSummary(BaseModel):
    import_id: Optional[str] = None
    input_counts: dict[str, int]
    emitted_counts: dict[str, int]
    row_count: int
    date_from: str
    date_to: str


class ConvertPreviewResponse(ConversionSummary):
    rows: list[CoinTrackingRow]


class FetchRequest(BaseModel):
    chain: str
    address: str
    exchange: str = ""
    api_url: Optional[str] = None
    native_symbol: Optional[str] = None
    cutoff: Optional[datetime] = None
    record: bool = False
    preview: bool = False
    preview_limit: int = Field(default=20, ge=1, le=1000)
