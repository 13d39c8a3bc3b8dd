"""Schemas for /api/imports endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ConversionRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    chain: str
    address: str
    native_symbol: str
    input_files: list[str]
    output_file: str | None = None
    row_count: int
    date_from: str
    date_to: str
    imported_to_cointracking: bool
    created_at: datetime


class ConversionRecordListResponse(BaseModel):
    imports: list[ConversionRecordResponse]
    total: int


class MarkImportedResponse(BaseModel):
    id: str
    imported_to_cointracking: bool
