"""Convert API: upload explorer CSV exports, get a CoinTracking CSV back."""

import logging
from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from chainledger.api.deps import get_db, get_settings, get_symbol_resolver
from chainledger.api.schemas.convert import ConvertPreviewResponse
from chainledger.config import Settings
from chainledger.db.repos.conversion_repo import ConversionRepo, generate_import_id
from chainledger.domain.enums import CsvType
from chainledger.domain.models.ledger import ConvertConfig
from chainledger.exceptions import InvalidCsvError
from chainledger.infra.exports.detect import detect_csv_type
from chainledger.infra.exports.reader import decode_csv_bytes, read_csv_text, read_headers_text
from chainledger.infra.exports.writer import to_cointracking_csv, write_cointracking_csv
from chainledger.parser.pipeline import ConversionInputs, ConversionResult, convert
from chainledger.parser.symbols import SymbolResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/convert", tags=["convert"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
ResolverDep = Annotated[SymbolResolver, Depends(get_symbol_resolver)]


def build_config(
    address: str,
    native_symbol: str,
    exchange: str,
    chain: str,
    cutoff: Optional[datetime],
) -> ConvertConfig:
    if not address.strip():
        raise HTTPException(status_code=400, detail="Wallet address is required")
    return ConvertConfig(
        address=address,
        native_symbol=native_symbol,
        exchange=exchange or chain,
        chain=chain,
        cutoff=cutoff,
    )


async def finish_conversion(
    result: ConversionResult,
    inputs: ConversionInputs,
    config: ConvertConfig,
    input_files: list[str],
    *,
    db: AsyncSession,
    settings: Settings,
    record: bool,
    preview: bool,
    preview_limit: int,
) -> Response | ConvertPreviewResponse:
    """Shared tail of upload and fetch: record history, then return CSV or a JSON preview."""
    date_from, date_to = result.date_range
    import_id = None

    if record and not preview:
        chain = config.chain or "unknown"
        import_id = generate_import_id(chain, config.address, date_to[:7] or None)
        output_path = write_cointracking_csv(settings.output_dir / f"{import_id}.csv", result.rows)
        await ConversionRepo(db).save(
            record_id=import_id,
            chain=chain,
            address=config.address,
            native_symbol=config.native_symbol,
            input_files=input_files,
            output_file=str(output_path),
            row_count=len(result.rows),
            date_from=date_from[:10],
            date_to=date_to[:10],
        )
        await db.commit()
        logger.info("Recorded conversion %s (%d rows)", import_id, len(result.rows))

    if preview:
        return ConvertPreviewResponse(
            import_id=import_id,
            input_counts={t.value: n for t, n in inputs.counts().items()},
            emitted_counts={t.value: n for t, n in result.emitted.items()},
            row_count=len(result.rows),
            date_from=date_from,
            date_to=date_to,
            rows=result.rows[:preview_limit],
        )

    filename = f"{import_id or 'cointracking'}.csv"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if import_id:
        headers["X-Import-Id"] = import_id
    return Response(content=to_cointracking_csv(result.rows), media_type="text/csv", headers=headers)


async def read_uploads(files: list[UploadFile]) -> ConversionInputs:
    """Detect each upload's export type and bucket its rows. Any unrecognized file fails the request."""
    inputs = ConversionInputs()
    for upload in files:
        text = decode_csv_bytes(await upload.read())
        csv_type = detect_csv_type(read_headers_text(text))
        if csv_type is CsvType.UNKNOWN:
            raise InvalidCsvError(f"Could not detect export type of {upload.filename or 'upload'}")
        rows = read_csv_text(text)
        logger.info("%s: %s, %d rows", upload.filename, csv_type.display_name, len(rows))
        inputs.add(csv_type, rows)
    return inputs


@router.post("", response_model=None)
async def convert_uploads(
    db: DbDep,
    settings: SettingsDep,
    resolver: ResolverDep,
    files: list[UploadFile] = File(...),
    address: str = Form(...),
    native_symbol: str = Form(...),
    exchange: str = Form(""),
    chain: str = Form(""),
    cutoff: Optional[datetime] = Form(None),
    record: bool = Form(False),
    preview: bool = Query(False),
    preview_limit: int = Query(20, ge=1, le=1000),
) -> Response | ConvertPreviewResponse:
    """Convert uploaded explorer exports. `preview=true` returns counts and the first rows as JSON."""
    config = build_config(address, native_symbol, exchange, chain, cutoff)
    try:
        inputs = await read_uploads(files)
    except InvalidCsvError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    result = convert(inputs, config, resolver)
    return await finish_conversion(
        result,
        inputs,
        config,
        [f.filename or "" for f in files],
        db=db,
        settings=settings,
        record=record,
        preview=preview,
        preview_limit=preview_limit,
    )
