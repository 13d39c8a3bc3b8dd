"""Fetch API: pull a wallet's history from an Etherscan-compatible explorer and convert it."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from chainledger.api.convert import build_config, finish_conversion
from chainledger.api.deps import get_db, get_settings, get_symbol_resolver
from chainledger.api.schemas.convert import ConvertPreviewResponse, FetchRequest
from chainledger.config import Settings
from chainledger.exceptions import ExternalServiceError, UnknownChainError
from chainledger.infra.blockchain.evm.explorer_client import ExplorerClient, resolve_chain
from chainledger.infra.blockchain.evm.loader import ExplorerLoader
from chainledger.infra.http.rate_limited_client import RateLimitedClient
from chainledger.parser.pipeline import convert
from chainledger.parser.symbols import SymbolResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fetch", tags=["fetch"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
ResolverDep = Annotated[SymbolResolver, Depends(get_symbol_resolver)]


def build_explorer_client(api_url: str, settings: Settings) -> ExplorerClient:
    http_client = RateLimitedClient(rate_per_second=settings.fetch_rate_per_second, timeout=60.0)
    return ExplorerClient(api_url, http_client, api_key=settings.etherscan_api_key)


@router.post("", response_model=None)
async def fetch_and_convert(
    body: FetchRequest,
    db: DbDep,
    settings: SettingsDep,
    resolver: ResolverDep,
) -> Response | ConvertPreviewResponse:
    try:
        explorer = resolve_chain(body.chain, body.api_url, body.native_symbol)
    except UnknownChainError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    config = build_config(body.address, explorer.native_symbol, body.exchange, body.chain, body.cutoff)
    client = build_explorer_client(explorer.api_url, settings)
    try:
        inputs = await ExplorerLoader(client).load(config.address, explorer.native_symbol)
    except ExternalServiceError as exc:
        logger.warning("Explorer fetch failed for %s on %s: %s", config.address, body.chain, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    finally:
        await client.close()

    result = convert(inputs, config, resolver)
    return await finish_conversion(
        result,
        inputs,
        config,
        [f"{body.chain}:{config.address}"],
        db=db,
        settings=settings,
        record=body.record,
        preview=body.preview,
        preview_limit=body.preview_limit,
    )
