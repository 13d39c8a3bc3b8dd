from typing import Annotated

from fastapi import APIRouter, Depends

from chainledger.api.deps import get_symbol_resolver
from chainledger.api.schemas.symbols import NativeSymbolResponse
from chainledger.parser.symbols import SymbolResolver

router = APIRouter(prefix="/api/symbols", tags=["symbols"])

ResolverDep = Annotated[SymbolResolver, Depends(get_symbol_resolver)]


@router.get("/native/{chain}", response_model=NativeSymbolResponse)
async def native_symbol(chain: str, resolver: ResolverDep) -> NativeSymbolResponse:
    """CoinTracking symbol for a chain's native currency (overrides first, then built-ins)."""
    symbol = resolver.native_symbol_for(chain)
    return NativeSymbolResponse(chain=chain, symbol=symbol, known=symbol is not None)
