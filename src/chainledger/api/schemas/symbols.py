from typing import Optional

from pydantic import BaseModel


class NativeSymbolResponse(BaseModel):
    chain: str
    symbol: Optional[str]
    known: bool
