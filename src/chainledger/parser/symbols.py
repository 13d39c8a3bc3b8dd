"""Symbol resolution: map chain and token symbols to the ones CoinTracking expects.

Priority: user overrides > built-in table > symbol as given. The native symbol is resolved
once for the configured chain before any transformer runs; token overrides are applied to the
currency columns of finished rows. A token whose ticker matches the native one stays a token.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chainledger.domain.models.ledger import CoinTrackingRow, ConvertConfig

logger = logging.getLogger(__name__)

# Official CoinTracking symbols for EVM native currencies. Numbered suffixes (MNT3)
# disambiguate from unrelated tokens with the same ticker.
COINTRACKING_NATIVE_SYMBOLS: dict[str, str] = {
    "Ethereum": "ETH",
    "Arbitrum": "AETH",
    "Avalanche": "AVAX",
    "Base": "BASE",
    "Binance Smart Chain": "BNB",
    "BSC": "BNB",
    "Blast": "BLAST",
    "Cronos": "CRO",
    "Fantom": "FTM",
    "Gnosis": "XDAI",
    "Linea": "LINEA",
    "Metis": "METIS",
    "Moonbeam": "GLMR",
    "Optimism": "OP",
    "Polygon": "POL",
    "zkSync": "ZKSYNC",
    # Not listed by CoinTracking, user-verified
    "Mantle": "MNT3",
}

NFT_CURRENCY_PREFIX = "NFT:"


class SymbolOverrides(BaseModel):
    """Contents of symbol-overrides.json."""

    model_config = ConfigDict(populate_by_name=True)

    native_symbols: dict[str, str] = Field(default_factory=dict, alias="nativeSymbols")
    token_symbols: dict[str, str] = Field(default_factory=dict, alias="tokenSymbols")

    @classmethod
    def load(cls, path: Path | str) -> "SymbolOverrides":
        """Read overrides from disk. Missing or unreadable files mean no overrides."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            return cls.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Could not parse symbol overrides %s: %s", path, exc)
            return cls()


class SymbolResolver:
    def __init__(
        self,
        overrides: SymbolOverrides | None = None,
        builtin: dict[str, str] | None = None,
    ) -> None:
        overrides = overrides or SymbolOverrides()
        self._native_overrides = {k.lower(): v for k, v in overrides.native_symbols.items()}
        self._token_overrides = dict(overrides.token_symbols)
        table = COINTRACKING_NATIVE_SYMBOLS if builtin is None else builtin
        self._builtin = {k.lower(): v for k, v in table.items()}

    def native_symbol_for(self, chain: str) -> str | None:
        """Known CoinTracking native symbol for a chain, or None."""
        key = chain.lower()
        return self._native_overrides.get(key) or self._builtin.get(key)

    def resolve_native(self, chain: str, original: str) -> str:
        return self.native_symbol_for(chain) or original

    def resolve_token(self, symbol: str) -> str:
        return self._token_overrides.get(symbol, symbol)

    def resolve_config(self, config: ConvertConfig) -> ConvertConfig:
        """Copy of config with native_symbol resolved for config.chain."""
        if not config.chain:
            return config
        return config.model_copy(update={"native_symbol": self.resolve_native(config.chain, config.native_symbol)})

    def resolve_currency(self, currency: str, config: ConvertConfig) -> str:
        """Token override for currency. Native (already resolved) and NFT currencies pass through."""
        if not currency or currency == config.native_symbol or currency.startswith(NFT_CURRENCY_PREFIX):
            return currency
        return self.resolve_token(currency)

    def apply(self, rows: list[CoinTrackingRow], config: ConvertConfig) -> list[CoinTrackingRow]:
        """Apply token overrides to the currency columns of rows built with a resolved config."""
        return [
            row.model_copy(update={
                "buy_currency": self.resolve_currency(row.buy_currency, config),
                "sell_currency": self.resolve_currency(row.sell_currency, config),
                "fee_currency": self.resolve_currency(row.fee_currency, config),
            })
            for row in rows
        ]
