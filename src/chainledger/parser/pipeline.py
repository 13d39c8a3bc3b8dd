"""Conversion pipeline: runs the four transformers in their fixed order and assembles the ledger.

Order matters and must not be parallelized: tokens claim swap hashes and fees first, native
skips what tokens claimed, internal deduplicates against the native index, NFTs run last.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from chainledger.domain.enums import CsvType
from chainledger.domain.models.ledger import CoinTrackingRow, ConvertConfig
from chainledger.parser.symbols import SymbolResolver
from chainledger.parser.transformers.internal import InternalTransformer
from chainledger.parser.transformers.native import NativeTransformer
from chainledger.parser.transformers.nft import Erc721Transformer, Erc1155Transformer
from chainledger.parser.transformers.tokens import TokenTransformer
from chainledger.parser.utils.context import FeeLedger, NativeIndex, TransformContext
from chainledger.parser.utils.transfers import parse_native_rows

logger = logging.getLogger(__name__)

CsvRows = list[Mapping[str, str]]


@dataclass
class ConversionInputs:
    """Raw export rows per category, already read from CSV or fetched from an explorer."""

    native: CsvRows = field(default_factory=list)
    tokens: CsvRows = field(default_factory=list)
    internal: CsvRows = field(default_factory=list)
    nft721: CsvRows = field(default_factory=list)
    nft1155: CsvRows = field(default_factory=list)

    def add(self, csv_type: CsvType, rows: CsvRows) -> None:
        """Append rows of a detected category. Unknown categories are ignored."""
        if csv_type is CsvType.UNKNOWN:
            return
        getattr(self, csv_type.value).extend(rows)

    def counts(self) -> dict[CsvType, int]:
        return {
            CsvType.NATIVE: len(self.native),
            CsvType.TOKENS: len(self.tokens),
            CsvType.INTERNAL: len(self.internal),
            CsvType.NFT721: len(self.nft721),
            CsvType.NFT1155: len(self.nft1155),
        }


@dataclass
class ConversionResult:
    rows: list[CoinTrackingRow]
    emitted: dict[CsvType, int] = field(default_factory=dict)  # before cutoff

    @property
    def date_range(self) -> tuple[str, str]:
        dates = [r.date for r in self.rows if r.date]
        if not dates:
            return "", ""
        return min(dates), max(dates)


def apply_cutoff(rows: list[CoinTrackingRow], cutoff: str | None) -> list[CoinTrackingRow]:
    """Drop rows dated strictly before cutoff (same zero-padded UTC string format)."""
    if not cutoff:
        return list(rows)
    return [r for r in rows if r.date >= cutoff]


def sort_rows(rows: list[CoinTrackingRow]) -> list[CoinTrackingRow]:
    """Ascending by date. Zero-padded UTC strings sort chronologically; ties keep their order."""
    return sorted(rows, key=lambda r: r.date)


def convert(
    inputs: ConversionInputs,
    config: ConvertConfig,
    resolver: SymbolResolver | None = None,
) -> ConversionResult:
    """Run one conversion. Index and fee ledger are created here and die with the call."""
    if resolver is not None:
        config = resolver.resolve_config(config)
    native_index = NativeIndex(parse_native_rows(inputs.native))
    context = TransformContext(config, native_index, FeeLedger())

    token_result = TokenTransformer().transform(inputs.tokens, context)
    native_result = NativeTransformer(skip_hashes=token_result.processed_hashes).transform(inputs.native, context)
    internal_result = InternalTransformer().transform(inputs.internal, context)
    nft721_result = Erc721Transformer().transform(inputs.nft721, context)
    nft1155_result = Erc1155Transformer().transform(inputs.nft1155, context)

    emitted = {
        CsvType.TOKENS: len(token_result.rows),
        CsvType.NATIVE: len(native_result.rows),
        CsvType.INTERNAL: len(internal_result.rows),
        CsvType.NFT721: len(nft721_result.rows),
        CsvType.NFT1155: len(nft1155_result.rows),
    }
    for csv_type, count in emitted.items():
        logger.info("%s: %d rows in, %d ledger rows out", csv_type.display_name, inputs.counts()[csv_type], count)

    rows = [
        *token_result.rows,
        *native_result.rows,
        *internal_result.rows,
        *nft721_result.rows,
        *nft1155_result.rows,
    ]
    rows = sort_rows(apply_cutoff(rows, config.cutoff_text))
    if resolver is not None:
        rows = resolver.apply(rows, config)

    logger.info("Converted %d ledger rows for %s (%d fees attributed)", len(rows), config.address, len(context.fee_ledger))
    return ConversionResult(rows=rows, emitted=emitted)
