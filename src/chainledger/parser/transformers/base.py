"""Base transformer interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from pydantic import BaseModel

from chainledger.domain.models.ledger import CoinTrackingRow
from chainledger.parser.utils.context import TransformContext
from chainledger.parser.utils.types import TxHash


class TransformResult(BaseModel):
    """Rows produced by one transformer, plus the hashes it fully accounted for."""

    rows: list[CoinTrackingRow]
    processed_hashes: set[TxHash] = set()
    transformer_name: str


class BaseTransformer(ABC):
    """One transformer per export category. Reads the shared index, writes only to the fee ledger."""

    TRANSFORMER_NAME: str = "BaseTransformer"

    @abstractmethod
    def transform(self, rows: Iterable[Mapping[str, str]], context: TransformContext) -> TransformResult:
        """Parse raw export rows and return ledger rows."""

    def _make_result(
        self, rows: list[CoinTrackingRow], processed_hashes: set[TxHash] | None = None
    ) -> TransformResult:
        return TransformResult(
            rows=rows,
            processed_hashes=processed_hashes or set(),
            transformer_name=self.TRANSFORMER_NAME,
        )
