"""Run-scoped shared state: the native transaction index and the fee attribution ledger.

Both live for exactly one conversion run. Transformers run strictly one after another
(tokens, native, internal, NFTs), so whatever an earlier stage claims is final by the
time a later stage looks.
"""

from collections.abc import Iterable, Iterator, Mapping

from chainledger.domain.models.ledger import ConvertConfig
from chainledger.parser.utils.transfers import index_native_by_hash
from chainledger.parser.utils.types import ParsedNativeTx, TxHash


class NativeIndex(Mapping[TxHash, ParsedNativeTx]):
    """Read-only tx_hash → native transaction lookup. Duplicate hashes: last one wins."""

    def __init__(self, txs: Iterable[ParsedNativeTx] = ()) -> None:
        self._by_hash = index_native_by_hash(txs)

    def __getitem__(self, tx_hash: TxHash) -> ParsedNativeTx:
        return self._by_hash[tx_hash]

    def __iter__(self) -> Iterator[TxHash]:
        return iter(self._by_hash)

    def __len__(self) -> int:
        return len(self._by_hash)


class FeeLedger:
    """Set of hashes whose gas fee has already been written into an output row."""

    def __init__(self) -> None:
        self._claimed: set[TxHash] = set()

    def claim(self, tx_hash: TxHash) -> bool:
        """Claim the fee for tx_hash. True only for the first caller in this run."""
        if tx_hash in self._claimed:
            return False
        self._claimed.add(tx_hash)
        return True

    def mark(self, tx_hash: TxHash) -> None:
        """Record tx_hash as attributed without asking who was first."""
        self._claimed.add(tx_hash)

    def __contains__(self, tx_hash: object) -> bool:
        return tx_hash in self._claimed

    def __len__(self) -> int:
        return len(self._claimed)


class TransformContext:
    """Everything a transformer may consult during one run."""

    def __init__(
        self,
        config: ConvertConfig,
        native_index: NativeIndex | None = None,
        fee_ledger: FeeLedger | None = None,
    ) -> None:
        self.config = config
        self.native_index = native_index if native_index is not None else NativeIndex()
        self.fee_ledger = fee_ledger if fee_ledger is not None else FeeLedger()

    def native_tx(self, tx_hash: TxHash) -> ParsedNativeTx | None:
        """Correlated native transaction, or None (no fee, no native leg)."""
        return self.native_index.get(tx_hash)
