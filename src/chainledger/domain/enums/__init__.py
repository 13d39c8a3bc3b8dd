from chainledger.domain.enums.classification import InternalTxKind, NativeTxKind, NftTransferKind, TokenGroupKind
from chainledger.domain.enums.csv_type import CsvType
from chainledger.domain.enums.ledger_type import LedgerType
from chainledger.domain.enums.status import ImportStatus

__all__ = [
    "CsvType",
    "ImportStatus",
    "InternalTxKind",
    "LedgerType",
    "NativeTxKind",
    "NftTransferKind",
    "TokenGroupKind",
]
