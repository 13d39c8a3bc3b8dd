from enum import Enum


class NativeTxKind(str, Enum):
    """Outcome of classifying one native transaction against the user's address."""

    SKIP = "SKIP"
    BRIDGE_DEPOSIT = "BRIDGE_DEPOSIT"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    FEE_ONLY = "FEE_ONLY"
    UNCLASSIFIED = "UNCLASSIFIED"


class TokenGroupKind(str, Enum):
    """Shape of the user's token legs within one transaction hash."""

    SWAP = "SWAP"  # exactly one out, one in
    MULTI_LEG_SWAP = "MULTI_LEG_SWAP"  # outs and ins, collapsed to first out / last in
    TRANSFERS = "TRANSFERS"  # only ins or only outs
    EMPTY = "EMPTY"  # no leg touches the user


class InternalTxKind(str, Enum):
    SKIP = "SKIP"
    DUPLICATE = "DUPLICATE"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    UNCLASSIFIED = "UNCLASSIFIED"


class NftTransferKind(str, Enum):
    MINT_TRADE = "MINT_TRADE"
    PURCHASE_TRADE = "PURCHASE_TRADE"
    MINT = "MINT"
    DEPOSIT = "DEPOSIT"
    BURN = "BURN"
    WITHDRAWAL = "WITHDRAWAL"
    UNRELATED = "UNRELATED"
