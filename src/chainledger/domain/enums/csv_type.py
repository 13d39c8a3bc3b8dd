from enum import Enum


class CsvType(str, Enum):
    """Explorer export categories, detected from the CSV header row."""

    NATIVE = "native"
    TOKENS = "tokens"
    INTERNAL = "internal"
    NFT721 = "nft721"
    NFT1155 = "nft1155"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    CsvType.NATIVE: "Native Transactions",
    CsvType.TOKENS: "Token Transfers (ERC-20)",
    CsvType.INTERNAL: "Internal Transactions",
    CsvType.NFT721: "NFT Transfers (ERC-721)",
    CsvType.NFT1155: "NFT Transfers (ERC-1155)",
    CsvType.UNKNOWN: "Unknown",
}
