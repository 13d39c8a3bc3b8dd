"""Core data types for the reconciliation engine."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_core import core_schema


class _LowercaseId(str):
    """Identifier string lowercased once, at construction. Never re-normalize."""

    __slots__ = ()

    def __new__(cls, value: str = ""):
        if type(value) is cls:
            return value
        return super().__new__(cls, str(value).strip().lower())

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())


class Address(_LowercaseId):
    """Wallet or contract address."""

    __slots__ = ()


class TxHash(_LowercaseId):
    """Transaction hash, the correlation key across all export categories."""

    __slots__ = ()


ZERO_ADDRESS = Address("0x0000000000000000000000000000000000000000")


def is_zero_address(address: Address) -> bool:
    return address == ZERO_ADDRESS


class ParsedNativeTx(BaseModel):
    """One top-level native-currency transaction from the native export."""

    model_config = ConfigDict(frozen=True)

    tx_hash: TxHash
    date_time: str
    from_address: Address
    to_address: Address
    value_in: Decimal = Decimal(0)
    value_out: Decimal = Decimal(0)
    fee: Decimal = Decimal(0)  # gas paid by the signer, in native units
    method: str = ""


class ParsedTokenTransfer(BaseModel):
    """One ERC-20 transfer leg. Several legs can share a tx_hash."""

    model_config = ConfigDict(frozen=True)

    tx_hash: TxHash
    date_time: str
    from_address: Address
    to_address: Address
    value: Decimal
    symbol: str = "UNKNOWN"
    token_name: str = ""
    contract_address: Address = Address("")


class ParsedInternalTx(BaseModel):
    """Native value moved by contract execution (not in the top-level export)."""

    model_config = ConfigDict(frozen=True)

    tx_hash: TxHash
    date_time: str
    from_address: Address
    to_address: Address
    value_in: Decimal = Decimal(0)
    value_out: Decimal = Decimal(0)
    contract_address: Address = Address("")


class ParsedNftTransfer(BaseModel):
    """One NFT ownership transfer. quantity is 1 for ERC-721."""

    model_config = ConfigDict(frozen=True)

    tx_hash: TxHash
    date_time: str
    from_address: Address
    to_address: Address
    token_id: str
    token_symbol: str = "NFT"
    token_name: str = ""
    contract_address: Address = Address("")
    quantity: Decimal = Decimal(1)
