from decimal import Decimal

from chainledger.parser.utils.types import (
    ZERO_ADDRESS,
    Address,
    ParsedNativeTx,
    TxHash,
    is_zero_address,
)


class TestIdentifiers:
    def test_address_lowercased(self):
        assert Address("0xABC") == "0xabc"
        assert Address("0xABC") == Address("0xabc")

    def test_whitespace_trimmed(self):
        assert TxHash("  0xDEAD ") == "0xdead"

    def test_construction_is_idempotent(self):
        addr = Address("0xAbC")
        assert Address(addr) is addr

    def test_is_str(self):
        assert isinstance(TxHash("0x1"), str)

    def test_zero_address(self):
        assert is_zero_address(Address("0x0000000000000000000000000000000000000000"))
        assert not is_zero_address(Address("0x0000000000000000000000000000000000000001"))
        assert ZERO_ADDRESS == "0x" + "0" * 40


class TestRecordValidation:
    def test_model_normalizes_identifiers(self):
        tx = ParsedNativeTx(
            tx_hash="0xHASH",
            date_time="2024-01-01 00:00:00",
            from_address="0xFROM",
            to_address="0xTO",
            value_in=Decimal("1"),
        )
        assert tx.tx_hash == "0xhash"
        assert isinstance(tx.tx_hash, TxHash)
        assert tx.from_address == "0xfrom"
        assert isinstance(tx.to_address, Address)
        assert tx.fee == 0
