from decimal import Decimal

from chainledger.domain.enums import InternalTxKind, LedgerType
from chainledger.domain.models.ledger import ConvertConfig
from chainledger.parser.transformers.internal import InternalTransformer, classify_internal_tx, is_duplicate_of_native
from chainledger.parser.utils.context import FeeLedger, NativeIndex, TransformContext
from chainledger.parser.utils.transfers import parse_native_rows
from chainledger.parser.utils.types import Address, ParsedInternalTx, ParsedNativeTx, TxHash

USER = "0x1111111111111111111111111111111111111111"
CONTRACT = "0x9999999999999999999999999999999999999999"


def _internal(value_in: str = "0", value_out: str = "0", frm: str = CONTRACT, to: str = USER) -> dict[str, str]:
    return {
        "Transaction Hash": "0xint",
        "DateTime (UTC)": "2024-05-05 05:05:05",
        "ParentTxFrom": USER,
        "ParentTxTo": CONTRACT,
        "From": frm,
        "To": to,
        "Value_IN(ETH)": value_in,
        "Value_OUT(ETH)": value_out,
    }


def _native(value_in: str = "0", value_out: str = "0", fee: str = "0.003") -> dict[str, str]:
    return {
        "Transaction Hash": "0xint",
        "DateTime (UTC)": "2024-05-05 05:05:05",
        "From": USER,
        "To": CONTRACT,
        "Value_IN(ETH)": value_in,
        "Value_OUT(ETH)": value_out,
        "TxnFee(ETH)": fee,
    }


def _run(internal_rows, native_rows=None, fee_ledger: FeeLedger | None = None):
    config = ConvertConfig(address=USER, native_symbol="ETH", exchange="Arbitrum")
    context = TransformContext(config, NativeIndex(parse_native_rows(native_rows or [])), fee_ledger or FeeLedger())
    return InternalTransformer().transform(internal_rows, context)


class TestClassifyInternalTx:
    def _tx(self, **kwargs) -> ParsedInternalTx:
        data = {"tx_hash": "0xint", "date_time": "", "from_address": CONTRACT, "to_address": USER}
        data.update(kwargs)
        return ParsedInternalTx(**data)

    def test_zero_value_skipped(self):
        assert classify_internal_tx(self._tx(), None, Address(USER)) is InternalTxKind.SKIP

    def test_equal_value_in_is_duplicate(self):
        native = ParsedNativeTx(
            tx_hash="0xint", date_time="", from_address=CONTRACT, to_address=USER, value_in=Decimal("1")
        )
        tx = self._tx(value_in=Decimal("1.0"))
        assert is_duplicate_of_native(tx, native, Address(USER))
        assert classify_internal_tx(tx, native, Address(USER)) is InternalTxKind.DUPLICATE

    def test_not_involving_user_unclassified(self):
        tx = self._tx(to_address="0x3333", value_in=Decimal("1"))
        assert classify_internal_tx(tx, None, Address(USER)) is InternalTxKind.UNCLASSIFIED


class TestInternalTransformer:
    def test_deposit_with_fee(self):
        result = _run([_internal(value_in="0.5")], [_native()])
        assert len(result.rows) == 1
        row = result.rows[0]
        assert row.type is LedgerType.DEPOSIT
        assert row.buy_amount == "0.5"
        assert row.buy_currency == "ETH"
        assert row.fee == "0.003"
        assert row.comment == "Internal in 0xint"

    def test_withdrawal(self):
        result = _run([_internal(value_out="0.2", frm=USER, to=CONTRACT)])
        row = result.rows[0]
        assert row.type is LedgerType.WITHDRAWAL
        assert row.sell_amount == "0.2"
        assert row.comment == "Internal out 0xint"

    def test_same_value_as_native_deduplicated(self):
        result = _run([_internal(value_in="0.5")], [_native(value_in="0.5")])
        assert result.rows == []

    def test_different_value_from_native_kept(self):
        result = _run([_internal(value_in="0.5")], [_native(value_in="0.4")])
        assert len(result.rows) == 1
        assert result.rows[0].type is LedgerType.DEPOSIT

    def test_fee_already_claimed_upstream(self):
        ledger = FeeLedger()
        ledger.claim(TxHash("0xint"))
        result = _run([_internal(value_in="0.5")], [_native()], fee_ledger=ledger)
        assert result.rows[0].fee == ""

    def test_zero_rows_dropped(self):
        assert _run([_internal()]).rows == []
