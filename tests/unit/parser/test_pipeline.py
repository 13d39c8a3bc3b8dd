from datetime import datetime, timedelta, timezone

from chainledger.domain.enums import CsvType, LedgerType
from chainledger.domain.models.ledger import CoinTrackingRow, ConvertConfig
from chainledger.parser.pipeline import ConversionInputs, apply_cutoff, convert, sort_rows
from chainledger.parser.symbols import SymbolOverrides, SymbolResolver

USER = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"


def _config(**kwargs) -> ConvertConfig:
    data = {"address": USER, "native_symbol": "MNT", "exchange": "Mantle"}
    data.update(kwargs)
    return ConvertConfig(**data)


def _native(tx_hash: str, date: str, value_in: str = "0", value_out: str = "0", fee: str = "0.001",
            frm: str = USER, to: str = OTHER) -> dict[str, str]:
    return {
        "Transaction Hash": tx_hash,
        "DateTime (UTC)": date,
        "From": frm,
        "To": to,
        "Value_IN(MNT)": value_in,
        "Value_OUT(MNT)": value_out,
        "TxnFee(MNT)": fee,
        "Method": "",
    }


def _token(tx_hash: str, date: str, value: str, symbol: str, frm: str, to: str) -> dict[str, str]:
    return {
        "Transaction Hash": tx_hash,
        "DateTime (UTC)": date,
        "From": frm,
        "To": to,
        "TokenValue": value,
        "TokenSymbol": symbol,
    }


def _row(date: str) -> CoinTrackingRow:
    return CoinTrackingRow(type=LedgerType.DEPOSIT, date=date)


class TestSortAndCutoff:
    def test_sorted_ascending_by_date(self):
        rows = [_row("2024-01-01 15:00:00"), _row("2024-01-01 10:00:00"), _row("2024-01-01 12:00:00")]
        assert [r.date[11:] for r in sort_rows(rows)] == ["10:00:00", "12:00:00", "15:00:00"]

    def test_cutoff_keeps_rows_on_or_after(self):
        rows = [_row("2023-12-31 23:59:59"), _row("2024-01-01 00:00:00"), _row("2024-02-01 00:00:00")]
        kept = apply_cutoff(rows, "2024-01-01 00:00:00")
        assert [r.date for r in kept] == ["2024-01-01 00:00:00", "2024-02-01 00:00:00"]

    def test_no_cutoff_keeps_everything(self):
        rows = [_row("2020-01-01 00:00:00")]
        assert apply_cutoff(rows, None) == rows


class TestConversionInputs:
    def test_add_routes_by_type(self):
        inputs = ConversionInputs()
        inputs.add(CsvType.TOKENS, [{"a": "1"}])
        inputs.add(CsvType.NFT1155, [{"b": "2"}])
        inputs.add(CsvType.UNKNOWN, [{"c": "3"}])
        assert inputs.counts()[CsvType.TOKENS] == 1
        assert inputs.counts()[CsvType.NFT1155] == 1
        assert sum(inputs.counts().values()) == 2


class TestConvert:
    def test_single_native_withdrawal(self):
        inputs = ConversionInputs(native=[_native("0xa", "2024-01-01 10:00:00", value_out="109")])
        result = convert(inputs, _config())
        assert len(result.rows) == 1
        row = result.rows[0]
        assert row.type is LedgerType.WITHDRAWAL
        assert row.sell_amount == "109"
        assert row.sell_currency == "MNT"
        assert row.fee == "0.001"

    def test_swap_suppresses_native_leg(self):
        inputs = ConversionInputs(
            native=[_native("0xs", "2024-01-01 10:00:00", value_out="1")],
            tokens=[
                _token("0xs", "2024-01-01 10:00:00", "100", "USDC", USER, OTHER),
                _token("0xs", "2024-01-01 10:00:00", "0.05", "WETH", OTHER, USER),
            ],
        )
        result = convert(inputs, _config())
        assert [r.type for r in result.rows] == [LedgerType.TRADE]
        assert result.emitted[CsvType.NATIVE] == 0

    def test_unrelated_token_group_leaves_native_row(self):
        inputs = ConversionInputs(
            native=[_native("0xs", "2024-01-01 10:00:00", value_out="1")],
            tokens=[_token("0xs", "2024-01-01 10:00:00", "5", "X", OTHER, "0x3333")],
        )
        result = convert(inputs, _config())
        assert [r.type for r in result.rows] == [LedgerType.WITHDRAWAL]

    def test_fee_attributed_at_most_once_per_hash(self):
        inputs = ConversionInputs(
            native=[_native("0xh", "2024-01-01 10:00:00", value_out="1", fee="0.01")],
            tokens=[_token("0xh", "2024-01-01 10:00:00", "5", "USDC", OTHER, USER)],
            internal=[{
                "Transaction Hash": "0xh",
                "DateTime (UTC)": "2024-01-01 10:00:00",
                "ParentTxFrom": USER,
                "From": OTHER,
                "To": USER,
                "Value_IN(MNT)": "0.2",
                "Value_OUT(MNT)": "0",
            }],
            nft721=[{
                "Transaction Hash": "0xh",
                "DateTime (UTC)": "2024-01-01 10:00:00",
                "From": OTHER,
                "To": USER,
                "TokenId": "1",
                "TokenSymbol": "N",
            }],
        )
        result = convert(inputs, _config())
        assert len(result.rows) == 3
        assert [r.fee for r in result.rows].count("0.01") == 1
        assert all(r.fee in ("", "0.01") for r in result.rows)

    def test_output_sorted_and_cut(self):
        inputs = ConversionInputs(native=[
            _native("0x1", "2024-01-01 15:00:00", value_in="1", frm=OTHER, to=USER),
            _native("0x2", "2023-06-01 10:00:00", value_in="2", frm=OTHER, to=USER),
            _native("0x3", "2024-01-01 12:00:00", value_in="3", frm=OTHER, to=USER),
        ])
        result = convert(inputs, _config(cutoff=datetime(2024, 1, 1)))
        assert [r.buy_amount for r in result.rows] == ["3", "1"]
        assert result.date_range == ("2024-01-01 12:00:00", "2024-01-01 15:00:00")

    def test_aware_cutoff_converted_to_utc(self):
        tz = timezone(timedelta(hours=2))
        config = _config(cutoff=datetime(2024, 1, 1, 14, 0, tzinfo=tz))
        assert config.cutoff_text == "2024-01-01 12:00:00"

    def test_symbol_resolution_applied_last(self):
        inputs = ConversionInputs(native=[_native("0xa", "2024-01-01 10:00:00", value_out="1")])
        resolver = SymbolResolver(SymbolOverrides())
        result = convert(inputs, _config(chain="Mantle"), resolver)
        assert result.rows[0].sell_currency == "MNT3"
        assert result.rows[0].fee_currency == "MNT3"

    def test_token_sharing_native_ticker_stays_token(self):
        inputs = ConversionInputs(
            native=[_native("0xa", "2024-01-01 10:00:00", value_out="1")],
            tokens=[_token("0xb", "2024-01-02 10:00:00", "5", "ETH", OTHER, USER)],
        )
        config = _config(native_symbol="ETH", exchange="Arbitrum", chain="Arbitrum")
        result = convert(inputs, config, SymbolResolver())
        native_row, token_row = result.rows
        assert native_row.sell_currency == "AETH"
        assert native_row.fee_currency == "AETH"
        assert token_row.type == LedgerType.DEPOSIT
        assert token_row.buy_currency == "ETH"

    def test_empty_inputs(self):
        result = convert(ConversionInputs(), _config())
        assert result.rows == []
        assert result.date_range == ("", "")
