from chainledger.domain.enums import LedgerType, NftTransferKind
from chainledger.domain.models.ledger import ConvertConfig
from chainledger.parser.transformers.nft import (
    Erc721Transformer,
    Erc1155Transformer,
    classify_nft_transfer,
    format_nft_currency,
)
from chainledger.parser.utils.context import FeeLedger, NativeIndex, TransformContext
from chainledger.parser.utils.transfers import parse_native_rows, parse_nft_rows
from chainledger.parser.utils.types import Address

USER = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
ZERO = "0x0000000000000000000000000000000000000000"


def _nft(frm: str, to: str, token_id: str = "7", symbol: str = "ZORB", value: str | None = None) -> dict[str, str]:
    row = {
        "Transaction Hash": "0xnft",
        "DateTime (UTC)": "2024-06-01 18:00:00",
        "From": frm,
        "To": to,
        "ContractAddress": "0xc011",
        "TokenId": token_id,
        "TokenName": "Zorbs",
        "TokenSymbol": symbol,
    }
    if value is not None:
        row["TokenValue"] = value
    return row


def _native(value_out: str = "0", fee: str = "0.0005") -> dict[str, str]:
    return {
        "Transaction Hash": "0xnft",
        "DateTime (UTC)": "2024-06-01 18:00:00",
        "From": USER,
        "To": OTHER,
        "Value_IN(ETH)": "0",
        "Value_OUT(ETH)": value_out,
        "TxnFee(ETH)": fee,
    }


def _context(native_rows=None) -> TransformContext:
    config = ConvertConfig(address=USER, native_symbol="ETH", exchange="Zora")
    return TransformContext(config, NativeIndex(parse_native_rows(native_rows or [])), FeeLedger())


class TestClassifyNftTransfer:
    def test_kinds(self):
        user = Address(USER)
        cases = [
            (_nft(ZERO, USER), None, NftTransferKind.MINT),
            (_nft(OTHER, USER), None, NftTransferKind.DEPOSIT),
            (_nft(USER, ZERO), None, NftTransferKind.BURN),
            (_nft(USER, OTHER), None, NftTransferKind.WITHDRAWAL),
            (_nft(OTHER, "0x3333"), None, NftTransferKind.UNRELATED),
        ]
        for row, native, expected in cases:
            transfer = parse_nft_rows([row], is_erc1155=False)[0]
            assert classify_nft_transfer(transfer, native, user) is expected

    def test_currency_format(self):
        transfer = parse_nft_rows([_nft(OTHER, USER, token_id="123", symbol="")], is_erc1155=False)[0]
        assert format_nft_currency(transfer) == "NFT:NFT#123"


class TestErc721Transformer:
    def test_burn_is_lost(self):
        result = Erc721Transformer().transform([_nft(USER, ZERO)], _context())
        row = result.rows[0]
        assert row.type is LedgerType.LOST
        assert row.sell_currency == "NFT:ZORB#7"
        assert row.sell_amount == "1"
        assert row.comment == "NFT burn 0xnft"

    def test_send_is_withdrawal(self):
        result = Erc721Transformer().transform([_nft(USER, OTHER)], _context())
        row = result.rows[0]
        assert row.type is LedgerType.WITHDRAWAL
        assert row.sell_currency == "NFT:ZORB#7"

    def test_free_mint_is_airdrop(self):
        result = Erc721Transformer().transform([_nft(ZERO, USER)], _context())
        row = result.rows[0]
        assert row.type is LedgerType.AIRDROP
        assert row.buy_currency == "NFT:ZORB#7"
        assert row.comment == "NFT mint 0xnft"

    def test_received_is_deposit(self):
        result = Erc721Transformer().transform([_nft(OTHER, USER)], _context())
        assert result.rows[0].type is LedgerType.DEPOSIT
        assert result.rows[0].comment == "NFT in 0xnft"

    def test_paid_mint_is_trade(self):
        result = Erc721Transformer().transform([_nft(ZERO, USER)], _context([_native(value_out="0.000777")]))
        row = result.rows[0]
        assert row.type is LedgerType.TRADE
        assert row.buy_amount == "1"
        assert row.buy_currency == "NFT:ZORB#7"
        assert row.sell_amount == "0.000777"
        assert row.sell_currency == "ETH"
        assert row.fee == "0.0005"
        assert row.comment == "NFT mint (trade) 0xnft"

    def test_purchase_is_trade(self):
        result = Erc721Transformer().transform([_nft(OTHER, USER)], _context([_native(value_out="1")]))
        assert result.rows[0].comment == "NFT purchase (trade) 0xnft"

    def test_unrelated_emits_nothing(self):
        assert Erc721Transformer().transform([_nft(OTHER, "0x3333")], _context()).rows == []


class TestErc1155Transformer:
    def test_quantity_from_value(self):
        result = Erc1155Transformer().transform([_nft(OTHER, USER, value="5")], _context())
        row = result.rows[0]
        assert row.buy_amount == "5"
        assert result.transformer_name == "Erc1155Transformer"

    def test_zero_quantity_dropped(self):
        assert Erc1155Transformer().transform([_nft(OTHER, USER, value="0")], _context()).rows == []
