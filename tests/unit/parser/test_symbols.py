import json

from chainledger.domain.enums import LedgerType
from chainledger.domain.models.ledger import CoinTrackingRow, ConvertConfig
from chainledger.parser.symbols import COINTRACKING_NATIVE_SYMBOLS, SymbolOverrides, SymbolResolver

USER = "0x1111111111111111111111111111111111111111"


def _config(chain: str = "Mantle") -> ConvertConfig:
    return ConvertConfig(address=USER, native_symbol="MNT", exchange="Mantle", chain=chain)


class TestSymbolOverrides:
    def test_load_camel_case_file(self, tmp_path):
        path = tmp_path / "symbol-overrides.json"
        path.write_text(json.dumps({"nativeSymbols": {"Mantle": "MNT2"}, "tokenSymbols": {"ATOM": "ATOM2"}}))
        overrides = SymbolOverrides.load(path)
        assert overrides.native_symbols == {"Mantle": "MNT2"}
        assert overrides.token_symbols == {"ATOM": "ATOM2"}

    def test_missing_file_is_empty(self, tmp_path):
        overrides = SymbolOverrides.load(tmp_path / "nope.json")
        assert overrides.native_symbols == {}
        assert overrides.token_symbols == {}

    def test_invalid_file_is_empty(self, tmp_path, caplog):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        overrides = SymbolOverrides.load(path)
        assert overrides.token_symbols == {}
        assert "Could not parse symbol overrides" in caplog.text


class TestSymbolResolver:
    def test_builtin_native_symbol(self):
        resolver = SymbolResolver()
        assert resolver.native_symbol_for("Mantle") == "MNT3"
        assert resolver.native_symbol_for("arbitrum") == "AETH"
        assert resolver.native_symbol_for("Nowhere") is None
        assert COINTRACKING_NATIVE_SYMBOLS["Ethereum"] == "ETH"

    def test_override_beats_builtin(self):
        resolver = SymbolResolver(SymbolOverrides(native_symbols={"Mantle": "MNTX"}))
        assert resolver.resolve_native("Mantle", "MNT") == "MNTX"

    def test_unknown_chain_keeps_original(self):
        assert SymbolResolver().resolve_native("Nowhere", "XYZ") == "XYZ"

    def test_token_override(self):
        resolver = SymbolResolver(SymbolOverrides(token_symbols={"ATOM": "ATOM2"}))
        assert resolver.resolve_token("ATOM") == "ATOM2"
        assert resolver.resolve_token("USDC") == "USDC"

    def test_apply_maps_token_overrides_only(self):
        resolver = SymbolResolver(SymbolOverrides(token_symbols={"ATOM": "ATOM2", "NFT:ZORB#1": "nope"}))
        config = resolver.resolve_config(_config())
        row = CoinTrackingRow(
            type=LedgerType.TRADE,
            buy_amount="1",
            buy_currency="ATOM",
            sell_amount="2",
            sell_currency="MNT3",
            fee="0.1",
            fee_currency="MNT3",
            comment="Swap MNT",
        )
        nft_row = CoinTrackingRow(type=LedgerType.DEPOSIT, buy_amount="1", buy_currency="NFT:ZORB#1")
        resolved = resolver.apply([row, nft_row], config)
        assert resolved[0].buy_currency == "ATOM2"
        assert resolved[0].sell_currency == "MNT3"
        assert resolved[0].fee_currency == "MNT3"
        assert resolved[0].comment == "Swap MNT"
        assert resolved[1].buy_currency == "NFT:ZORB#1"

    def test_resolve_config_resolves_native_for_chain(self):
        config = SymbolResolver().resolve_config(_config())
        assert config.native_symbol == "MNT3"
        assert config.chain == "Mantle"

    def test_no_chain_keeps_native_symbol(self):
        config = _config(chain="")
        assert SymbolResolver().resolve_config(config).native_symbol == "MNT"

    def test_token_with_native_ticker_is_not_remapped(self):
        resolver = SymbolResolver()
        config = resolver.resolve_config(
            ConvertConfig(address=USER, native_symbol="ETH", exchange="Arbitrum", chain="Arbitrum")
        )
        row = CoinTrackingRow(type=LedgerType.DEPOSIT, buy_amount="5", buy_currency="ETH")
        assert resolver.apply([row], config)[0].buy_currency == "ETH"
