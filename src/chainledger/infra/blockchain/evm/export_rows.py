"""Turn explorer API items into rows shaped like the explorer's own CSV exports.

The rows go through the same row parsers as uploaded files, so fetched and exported data
share one code path.
"""

from datetime import datetime, timezone
from decimal import Decimal

from chainledger.domain.models.ledger import DATE_FORMAT
from chainledger.parser.utils.fields import format_amount

NATIVE_DECIMALS = 18


def unix_to_datetime(timestamp: str) -> str:
    try:
        seconds = int(timestamp)
    except (TypeError, ValueError):
        return ""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(DATE_FORMAT)


def scale_units(value: str | None, decimals: int | str | None = NATIVE_DECIMALS) -> str:
    """Integer base units (wei) → decimal string. Missing or bad decimals default to 18."""
    try:
        units = int(value or 0)
    except ValueError:
        return "0"
    try:
        places = int(decimals) if decimals not in (None, "") else NATIVE_DECIMALS
    except (TypeError, ValueError):
        places = NATIVE_DECIMALS
    if units == 0:
        return "0"
    return format_amount(Decimal(units).scaleb(-places))


def calculate_fee(gas_used: str | None, gas_price: str | None) -> str:
    try:
        wei = int(gas_used or 0) * int(gas_price or 0)
    except ValueError:
        return "0"
    return scale_units(str(wei))


def extract_method(tx: dict) -> str:
    """Readable method name: functionName's identifier, 'Transfer' for plain sends, else methodId."""
    function_name = tx.get("functionName") or ""
    if "(" in function_name:
        name = function_name.split("(", 1)[0].strip()
        if name:
            return name
    tx_input = tx.get("input", "")
    if tx_input in ("0x", ""):
        return "Transfer"
    method_id = tx.get("methodId") or ""
    if method_id and method_id != "0x":
        return method_id
    return ""


def _is_error(item: dict) -> bool:
    return item.get("isError") == "1"


def native_rows(txs: list[dict], address: str, native_symbol: str) -> list[dict[str, str]]:
    addr = address.lower()
    rows = []
    for tx in txs:
        sender = (tx.get("from") or "").lower()
        recipient = (tx.get("to") or "").lower()
        # Reverted transactions move no value but still pay gas
        value = "0" if _is_error(tx) else scale_units(tx.get("value"))
        rows.append({
            "Transaction Hash": tx.get("hash", ""),
            "Blockno": tx.get("blockNumber", ""),
            "UnixTimestamp": tx.get("timeStamp", ""),
            "DateTime (UTC)": unix_to_datetime(tx.get("timeStamp", "")),
            "From": tx.get("from", ""),
            "To": tx.get("to", ""),
            "ContractAddress": tx.get("contractAddress", ""),
            f"Value_IN({native_symbol})": value if recipient == addr else "0",
            f"Value_OUT({native_symbol})": value if sender == addr and recipient != addr else "0",
            f"TxnFee({native_symbol})": calculate_fee(tx.get("gasUsed"), tx.get("gasPrice")),
            "Status": "Error" if _is_error(tx) else "",
            "Method": extract_method(tx),
        })
    return rows


def token_rows(transfers: list[dict]) -> list[dict[str, str]]:
    return [
        {
            "Transaction Hash": t.get("hash", ""),
            "Blockno": t.get("blockNumber", ""),
            "UnixTimestamp": t.get("timeStamp", ""),
            "DateTime (UTC)": unix_to_datetime(t.get("timeStamp", "")),
            "From": t.get("from", ""),
            "To": t.get("to", ""),
            "TokenValue": scale_units(t.get("value"), t.get("tokenDecimal")),
            "ContractAddress": t.get("contractAddress", ""),
            "TokenName": t.get("tokenName", ""),
            "TokenSymbol": t.get("tokenSymbol", ""),
        }
        for t in transfers
    ]


def internal_rows(txs: list[dict], address: str, native_symbol: str) -> list[dict[str, str]]:
    addr = address.lower()
    rows = []
    for tx in txs:
        if _is_error(tx):
            continue
        value = scale_units(tx.get("value"))
        incoming = (tx.get("to") or "").lower() == addr
        rows.append({
            "Transaction Hash": tx.get("hash", ""),
            "Blockno": tx.get("blockNumber", ""),
            "UnixTimestamp": tx.get("timeStamp", ""),
            "DateTime (UTC)": unix_to_datetime(tx.get("timeStamp", "")),
            "ParentTxFrom": "",  # not available from the API
            "ParentTxTo": "",
            "From": tx.get("from", ""),
            "To": tx.get("to", ""),
            "ContractAddress": tx.get("contractAddress", ""),
            f"Value_IN({native_symbol})": value if incoming else "0",
            f"Value_OUT({native_symbol})": "0" if incoming else value,
            "Type": tx.get("type", ""),
        })
    return rows


def nft_rows(transfers: list[dict], is_erc1155: bool) -> list[dict[str, str]]:
    rows = []
    for t in transfers:
        row = {
            "Transaction Hash": t.get("hash", ""),
            "Blockno": t.get("blockNumber", ""),
            "UnixTimestamp": t.get("timeStamp", ""),
            "DateTime (UTC)": unix_to_datetime(t.get("timeStamp", "")),
            "From": t.get("from", ""),
            "To": t.get("to", ""),
            "ContractAddress": t.get("contractAddress", ""),
            "TokenId": t.get("tokenID", ""),
            "TokenName": t.get("tokenName", ""),
            "TokenSymbol": t.get("tokenSymbol", ""),
        }
        if is_erc1155:
            row["TokenValue"] = t.get("tokenValue", "0")
        rows.append(row)
    return rows
