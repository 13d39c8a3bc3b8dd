"""Fetch a wallet's history from an Etherscan-compatible explorer and write a CoinTracking CSV.

Usage:
    PYTHONPATH=src python scripts/fetch_wallet.py --chain mantle --address 0x... [--api-url URL] \
        [--native-symbol MNT] [--output out.csv]

Uses ETHERSCAN_API_KEY from the environment / .env when set.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("fetch_wallet")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--chain", required=True)
    parser.add_argument("--address", required=True)
    parser.add_argument("--api-url", default=None)
    parser.add_argument("--native-symbol", default=None)
    parser.add_argument("--exchange", default="")
    parser.add_argument("--output", type=Path, default=None)
    return parser.parse_args(argv)


async def main(argv: list[str]) -> int:
    from chainledger.config import settings
    from chainledger.domain.models.ledger import ConvertConfig
    from chainledger.exceptions import ChainLedgerError
    from chainledger.infra.blockchain.evm.explorer_client import ExplorerClient, resolve_chain
    from chainledger.infra.blockchain.evm.loader import ExplorerLoader
    from chainledger.infra.exports.writer import write_cointracking_csv
    from chainledger.infra.http.rate_limited_client import RateLimitedClient
    from chainledger.parser.pipeline import convert
    from chainledger.parser.symbols import SymbolOverrides, SymbolResolver

    args = parse_args(argv)
    try:
        explorer = resolve_chain(args.chain, args.api_url, args.native_symbol)
        async with RateLimitedClient(rate_per_second=settings.fetch_rate_per_second, timeout=60.0) as http:
            client = ExplorerClient(explorer.api_url, http, api_key=settings.etherscan_api_key)
            inputs = await ExplorerLoader(client).load(args.address, explorer.native_symbol)
    except ChainLedgerError as exc:
        logger.error("Fetch failed: %s", exc)
        return 1

    config = ConvertConfig(
        address=args.address,
        native_symbol=explorer.native_symbol,
        exchange=args.exchange or args.chain,
        chain=args.chain,
    )
    resolver = SymbolResolver(SymbolOverrides.load(settings.symbol_overrides_path))
    result = convert(inputs, config, resolver)

    output = args.output or settings.output_dir / f"{args.chain.lower()}_{config.address[:10]}.csv"
    write_cointracking_csv(output, result.rows)
    logger.info("Wrote %d rows to %s", len(result.rows), output)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
