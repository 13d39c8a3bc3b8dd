"""Convert a folder of explorer CSV exports into one CoinTracking CSV.

Usage:
    PYTHONPATH=src python scripts/convert_exports.py DIR --address 0x... --native-symbol MNT \
        [--chain Mantle] [--exchange "Mantle Main"] [--cutoff 2024-01-01] [--output out.csv] [--record]

Every *.csv in DIR is classified by its header row; files of unknown type are skipped.
With --record the run is stored in the conversion history database.
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("convert_exports")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("directory", type=Path)
    parser.add_argument("--address", required=True)
    parser.add_argument("--native-symbol", required=True)
    parser.add_argument("--chain", default="")
    parser.add_argument("--exchange", default="")
    parser.add_argument("--cutoff", type=datetime.fromisoformat, default=None)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--record", action="store_true")
    return parser.parse_args(argv)


async def record_conversion(settings, config, files: list[Path], output: Path, result) -> str:
    from chainledger.db.repos.conversion_repo import ConversionRepo, generate_import_id
    from chainledger.db.session import build_engine, build_session_factory, create_schema

    engine = build_engine(settings.database_url, echo=False)
    try:
        await create_schema(engine)
        date_from, date_to = result.date_range
        chain = config.chain or "unknown"
        import_id = generate_import_id(chain, config.address, date_to[:7] or None)
        async with build_session_factory(engine)() as session:
            await ConversionRepo(session).save(
                record_id=import_id,
                chain=chain,
                address=config.address,
                native_symbol=config.native_symbol,
                input_files=[f.name for f in files],
                output_file=str(output),
                row_count=len(result.rows),
                date_from=date_from[:10],
                date_to=date_to[:10],
            )
            await session.commit()
        return import_id
    finally:
        await engine.dispose()


async def main(argv: list[str]) -> int:
    from chainledger.config import settings
    from chainledger.domain.enums import CsvType
    from chainledger.domain.models.ledger import ConvertConfig
    from chainledger.infra.exports.detect import categorize_files, list_csv_files
    from chainledger.infra.exports.reader import read_csv
    from chainledger.infra.exports.writer import write_cointracking_csv
    from chainledger.parser.pipeline import ConversionInputs, convert
    from chainledger.parser.symbols import SymbolOverrides, SymbolResolver

    args = parse_args(argv)
    separator(f"Converting {args.directory}")

    files = list_csv_files(args.directory)
    if not files:
        logger.error("No CSV files found in %s", args.directory)
        return 1

    inputs = ConversionInputs()
    for csv_type, paths in categorize_files(files).items():
        for path in paths:
            if csv_type is CsvType.UNKNOWN:
                logger.warning("Skipping %s: unknown export type", path.name)
                continue
            print(f"  {csv_type.display_name:<28} {path.name}")
            inputs.add(csv_type, read_csv(path))

    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    config = ConvertConfig(
        address=args.address,
        native_symbol=args.native_symbol,
        exchange=args.exchange or args.chain,
        chain=args.chain,
        cutoff=args.cutoff,
    )
    resolver = SymbolResolver(SymbolOverrides.load(settings.symbol_overrides_path))
    result = convert(inputs, config, resolver)

    output = args.output or settings.output_dir / "cointracking.csv"
    write_cointracking_csv(output, result.rows)
    date_from, date_to = result.date_range
    print(f"\n  Rows:   {len(result.rows)}")
    print(f"  Range:  {date_from or '-'} .. {date_to or '-'}")
    print(f"  Output: {output}")

    if args.record:
        import_id = await record_conversion(settings, config, files, output, result)
        print(f"  Recorded as {import_id}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
