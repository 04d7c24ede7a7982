"""Command line entry point for the CSV bulk loader.

Usage:
    salesgraph-import --data-dir ./csv_data --confirm
    salesgraph-import --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from salesgraph.core.config import get_settings
from salesgraph.core.database import MongoQueryExecutor, create_mongo_client, get_database
from salesgraph.core.exceptions import SalesGraphError
from salesgraph.core.logging import configure_logging
from salesgraph.features.importer.service import import_directory


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Replace customers, orders and products with CSV data",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(settings.import_data_dir),
        help=f"Directory with customers.csv, orders.csv, products.csv "
        f"(default: {settings.import_data_dir})",
    )
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm deleting and reloading every collection",
    )
    mode_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the files and report counts without writing",
    )
    return parser


async def run_import(data_dir: Path, dry_run: bool) -> int:
    """Run the import against the configured database; returns an exit code."""
    client = create_mongo_client()
    try:
        executor = MongoQueryExecutor(get_database(client))
        summary = await import_directory(executor, data_dir, dry_run=dry_run)
    except FileNotFoundError as e:
        print(f"[FAIL] {e}")
        return 1
    except SalesGraphError as e:
        print(f"[FAIL] {e.message}")
        for error in e.details.get("errors", []):
            print(f"       {error.get('file')} row {error.get('row_index')}: "
                  f"{error.get('error_message')}")
        return 1
    finally:
        await client.close()

    verb = "Validated" if dry_run else "Imported"
    for collection, count in summary.counts.items():
        print(f"[OK] {verb} {count} records into {collection}")
    print("All data imported successfully!" if not dry_run else "Dry run completed.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = create_parser().parse_args(argv)
    configure_logging()
    return asyncio.run(run_import(args.data_dir, dry_run=args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
