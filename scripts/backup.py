#!/usr/bin/env python3
"""Offline backup and restore for the Chronos record store.

Run from the project root while the API is stopped:

    python3 scripts/backup.py export [--output FILE]
    python3 scripts/backup.py restore FILE [--dry-run]

Uses the same settings (STORE_URL, LEGACY_DATA_DIR) as the service. A restore
replaces the whole store, exactly like the upload endpoint.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from app.core.config import Settings  # noqa: E402
from app.services.backup import (  # noqa: E402
    InvalidPayloadError,
    backup_filename,
    parse_employee_payload,
    serialize_employees,
)
from app.services.record_store import RecordStore, RecordStoreError  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export or restore Chronos employee records")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Write all stored records to a JSON backup file")
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Target file (default: chronos_backup_<date>.json in the current directory)",
    )

    restore = subparsers.add_parser("restore", help="Replace all stored records with a JSON backup file")
    restore.add_argument("file", type=Path, help="Backup file produced by export")
    restore.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the backup file without writing to the store",
    )
    return parser.parse_args(argv)


async def export_records(store: RecordStore, output: Path) -> int:
    employees = await store.get_all()
    output.write_text(serialize_employees(employees), encoding="utf-8")
    logger.info("Exported %d records to %s", len(employees), output)
    return len(employees)


async def restore_records(store: RecordStore, source: Path, *, dry_run: bool = False) -> int:
    employees = parse_employee_payload(source.read_bytes())
    if dry_run:
        logger.info("[DRY RUN] %s contains %d valid records, store not modified", source, len(employees))
        return len(employees)

    await store.put_all(employees)
    logger.info("Restored %d records from %s", len(employees), source)
    return len(employees)


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    store = RecordStore(settings.resolved_store_url())
    try:
        if args.command == "export":
            await export_records(store, args.output or Path(backup_filename()))
        else:
            await restore_records(store, args.file, dry_run=args.dry_run)
    except InvalidPayloadError as e:
        logger.error("Invalid backup file: %s", e)
        return 2
    except (RecordStoreError, OSError) as e:
        logger.error("Backup command failed: %s", e)
        return 1
    finally:
        await store.close()
    return 0


def main() -> None:
    args = parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
