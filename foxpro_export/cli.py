#!/usr/bin/env python3
"""
Export every table of a Visual FoxPro database container to pipe-delimited files.

Usage:
  foxpro-export path/to/database.dbc TargetCsvDir/ [--yes] [--manifest] [--no-progress]
  python -m foxpro_export path/to/database.dbc TargetCsvDir/

The target directory must not exist. If it does, you are asked whether to
delete and recreate it (--yes answers for you).

Exit status: 0 on success, 2 on bad arguments, 1 when the export itself fails.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import Callable, List, Optional

from foxpro_export import config
from foxpro_export.errors import ExportError, UsageError
from foxpro_export.export import export_database

PROG = "foxpro-export"
USAGE = f"Usage: {PROG} database{config.DATABASE_EXTENSION} TargetCsvDir/"


def info(msg: str) -> None:
    print(f"[cli] {msg}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=PROG, description="Export FoxPro tables to pipe-delimited .csv files.")
    ap.add_argument("database", help=f"Path to the {config.DATABASE_EXTENSION} database container")
    ap.add_argument("target_dir", help="Directory to create and fill with one file per table")
    ap.add_argument("--yes", "-y", action="store_true", help="Delete an existing target directory without asking")
    ap.add_argument("--manifest", action="store_true", help=f"Also write {config.MANIFEST_NAME} (row counts + sha256)")
    ap.add_argument("--no-progress", action="store_true", help="Disable progress bars")
    ap.add_argument("--provider", default=config.PROVIDER, help="OLE DB provider (default: %(default)s)")
    ap.add_argument("--encoding", default=config.OUTPUT_ENCODING, help="Output file encoding (default: %(default)s)")
    ap.add_argument("--batch-size", type=int, default=config.FETCH_BATCH_SIZE,
                    help="Rows fetched per round trip (default: %(default)s)")
    return ap


def validate_paths(database: str, target_dir: str,
                   assume_yes: bool = False,
                   ask: Optional[Callable[[str], str]] = None) -> tuple[Path, Path]:
    """
    Check the arguments and clear the target directory if the user agrees.

    Raises UsageError on any problem; nothing on disk changes in that case.
    """
    if not database or not database.strip() or not target_dir or not target_dir.strip():
        raise UsageError("Incorrect command usage.")

    db_path = Path(database).expanduser().resolve()
    out_dir = Path(target_dir).expanduser().resolve()

    if db_path.suffix.lower() != config.DATABASE_EXTENSION:
        raise UsageError(
            f"Unexpected file extension '{db_path.suffix}'. It should be '{config.DATABASE_EXTENSION}'"
        )
    if not db_path.is_file():
        raise UsageError(f"Database path does not exist: {db_path}")

    if out_dir.exists():
        if not out_dir.is_dir():
            raise UsageError(f"Target path exists and is not a directory: {out_dir}")
        print(f"Target directory already exists: {out_dir}")
        if not assume_yes:
            ask = ask or input
            try:
                answer = ask("Would you like to delete the target directory and recreate it? [Y|N]: ")
            except EOFError:
                answer = "N"
            if (answer or "N").strip().upper() != "Y":
                raise UsageError(f"Target directory already exists: {out_dir}")
        info(f"Deleting target directory: {out_dir}")
        shutil.rmtree(out_dir)

    return db_path, out_dir


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.batch_size <= 0:
            raise UsageError(f"--batch-size must be positive, got {args.batch_size}")
        db_path, out_dir = validate_paths(args.database, args.target_dir, assume_yes=args.yes)
    except UsageError as e:
        print(e, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    info(f"Creating target directory {out_dir}...")
    out_dir.mkdir(parents=True)

    try:
        results = export_database(
            str(db_path), out_dir,
            provider=args.provider,
            batch_size=args.batch_size,
            encoding=args.encoding,
            manifest=args.manifest,
            progress=not args.no_progress,
        )
    except (ExportError, LookupError, OSError) as e:
        print(f"[cli] export failed: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    total_rows = sum(r["rows"] for r in results)
    info(f"Finished! Exported {len(results)} tables ({total_rows} rows) to {out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
