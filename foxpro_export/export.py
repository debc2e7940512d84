#!/usr/bin/env python3
"""
Write every table of a FoxPro database to <table>.csv, plus an optional manifest.

File layout
-----------
  line 1   column type tags joined by "|"
  line 2   column names joined by "|"
  line 3+  one normalized data row per line, same column order

Tables are written one after another. A file already present under the same
name is replaced. Files written for earlier tables are kept if a later table
fails; the failing table's own partial file is removed.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Callable, Dict, List

from tqdm import tqdm

from foxpro_export import ado, config
from foxpro_export.session import DatabaseSession
from foxpro_export.table_export import TableExporter


def info(msg: str) -> None:
    print(f"[export] {msg}", flush=True)


def sha256_file(path: str | Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def export_table(exporter: TableExporter, out_dir: str | Path,
                 encoding: str = config.OUTPUT_ENCODING,
                 progress: bool = True) -> Dict[str, Any]:
    out_path = Path(out_dir) / f"{exporter.name}{config.CSV_EXTENSION}"

    # builds the SELECT; unsupported column types fail before the file is touched
    lines = exporter.joined_value_rows()

    if out_path.exists():
        info(f"File '{out_path.name}' exists. Deleting...")
        out_path.unlink()

    info(f"  Writing to file '{out_path.name}'...")
    rows = 0
    try:
        with open(out_path, "w", newline="", encoding=encoding) as f:
            for header in exporter.header_lines():
                f.write(header + "\n")
            for line in tqdm(lines, desc=exporter.name, unit="rows",
                             leave=False, disable=not progress):
                f.write(line + "\n")
                rows += 1
    except Exception:
        out_path.unlink(missing_ok=True)
        raise
    finally:
        lines.close()

    info(f"Finished writing file {out_path} ({rows} rows).")
    return {"table": exporter.name, "rows": rows, "csv": out_path.name, "sha256": sha256_file(out_path)}


def write_manifest(out_dir: str | Path, database_path: str, results: List[Dict[str, Any]]) -> Path:
    path = Path(out_dir) / config.MANIFEST_NAME
    manifest = {"database": Path(database_path).name, "tables": results}
    path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    info(f"Wrote manifest with {len(results)} tables -> {path}")
    return path


def export_session(session: DatabaseSession, out_dir: str | Path,
                   encoding: str = config.OUTPUT_ENCODING,
                   manifest: bool = False,
                   progress: bool = True) -> List[Dict[str, Any]]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    results = []
    for exporter in tqdm(session.exporters, desc="Tables", unit="table", disable=not progress):
        results.append(export_table(exporter, out, encoding=encoding, progress=progress))

    if manifest:
        write_manifest(out, session.database_path, results)
    return results


def export_database(database_path: str, out_dir: str | Path,
                    connect: Callable[..., Any] = ado.open_connection,
                    provider: str = config.PROVIDER,
                    batch_size: int = config.FETCH_BATCH_SIZE,
                    encoding: str = config.OUTPUT_ENCODING,
                    manifest: bool = False,
                    progress: bool = True) -> List[Dict[str, Any]]:
    """Open the database, export every table, and close the connection whatever happens."""
    with DatabaseSession.open(database_path, connect=connect,
                              provider=provider, batch_size=batch_size) as session:
        return export_session(session, out_dir, encoding=encoding,
                              manifest=manifest, progress=progress)
