#!/usr/bin/env python3
"""
Database session: one connection, every user table, one exporter per table.

The session is built completely or not at all. If any table or column fails
to introspect, or a column reports a type code with no tag, the connection is
closed before the error propagates.

Usage
-----
  with DatabaseSession.open("data/shop.dbc") as session:
      for exporter in session.exporters:
          ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List

from foxpro_export import ado, config
from foxpro_export.errors import (
    DatabaseConnectionError,
    SchemaIntrospectionError,
    UnsupportedTypeError,
)
from foxpro_export.schema import ColumnDescriptor, TableDescriptor
from foxpro_export.table_export import TableExporter
from foxpro_export.type_map import map_type_code

SYSTEM_TABLE_TYPES = {"SYSTEM TABLE", "SYSTEM VIEW"}


def info(msg: str) -> None:
    print(f"[session] {msg}", flush=True)


# ---------- introspection ----------

def _required(row: Dict[str, Any], field: str, what: str) -> Any:
    value = row.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise SchemaIntrospectionError(f"{what} schema row has no {field}: {row!r}")
    return value


def list_table_names(connection) -> List[str]:
    names = []
    for row in connection.schema_rows(ado.AD_SCHEMA_TABLES):
        name = str(_required(row, "TABLE_NAME", "Table")).strip()
        table_type = str(row.get("TABLE_TYPE") or "TABLE").strip().upper()
        if table_type in SYSTEM_TABLE_TYPES:
            continue
        names.append(name)
    return names


def list_columns(connection, table: str) -> List[ColumnDescriptor]:
    rows = connection.schema_rows(ado.AD_SCHEMA_COLUMNS, (None, None, table, None))
    if rows and all(row.get("ORDINAL_POSITION") is not None for row in rows):
        rows = sorted(rows, key=lambda r: int(r["ORDINAL_POSITION"]))

    columns = []
    for row in rows:
        name = str(_required(row, "COLUMN_NAME", "Column")).strip()
        raw_type = _required(row, "DATA_TYPE", "Column")
        try:
            tag = map_type_code(raw_type)
        except UnsupportedTypeError as e:
            raise UnsupportedTypeError(f"{table}.{name}: {e}") from None
        columns.append(ColumnDescriptor(name, tag))
    return columns


def load_tables(connection) -> List[TableDescriptor]:
    info("Extracting tables...")
    tables = []
    for name in list_table_names(connection):
        info(f"  Extracting table '{name}'...")
        tables.append(TableDescriptor(name, list_columns(connection, name)))
    return tables


# ---------- session ----------

class DatabaseSession:
    """Owns the database connection and the discovered tables."""

    def __init__(self, connection, tables: List[TableDescriptor],
                 database_path: str = "", batch_size: int = config.FETCH_BATCH_SIZE):
        self.connection = connection
        self.tables = list(tables)
        self.database_path = database_path
        self.exporters = [TableExporter(connection, t, batch_size=batch_size) for t in self.tables]
        self._closed = False

    @classmethod
    def open(cls, database_path: str,
             connect: Callable[..., Any] = ado.open_connection,
             provider: str = config.PROVIDER,
             batch_size: int = config.FETCH_BATCH_SIZE) -> "DatabaseSession":
        path = Path(database_path)
        if not path.is_file():
            raise DatabaseConnectionError(f"Database file not found: {database_path}")

        info(f"Starting connection to {path}...")
        connection = connect(str(path), provider=provider)
        try:
            tables = load_tables(connection)
        except Exception:
            info("Closing the database connection...")
            connection.close()
            raise
        info(f"Found {len(tables)} tables.")
        return cls(connection, tables, database_path=str(path), batch_size=batch_size)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        info("Closing the database connection...")
        self.connection.close()

    def __enter__(self) -> "DatabaseSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
