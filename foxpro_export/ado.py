#!/usr/bin/env python3
"""
ADO access to a Visual FoxPro database container (.dbc).

Goes through adodbapi (bundled with pywin32) and the VFPOLEDB provider, so it
only runs on Windows with the provider installed.

Public API
----------
connection_string(database_path, provider) -> str
open_connection(database_path, provider=PROVIDER) -> AdoConnection
AdoConnection.schema_rows(schema, restrictions=None) -> list[dict]
AdoConnection.query(sql, batch_size) -> iterator of row tuples
AdoConnection.close() -> None
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from foxpro_export import config
from foxpro_export.errors import DatabaseConnectionError, SchemaIntrospectionError

# ADO SchemaEnum
AD_SCHEMA_COLUMNS = 4
AD_SCHEMA_TABLES = 20


def connection_string(database_path: str, provider: str = config.PROVIDER) -> str:
    return config.CONNECTION_STRING_FORMAT.format(provider=provider, path=database_path)


def open_connection(database_path: str, provider: str = config.PROVIDER) -> "AdoConnection":
    try:
        import adodbapi
    except ImportError as e:
        raise DatabaseConnectionError(
            "adodbapi is not importable; FoxPro databases are read through pywin32 on Windows"
        ) from e

    try:
        conn = adodbapi.connect(connection_string(database_path, provider))
    except adodbapi.Error as e:
        raise DatabaseConnectionError(f"Cannot open database {database_path}: {e}") from e
    return AdoConnection(conn, driver_error=adodbapi.Error)


class AdoConnection:
    """Wraps an adodbapi connection with the three calls the exporter needs."""

    def __init__(self, conn, driver_error=Exception):
        self._conn = conn
        self._driver_error = driver_error

    def schema_rows(self, schema: int,
                    restrictions: Optional[Sequence[Optional[str]]] = None) -> List[Dict[str, Any]]:
        """Read an OpenSchema rowset into a list of {field name: value} dicts."""
        adodb = self._conn.connector
        try:
            if restrictions is None:
                recordset = adodb.OpenSchema(schema)
            else:
                recordset = adodb.OpenSchema(schema, tuple(restrictions))
            rows = []
            fields = recordset.Fields
            while not recordset.EOF:
                rows.append({fields.Item(i).Name: fields.Item(i).Value for i in range(fields.Count)})
                recordset.MoveNext()
            recordset.Close()
        except Exception as e:
            raise SchemaIntrospectionError(f"OpenSchema({schema}) failed: {e}") from e
        return rows

    def query(self, sql: str, batch_size: int) -> Iterator[Tuple[Any, ...]]:
        cursor = self._conn.cursor()
        try:
            try:
                cursor.execute(sql)
            except self._driver_error as e:
                raise DatabaseConnectionError(f"Query failed: {sql}: {e}") from e
            while True:
                try:
                    batch = cursor.fetchmany(batch_size)
                except self._driver_error as e:
                    raise DatabaseConnectionError(f"Fetching rows failed: {sql}: {e}") from e
                if not batch:
                    break
                for row in batch:
                    yield tuple(row)
        finally:
            cursor.close()

    def close(self) -> None:
        self._conn.close()
