# tests/conftest.py
import sys
from pathlib import Path
import pytest

# project root = parent of tests/
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from foxpro_export import ado


class FakeConnection:
    """
    Stands in for ado.AdoConnection.

    tables: {table_name: [(column_name, raw_type_code), ...]}
    rows:   {table_name: [tuple, ...]}  returned for any SELECT ... FROM <table>
    """

    def __init__(self, tables=None, rows=None, table_rows=None):
        self.tables = dict(tables or {})
        self.rows = dict(rows or {})
        self._table_rows = table_rows
        self.queries = []
        self.batch_sizes = []
        self.close_calls = 0

    def schema_rows(self, schema, restrictions=None):
        if schema == ado.AD_SCHEMA_TABLES:
            if self._table_rows is not None:
                return list(self._table_rows)
            return [{"TABLE_NAME": name, "TABLE_TYPE": "TABLE"} for name in self.tables]
        if schema == ado.AD_SCHEMA_COLUMNS:
            table = restrictions[2]
            return [
                {"TABLE_NAME": table, "COLUMN_NAME": col, "DATA_TYPE": code, "ORDINAL_POSITION": pos}
                for pos, (col, code) in enumerate(self.tables[table], start=1)
            ]
        raise AssertionError(f"unexpected schema {schema}")

    def query(self, sql, batch_size):
        self.queries.append(sql)
        self.batch_sizes.append(batch_size)
        table = sql.rsplit(" FROM ", 1)[1].strip()
        for row in self.rows.get(table, []):
            yield tuple(row)

    def close(self):
        self.close_calls += 1


@pytest.fixture()
def db_file(tmp_path):
    p = tmp_path / "shop.dbc"
    p.write_bytes(b"")
    return p


@pytest.fixture()
def make_connect():
    """Return (connect, connection) so tests can assert on the connection afterwards."""
    def _make(**kwargs):
        conn = FakeConnection(**kwargs)
        calls = []
        def connect(path, provider=None):
            calls.append((path, provider))
            return conn
        connect.calls = calls
        return connect, conn
    return _make


@pytest.fixture()
def shop_tables():
    # 3 Integer, 131 Numeric, 11 Logical, 129 Character, 135 DateTime
    return {
        "products": [("id", 3), ("price", 131), ("active", 11)],
        "customers": [("id", 3), ("name", 129), ("created", 135)],
    }
