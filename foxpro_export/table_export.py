#!/usr/bin/env python3
"""
Per-table query building and row normalization.

TableExporter turns a TableDescriptor into:
  - the SELECT command that reads every row,
  - two header lines (type tags, then column names),
  - a lazy sequence of separator-joined data lines.

Rows are pulled from the connection in batches and never materialized as a
whole table. The sequence runs the query once and cannot be restarted.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List

from foxpro_export import config
from foxpro_export.errors import NullValueError, UnsupportedTypeError
from foxpro_export.schema import ColumnDescriptor, TableDescriptor
from foxpro_export.type_map import TypeTag

# Selecting fractional columns natively can make the provider fail to
# materialize a row holding a default/uncommitted value, so they are read
# back as text. The result is padded to a fixed width: an unpadded
# expression column takes its width from the first row and truncates later
# wider values. get_safe_value trims the padding.
_COERCE_TO_TEXT = "PADR(TRANSFORM({name}), " + str(config.COERCED_TEXT_WIDTH) + ") AS {name}"

SELECT_EXPRESSIONS: Dict[TypeTag, str] = {
    TypeTag.INTEGER:   "{name}",
    TypeTag.LOGICAL:   "{name}",
    TypeTag.GENERAL:   "{name}",
    TypeTag.CHARACTER: "{name}",
    TypeTag.DATE:      "{name}",
    TypeTag.DATETIME:  "{name}",
    TypeTag.DOUBLE:    _COERCE_TO_TEXT,
    TypeTag.CURRENCY:  _COERCE_TO_TEXT,
    TypeTag.NUMERIC:   _COERCE_TO_TEXT,
}

_BOOLEAN_TEXT = {"True": "1", "False": "0"}


def select_expression(column: ColumnDescriptor) -> str:
    try:
        template = SELECT_EXPRESSIONS[column.type]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(
            f"No select expression for column '{column.name}' of type {column.type!r}"
        ) from None
    return template.format(name=column.name)


def _to_text(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).hex()
    return str(raw)


def get_safe_value(raw: Any) -> str:
    """
    Normalize one cell for the export file.

    NULL is refused. Otherwise the value is rendered as text and trimmed,
    backslashes are doubled, and the exact strings "True"/"False" become
    "1"/"0".
    """
    if raw is None:
        raise NullValueError("Cell value is NULL")
    safe = _to_text(raw).strip()
    safe = safe.replace("\\", "\\\\")
    return _BOOLEAN_TEXT.get(safe, safe)


class TableExporter:
    """Builds the query for one table and streams its normalized rows."""

    def __init__(self, connection, table: TableDescriptor,
                 batch_size: int = config.FETCH_BATCH_SIZE,
                 separator: str = config.SEPARATOR):
        self.connection = connection
        self.table = table
        self.batch_size = batch_size
        self.separator = separator

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def columns(self) -> List[ColumnDescriptor]:
        return list(self.table.columns)

    def select_columns(self) -> str:
        return ", ".join(select_expression(c) for c in self.table.columns)

    def select_command(self) -> str:
        return config.SELECT_COMMAND_FORMAT.format(
            columns=self.select_columns(), table=self.table.name
        )

    def joined_column_types(self) -> str:
        return self.separator.join(str(c.type) for c in self.table.columns)

    def joined_column_names(self) -> str:
        return self.separator.join(c.name for c in self.table.columns)

    def header_lines(self) -> List[str]:
        return [self.joined_column_types(), self.joined_column_names()]

    def joined_value_rows(self) -> Iterator[str]:
        """
        Return an iterator of separator-joined lines, one per row, in driver order.

        The SELECT is built eagerly, so an unsupported column type raises
        here rather than on the first iteration.
        """
        sql = self.select_command()
        return self._normalized_rows(sql)

    def _normalized_rows(self, sql: str) -> Iterator[str]:
        for row_number, row in enumerate(self.connection.query(sql, self.batch_size), start=1):
            values = []
            for column, raw in zip(self.table.columns, row):
                try:
                    values.append(get_safe_value(raw))
                except NullValueError:
                    raise NullValueError(
                        f"NULL in {self.table.name}.{column.name} at row {row_number}"
                    ) from None
            yield self.separator.join(values)
