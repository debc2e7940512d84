#!/usr/bin/env python3
"""
Column type tags and the provider type-code lookup.

VFPOLEDB reports column types as ADO DataTypeEnum codes. The public FoxPro
documentation lists the declared field types but not these codes; the values
below were read back from a Visual FoxPro 9 database. Several declared types
share one code, so the lookup is many-to-one onto the tag.

  code  tag        declared types
  ----  ---------  ---------------------------------------------------
  3     Integer    Integer, Integer (AutoInc)
  5     Double     Double
  6     Currency   Currency
  11    Logical    Logical
  128   General    General, Blob, Memo (binary), Varbinary
  129   Character  Character, Character (binary), Memo, Varchar, Varchar (binary)
  131   Numeric    Numeric, Float
  133   Date       Date
  135   DateTime   DateTime
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from foxpro_export.errors import UnsupportedTypeError


class TypeTag(Enum):
    INTEGER = "Integer"
    DOUBLE = "Double"
    CURRENCY = "Currency"
    LOGICAL = "Logical"
    GENERAL = "General"
    CHARACTER = "Character"
    NUMERIC = "Numeric"
    DATE = "Date"
    DATETIME = "DateTime"

    def __str__(self) -> str:
        return self.value


RAW_TYPE_CODES: Dict[int, TypeTag] = {
    3:   TypeTag.INTEGER,
    5:   TypeTag.DOUBLE,
    6:   TypeTag.CURRENCY,
    11:  TypeTag.LOGICAL,
    128: TypeTag.GENERAL,
    129: TypeTag.CHARACTER,
    131: TypeTag.NUMERIC,
    133: TypeTag.DATE,
    135: TypeTag.DATETIME,
}


def _as_code(raw: Any) -> int:
    # bool is an int subclass; a True/False DATA_TYPE is a provider bug, not code 1/0
    if isinstance(raw, bool):
        raise UnsupportedTypeError(f"Unsupported column type code: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdecimal():
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise UnsupportedTypeError(f"Unsupported column type code: {raw!r}")


def map_type_code(raw: Any) -> TypeTag:
    """Return the tag for a provider type code, or raise UnsupportedTypeError."""
    code = _as_code(raw)
    try:
        return RAW_TYPE_CODES[code]
    except KeyError:
        raise UnsupportedTypeError(f"Unsupported column type code: {code}") from None
