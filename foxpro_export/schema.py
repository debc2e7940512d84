#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from foxpro_export.type_map import TypeTag


@dataclass(frozen=True)
class ColumnDescriptor:
    name: str
    type: TypeTag

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TableDescriptor:
    """A discovered table and its columns, in provider order."""
    name: str
    columns: Tuple[ColumnDescriptor, ...]

    def __post_init__(self):
        # accept any sequence but store an immutable one
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def column_types(self) -> Tuple[TypeTag, ...]:
        return tuple(c.type for c in self.columns)
