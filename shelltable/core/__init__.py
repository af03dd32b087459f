"""
Core table primitives.

This module provides the foundational abstractions:
- CellValue: Closed, ordered scalar variant
- TableSnapshot: Frozen table content
- new_table_id: Process-unique identities
- Errors: Typed failures of the engine

Table and Cell live in core.table (imported by the package root).
"""

from .values import CellKind, CellValue, SortOrder
from .snapshot import TableSnapshot
from .ids import new_table_id
from .errors import (
    AdapterError,
    IncomparableValues,
    InconsistentArity,
    IndexOutOfRange,
    InvalidPattern,
    InvalidSortOrder,
    InvalidStep,
    NoRowStarted,
    NothingToRollBack,
    TableError,
    UnknownColumn,
    UnregisteredOperation,
    UnsupportedValue,
)

__all__ = [
    "CellKind",
    "CellValue",
    "SortOrder",
    "TableSnapshot",
    "new_table_id",
    "AdapterError",
    "IncomparableValues",
    "InconsistentArity",
    "IndexOutOfRange",
    "InvalidPattern",
    "InvalidSortOrder",
    "InvalidStep",
    "NoRowStarted",
    "NothingToRollBack",
    "TableError",
    "UnknownColumn",
    "UnregisteredOperation",
    "UnsupportedValue",
]
