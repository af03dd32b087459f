"""
Shell Table Engine

Mutable in-memory tables with a replayable, per-identity call history.
"""

__version__ = "0.1.0"

from .core.table import Cell, Table
from .core.values import CellKind, CellValue, SortOrder
from .core.snapshot import TableSnapshot
from .core.errors import TableError
from .history import CallLog, CallRecord, shared_call_log

__all__ = [
    "Cell",
    "Table",
    "CellKind",
    "CellValue",
    "SortOrder",
    "TableSnapshot",
    "TableError",
    "CallLog",
    "CallRecord",
    "shared_call_log",
]
