"""
Exception types for the table engine.
"""


class TableError(Exception):
    """Base class for every failure raised by the table engine."""
    pass


class InconsistentArity(TableError):
    """Raised when a row's length differs from the header count."""
    pass


class NoRowStarted(TableError):
    """Raised when a value is pushed before any row was begun."""
    pass


class IndexOutOfRange(TableError, IndexError):
    """Raised when a row or column index does not exist."""
    pass


class UnknownColumn(TableError, KeyError):
    """Raised when a column name is not among the table headers."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class IncomparableValues(TableError, TypeError):
    """Raised when two cell values of different kinds are compared."""
    pass


class UnsupportedValue(TableError, TypeError):
    """Raised when a raw scalar cannot be converted to a cell value."""
    pass


class InvalidPattern(TableError, ValueError):
    """Raised when a filter pattern is not a valid regular expression."""
    pass


class InvalidSortOrder(TableError, ValueError):
    """Raised when a sort order is neither ascending nor descending."""
    pass


class InvalidStep(TableError):
    """Raised when a replay step is outside the recorded history."""
    pass


class NothingToRollBack(TableError):
    """Raised when rollback is requested on an empty history."""
    pass


class UnregisteredOperation(TableError):
    """Raised when replay meets a call with no registered handler."""
    pass


class AdapterError(TableError):
    """Raised by ingestion adapters on I/O or parse failure."""
    pass
