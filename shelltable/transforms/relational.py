"""
Pure table transformations: select, sort, filter, join.

Every function reads its source table(s) and returns a brand-new Table
with a fresh identity. Sources are never mutated, including on failure:
all validation and comparison happens before the result is assembled.
"""

import re
from typing import List, Optional, Sequence, Tuple, Union

from ..core.errors import IndexOutOfRange, InvalidPattern
from ..core.snapshot import TableSnapshot
from ..core.table import Column, Table
from ..core.values import CellValue, SortOrder


def column_list(columns: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """Accept either a list of names or a comma-separated string such as "A,C"."""
    if isinstance(columns, str):
        return tuple(columns.split(","))
    return tuple(columns)


def _assemble(source: Table, headers: Sequence[str], rows: List[List[CellValue]], title: Optional[str]) -> Table:
    table = Table(log=source.log)
    table._restore(
        TableSnapshot(title=title, headers=tuple(headers), rows=tuple(tuple(row) for row in rows))
    )
    return table


def select(source: Table, columns: Sequence[str]) -> Table:
    """
    Project the named columns, in the given order.

    Repeated names are allowed and produce repeated columns.

    Raises:
        UnknownColumn: If any name is not a source header
    """
    indices = [source.column_index(name) for name in columns]
    rows = []
    for row_number, row in enumerate(source.rows):
        if any(i >= len(row) for i in indices):
            raise IndexOutOfRange(f"Row {row_number} is too short for the selected columns")
        rows.append([row[i] for i in indices])
    return _assemble(source, columns, rows, source.title)


def sort(source: Table, column: Column, order: SortOrder = SortOrder.ASCENDING) -> Table:
    """
    Stable sort of the rows by one column.

    Descending is the reverse order of the same stable sort, so rows with
    equal keys keep their source order in both directions.

    Raises:
        IncomparableValues: If the column mixes value kinds
    """
    keys = source.values(column)
    permutation = sorted(
        range(len(keys)),
        key=keys.__getitem__,
        reverse=SortOrder.parse(order) is SortOrder.DESCENDING,
    )
    rows = [list(source.rows[i]) for i in permutation]
    return _assemble(source, source.headers, rows, source.title)


def filter_rows(source: Table, column: Column, pattern: str) -> Table:
    """
    Keep rows whose cell text fully matches a regular expression.

    Raises:
        InvalidPattern: If pattern does not compile
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise InvalidPattern(f"Invalid filter pattern {pattern!r}: {e}") from e
    keys = source.values(column)
    rows = [list(row) for row, key in zip(source.rows, keys) if compiled.fullmatch(key.to_text())]
    return _assemble(source, source.headers, rows, source.title)


def join(
    left: Table,
    right: Table,
    left_column: int,
    right_column: int,
    title: Optional[str] = None,
) -> Table:
    """
    Nested-loop equi-join on one column of each side.

    A left row matching k right rows yields k output rows (left values then
    right values); unmatched rows yield nothing.

    Raises:
        IndexOutOfRange: If a column index does not exist on its side
        IncomparableValues: If compared keys are of different kinds
    """
    left_keys = left.values(left_column)
    right_keys = right.values(right_column)
    rows = []
    for left_row, left_key in zip(left.rows, left_keys):
        for right_row, right_key in zip(right.rows, right_keys):
            if left_key.compare(right_key) == 0:
                rows.append(list(left_row) + list(right_row))
    return _assemble(left, list(left.headers) + list(right.headers), rows, title)
