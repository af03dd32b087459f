"""
Table: the core mutable entity.

A table has an identity, an optional title, an optional header row and an
ordered list of rows. Public builder operations are tracked: each call
appends a CallRecord to the table's CallLog under the table identity, so
the state can later be rolled back or replayed.

The underscore methods (_set_title, _add_header, ...) are the untracked
implementations. Replay handlers and transformations use them, so replay
never writes to any log.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..history.log import CallLog, shared_call_log
from ..history.records import CallRecord
from ..render.json import render_json
from ..render.text import render_delimited, render_text
from .errors import (
    InconsistentArity,
    IndexOutOfRange,
    NoRowStarted,
    NothingToRollBack,
    TableError,
    UnknownColumn,
    UnsupportedValue,
)
from .ids import new_table_id
from .snapshot import TableSnapshot
from .values import CellValue, SortOrder

logger = logging.getLogger(__name__)

TABLE_COMPONENT = "table"
TRANSFORM_COMPONENT = "transform"
INGEST_COMPONENT = "ingest"

Column = Union[int, str]


def _recordable(value: Any) -> Any:
    """Form of an argument that can be kept in the record of a failed call."""
    if value is None or isinstance(value, (str, int, float, CellValue)):
        return value
    try:
        return CellValue.of(value)
    except UnsupportedValue:
        return repr(value)


@dataclass(frozen=True)
class Cell:
    """
    Reference to one position of a table snapshot.

    Fields:
        column: Column index
        row: Row index
        header: Header name at column, or None for a header-less table
        value: Cell value at (row, column)
    """
    column: int
    row: int
    header: Optional[str]
    value: CellValue

    def with_header(self, header: str) -> "Cell":
        return replace(self, header=header)

    def with_value(self, value: Any) -> "Cell":
        return replace(self, value=CellValue.of(value))


class Table:
    """
    Mutable table bound to a call log.

    Usage:
        table = Table().with_title("books").with_header("id").with_header("title")
        table.begin_row().push_value(1).push_value("Dune")
        print(table)
    """

    def __init__(self, identity: Optional[int] = None, log: Optional[CallLog] = None) -> None:
        self.identity: int = identity if identity is not None else new_table_id()
        self.title: Optional[str] = None
        self.headers: List[str] = []
        self.rows: List[List[CellValue]] = []
        self._current_row: Optional[int] = None
        self._log: CallLog = log if log is not None else shared_call_log()
        # replay position when this instance is behind the head of its log
        self._position: Optional[int] = None

    @classmethod
    def from_snapshot(cls, snapshot: TableSnapshot, log: Optional[CallLog] = None) -> "Table":
        """
        Create a table holding the snapshot's content.

        Tracked as a single ingest/load call, so replaying the new identity
        reproduces the content without reading the source again.
        """
        table = cls(log=log)
        table._restore(snapshot)
        table._record(INGEST_COMPONENT, "load", True, {"snapshot": snapshot})
        return table

    @property
    def log(self) -> CallLog:
        return self._log

    @property
    def position(self) -> Optional[int]:
        """Replay step this instance sits at, or None when at the head of its history."""
        return self._position

    # ------------------------------------------------------------------
    # Tracking

    def _record(self, component: str, operation: str, succeeded: bool, arguments: Dict[str, Any]) -> None:
        self._log.record(
            self.identity,
            CallRecord(component=component, operation=operation, succeeded=succeeded, arguments=dict(arguments)),
        )

    @contextmanager
    def _tracking(self, operation: str, **arguments: Any) -> Iterator[Dict[str, Any]]:
        self._fork_if_rolled_back()
        try:
            yield arguments
        except TableError:
            # the raw arguments may not be JSON-encodable
            self._record(
                TABLE_COMPONENT, operation, False, {k: _recordable(v) for k, v in arguments.items()}
            )
            raise
        self._record(TABLE_COMPONENT, operation, True, arguments)

    def _fork_if_rolled_back(self) -> None:
        if self._position is None:
            return
        surviving = self._effective_history()
        previous = self.identity
        self.identity = new_table_id()
        self._log.extend(self.identity, surviving)
        self._position = None
        logger.info(
            "Forked rolled-back table %d into %d at step %d",
            previous,
            self.identity,
            len(surviving),
            extra={"trace_id": str(self.identity)},
        )

    def _effective_history(self) -> Tuple[CallRecord, ...]:
        history = self._log.history_of(self.identity)
        if self._position is not None:
            return history[: self._position]
        return history

    def _derive(self, result: "Table", operation: str, **arguments: Any) -> "Table":
        # the derived identity starts from this table's history plus the derivation itself
        call = CallRecord(component=TRANSFORM_COMPONENT, operation=operation, succeeded=True, arguments=arguments)
        self._log.extend(result.identity, self._effective_history() + (call,))
        return result

    # ------------------------------------------------------------------
    # Untracked implementations

    def _set_title(self, title: Optional[str]) -> None:
        self.title = title

    def _add_header(self, name: str) -> None:
        self.headers.append(name)

    def _start_row(self) -> None:
        self.rows.append([])
        self._current_row = len(self.rows) - 1

    def _push(self, value: CellValue) -> None:
        if self._current_row is None:
            raise NoRowStarted("No row has been started; call begin_row() first")
        self.rows[self._current_row].append(value)

    def _apply_cell(self, column: int, row: int, header: Optional[str], value: CellValue) -> None:
        # validate both parts before touching anything
        if self.headers and not 0 <= column < len(self.headers):
            raise IndexOutOfRange(f"Column index {column} out of range (0..{len(self.headers) - 1})")
        if self.rows:
            if not 0 <= row < len(self.rows):
                raise IndexOutOfRange(f"Row index {row} out of range (0..{len(self.rows) - 1})")
            if not 0 <= column < len(self.rows[row]):
                raise IndexOutOfRange(f"Column index {column} out of range for row {row}")
        if self.headers and header is not None:
            self.headers[column] = header
        if self.rows:
            self.rows[row][column] = value

    def _restore(self, snapshot: TableSnapshot) -> None:
        self.title = snapshot.title
        self.headers = list(snapshot.headers)
        self.rows = [list(row) for row in snapshot.rows]
        self._current_row = None

    def _adopt(self, other: "Table") -> None:
        self.title = other.title
        self.headers = other.headers
        self.rows = other.rows
        self._current_row = other._current_row

    def _retag(self, identity: int) -> None:
        self.identity = identity

    # ------------------------------------------------------------------
    # Tracked builder operations

    def with_title(self, title: Optional[str]) -> "Table":
        with self._tracking("with_title", title=title):
            self._set_title(title)
        return self

    def with_header(self, name: str) -> "Table":
        with self._tracking("with_header", name=name):
            self._add_header(name)
        return self

    def begin_row(self) -> "Table":
        with self._tracking("begin_row"):
            self._start_row()
        return self

    def push_value(self, value: Any) -> "Table":
        with self._tracking("push_value", value=value) as arguments:
            cell_value = CellValue.of(value)
            arguments["value"] = cell_value
            self._push(cell_value)
        return self

    def apply(self, cell: Cell) -> "Table":
        """
        Write a cell's header and value back to its position.

        The header part is skipped when the table has no headers and the
        value part is skipped when it has no rows.
        """
        with self._tracking(
            "apply", column=cell.column, row=cell.row, header=cell.header, value=cell.value
        ) as arguments:
            cell_value = CellValue.of(cell.value)
            arguments["value"] = cell_value
            self._apply_cell(cell.column, cell.row, cell.header, cell_value)
        return self

    def with_id(self, identity: int) -> "Table":
        """Explicitly re-tag this table. Not tracked."""
        self._retag(identity)
        self._position = None
        return self

    # ------------------------------------------------------------------
    # Access

    def header_row(self) -> Optional[List[str]]:
        return list(self.headers) if self.headers else None

    def column_index(self, column: Column) -> int:
        """
        Resolve a column name or index to an index.

        Raises:
            UnknownColumn: If a name is not among the headers
            IndexOutOfRange: If an index is negative or beyond the headers
        """
        if isinstance(column, str):
            try:
                return self.headers.index(column)
            except ValueError:
                raise UnknownColumn(f"Unknown column: {column!r}") from None
        if column < 0 or (self.headers and column >= len(self.headers)):
            raise IndexOutOfRange(f"Column index {column} out of range")
        return column

    def values(self, column: Column) -> List[CellValue]:
        """All values of one column, in row order."""
        index = self.column_index(column)
        out = []
        for row_number, row in enumerate(self.rows):
            if index >= len(row):
                raise IndexOutOfRange(f"Column index {index} out of range for row {row_number}")
            out.append(row[index])
        return out

    def cell(self, column: int, row: int) -> Cell:
        if not 0 <= row < len(self.rows):
            raise IndexOutOfRange(f"Row index {row} out of range")
        if not 0 <= column < len(self.rows[row]):
            raise IndexOutOfRange(f"Column index {column} out of range for row {row}")
        header = None
        if self.headers:
            if column >= len(self.headers):
                raise IndexOutOfRange(f"Column index {column} has no header")
            header = self.headers[column]
        return Cell(column=column, row=row, header=header, value=self.rows[row][column])

    def check_arity(self) -> None:
        """
        Enforce that every row matches the header count.

        Raises:
            InconsistentArity: On the first mismatching row
        """
        if not self.headers:
            return
        expected = len(self.headers)
        for row_number, row in enumerate(self.rows):
            if len(row) != expected:
                raise InconsistentArity(
                    f"Row {row_number} has {len(row)} values but there are {expected} headers"
                )

    def snapshot(self) -> TableSnapshot:
        return TableSnapshot(
            title=self.title,
            headers=tuple(self.headers),
            rows=tuple(tuple(row) for row in self.rows),
        )

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"Table(identity={self.identity}, title={self.title!r}, headers={self.headers!r}, rows={len(self.rows)})"

    # ------------------------------------------------------------------
    # Transformations (new tables, derivation logged on the result)

    def select(self, columns: Union[str, Sequence[str]]) -> "Table":
        from ..transforms import relational

        names = relational.column_list(columns)
        return self._derive(relational.select(self, names), "select", columns=names)

    def sort(self, column: Column, order: Union[SortOrder, str] = SortOrder.ASCENDING) -> "Table":
        from ..transforms import relational

        order = SortOrder.parse(order)
        return self._derive(relational.sort(self, column, order), "sort", column=column, order=order)

    def filter(self, column: Column, pattern: str) -> "Table":
        from ..transforms import relational

        return self._derive(relational.filter_rows(self, column, pattern), "filter", column=column, pattern=pattern)

    def join(self, right: "Table", left_column: int, right_column: int, title: Optional[str] = None) -> "Table":
        from ..transforms import relational

        result = relational.join(self, right, left_column, right_column, title=title)
        # both inputs travel as snapshots so the join replays without other logs
        call = CallRecord(
            component=TRANSFORM_COMPONENT,
            operation="join",
            succeeded=True,
            arguments={
                "left": self.snapshot(),
                "right": right.snapshot(),
                "left_column": left_column,
                "right_column": right_column,
                "title": title,
            },
        )
        self._log.extend(result.identity, (call,))
        return result

    # ------------------------------------------------------------------
    # History

    def call_history(self) -> List[CallRecord]:
        """Calls that produce this instance's state (the full history unless rolled back)."""
        return list(self._effective_history())

    def describe_history(self) -> str:
        lines = [f"Call history (id={self.identity})", ""]
        for step, call in enumerate(self.call_history(), start=1):
            lines.append(f"Step {step}:")
            lines.append(call.describe())
            lines.append("")
        return "\n".join(lines)

    def rollback(self) -> "Table":
        """
        Undo the most recent call on this instance by replaying one step less.

        The history itself is untouched; repeated calls walk further back
        until the empty initial state.

        Raises:
            NothingToRollBack: If this instance is already at step 0
        """
        from ..replay.runner import replay

        position = len(self._log.history_of(self.identity)) if self._position is None else self._position
        if position == 0:
            raise NothingToRollBack(f"Table {self.identity} has no calls to roll back")
        result = replay(self._log, self._registry(), self.identity, position - 1)
        self._adopt(result.table)
        self._position = position - 1
        logger.info(
            "Rolled back table %d to step %d",
            self.identity,
            self._position,
            extra={"trace_id": str(self.identity)},
        )
        return self

    def replay(self, step: int) -> "Table":
        from ..replay.runner import replay

        return replay(self._log, self._registry(), self.identity, step).table

    def replay_all(self) -> "Table":
        from ..replay.runner import replay_all

        return replay_all(self._log, self._registry(), self.identity).table

    @staticmethod
    def _registry():
        from ..replay.handlers import default_registry

        return default_registry()

    # ------------------------------------------------------------------
    # Rendering

    def to_text(self) -> str:
        return render_text(self)

    def to_delimited(self, delimiter: Optional[str] = None) -> str:
        return render_delimited(self, delimiter)

    def to_json(self, data: bool = True) -> str:
        return render_json(self, data=data)

    def __str__(self) -> str:
        return self.to_text()
