"""
TableSource abstract interface.

Defines the contract for ingestion adapters: produce an ordered list of
column names (possibly empty) and a lazy iterator of raw rows.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence

from ..core.snapshot import TableSnapshot
from ..core.table import Table
from ..history.log import CallLog


@dataclass
class SourceData:
    """
    What an adapter produces for one source.

    Fields:
        columns: Column names, empty when the source has none
        rows: Lazy iterator of raw rows (values convertible to CellValue)
        title: Title suggested by the source, if any
    """
    columns: List[str]
    rows: Iterator[Sequence[Any]]
    title: Optional[str] = None


class TableSource(ABC):
    """
    Abstract ingestion adapter.

    Implementations must raise AdapterError on I/O or parse failure,
    chaining the underlying exception.
    """

    @abstractmethod
    def read(self) -> SourceData:
        """
        Open the source and return its columns and a lazy row iterator.

        Raises:
            AdapterError: If the source cannot be opened or parsed
        """
        ...

    def load(self, title: Optional[str] = None, log: Optional[CallLog] = None) -> Table:
        """
        Build a table from the source.

        The whole result is recorded as one ingest/load call carrying the
        loaded content, so replay never reads the source again.
        """
        data = self.read()
        try:
            snapshot = TableSnapshot.build(
                headers=data.columns,
                rows=data.rows,
                title=title if title is not None else data.title,
            )
        finally:
            # a row iterator abandoned half-way still holds its cursor or file
            close = getattr(data.rows, "close", None)
            if close is not None:
                close()
        return Table.from_snapshot(snapshot, log=log)


def load_table(source: TableSource, title: Optional[str] = None, log: Optional[CallLog] = None) -> Table:
    return source.load(title=title, log=log)
