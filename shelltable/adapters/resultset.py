"""
Query result adapter for DB-API 2.0 connections and cursors.

Rows are fetched lazily in batches. A cursor opened by the adapter is
closed when the rows are exhausted; the connection is closed too when the
adapter manages it.
"""

import logging
from typing import Any, Iterator, List, Optional, Sequence

from ..config import Settings
from ..core.errors import AdapterError
from .base import SourceData, TableSource

logger = logging.getLogger(__name__)


class QueryResultSource(TableSource):
    """
    Result set of a SQL query.

    Either pass a connection and sql (optionally parameters), or a cursor
    that has already executed its query.
    """

    def __init__(
        self,
        connection: Any = None,
        sql: Optional[str] = None,
        parameters: Sequence[Any] = (),
        cursor: Any = None,
        title: Optional[str] = None,
        managed_connection: bool = False,
        batch_size: int = 100,
        null_text: Optional[str] = None,
    ) -> None:
        if cursor is None and (connection is None or sql is None):
            raise ValueError("QueryResultSource needs either a cursor or a connection and sql")
        self.connection = connection
        self.sql = sql
        self.parameters = parameters
        self.cursor = cursor
        self.title = title
        self.managed_connection = managed_connection
        self.batch_size = batch_size
        self.null_text = Settings.from_env().null_text if null_text is None else null_text

    def _close(self, cursor: Any, owns_cursor: bool) -> None:
        if owns_cursor:
            cursor.close()
        if self.managed_connection and self.connection is not None:
            self.connection.close()

    def _rows(self, cursor: Any, owns_cursor: bool) -> Iterator[List[Any]]:
        try:
            while True:
                batch = cursor.fetchmany(self.batch_size)
                if not batch:
                    break
                for row in batch:
                    yield [self.null_text if v is None else v for v in row]
        except Exception as e:
            raise AdapterError(f"Cannot fetch query results: {e}") from e
        finally:
            self._close(cursor, owns_cursor)

    def read(self) -> SourceData:
        owns_cursor = self.cursor is None
        cursor = self.cursor
        try:
            if owns_cursor:
                cursor = self.connection.cursor()
                cursor.execute(self.sql, tuple(self.parameters))
            columns = [d[0] for d in (cursor.description or ())]
        except Exception as e:
            if cursor is not None:
                self._close(cursor, owns_cursor)
            elif self.managed_connection:
                self.connection.close()
            raise AdapterError(f"Query failed: {e}") from e
        logger.debug("Query returned %d columns", len(columns))
        return SourceData(columns=columns, rows=self._rows(cursor, owns_cursor), title=self.title)
