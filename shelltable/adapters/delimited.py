"""
Delimited-text adapter (CSV, TSV, ...).

Every value is kept as text, as it appears in the file.
"""

import csv
import io
import logging
from typing import IO, Iterator, List, Optional, Union
from urllib.parse import unquote, urlparse

from ..config import Settings
from ..core.errors import AdapterError
from .base import SourceData, TableSource

logger = logging.getLogger(__name__)


class DelimitedSource(TableSource):
    """
    Delimited text from a path, a file:// URL or an open text stream.

    A stream passed in is read as-is and left open for the caller.
    """

    def __init__(
        self,
        source: Union[str, IO[str]],
        with_headers: bool = True,
        delimiter: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.source = source
        self.with_headers = with_headers
        self.delimiter = delimiter or Settings.from_env().delimiter
        self.encoding = encoding

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "DelimitedSource":
        return cls(io.StringIO(text), **kwargs)

    def _path(self) -> str:
        parsed = urlparse(self.source)
        if parsed.scheme == "file":
            return unquote(parsed.path)
        if parsed.scheme and len(parsed.scheme) > 1:
            raise AdapterError(f"Unsupported URL scheme: {parsed.scheme}")
        return self.source

    def _records(self) -> Iterator[List[str]]:
        try:
            if isinstance(self.source, str):
                path = self._path()
                with open(path, "r", encoding=self.encoding, newline="") as f:
                    yield from csv.reader(f, delimiter=self.delimiter)
            else:
                yield from csv.reader(self.source, delimiter=self.delimiter)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise AdapterError(f"Cannot read delimited source {self.source!r}: {e}") from e

    def read(self) -> SourceData:
        records = self._records()
        columns: List[str] = []
        if self.with_headers:
            columns = next(records, None) or []
        logger.debug("Reading delimited source %r with %d columns", self.source, len(columns))
        # skip blank lines, which csv yields as empty lists
        rows = (record for record in records if record)
        return SourceData(columns=columns, rows=rows)
