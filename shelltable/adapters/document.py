"""
JSON document adapter.

Reads the documents produced by Table.to_json(). A document with rows is
loaded directly; a document holding only its call history is rebuilt by
replaying that history under a fresh identity.
"""

import json
from typing import Any, Dict, Optional

from ..core.errors import AdapterError
from ..core.ids import new_table_id
from ..core.table import Table
from ..history.log import CallLog, shared_call_log
from ..history.serialize import from_jsonable, record_from_dict
from ..logging_config import get_logger
from ..replay.handlers import default_registry
from ..replay.runner import replay_all
from .base import SourceData, TableSource


class DocumentSource(TableSource):
    """JSON table document, given as text or as an already-parsed dict."""

    def __init__(self, document: Any) -> None:
        self.document = document

    @classmethod
    def from_path(cls, path: str, encoding: str = "utf-8") -> "DocumentSource":
        try:
            with open(path, "r", encoding=encoding) as f:
                return cls(f.read())
        except (OSError, UnicodeDecodeError) as e:
            raise AdapterError(f"Cannot read document {path!r}: {e}") from e

    def _parsed(self) -> Dict[str, Any]:
        doc = self.document
        if isinstance(doc, (str, bytes)):
            try:
                doc = json.loads(doc)
            except ValueError as e:
                raise AdapterError(f"Invalid JSON document: {e}") from e
        if not isinstance(doc, dict):
            raise AdapterError("Table document must be a JSON object")
        return doc

    def read(self) -> SourceData:
        doc = self._parsed()
        if "rows" not in doc:
            raise AdapterError("Document has no rows; load() it to replay its call history")
        rows = from_jsonable(doc.get("rows") or [])
        return SourceData(
            columns=list(doc.get("headers") or []),
            rows=iter(rows),
            title=doc.get("title"),
        )

    def load(self, title: Optional[str] = None, log: Optional[CallLog] = None) -> Table:
        doc = self._parsed()
        if "rows" in doc:
            return super().load(title=title, log=log)

        log = log if log is not None else shared_call_log()
        try:
            calls = [record_from_dict(item) for item in doc.get("callHistory") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise AdapterError(f"Invalid call history in document: {e}") from e

        identity = new_table_id()
        log.extend(identity, calls)
        table = replay_all(log, default_registry(), identity).table
        get_logger(__name__, trace_id=str(identity)).info("Rebuilt table from %d recorded calls", len(calls))
        if title is not None:
            table.with_title(title)
        return table
