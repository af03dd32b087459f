"""
JSON document renderer.

The document carries the table identity, title and call history, plus the
headers and rows when data=True. A history-only document is enough to
rebuild the table by replay (see adapters.document).
"""

import json
from typing import TYPE_CHECKING, Any, Dict

from ..history.serialize import record_to_dict, to_jsonable

if TYPE_CHECKING:
    from ..core.table import Table


def table_document(table: "Table", data: bool = True) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "id": table.identity,
        "title": table.title,
    }
    if data:
        table.check_arity()
        doc["headers"] = list(table.headers)
        doc["rows"] = [[to_jsonable(cell) for cell in row] for row in table.rows]
    doc["callHistory"] = [record_to_dict(call) for call in table.call_history()]
    return doc


def render_json(table: "Table", data: bool = True) -> str:
    return json.dumps(table_document(table, data=data), indent=2, ensure_ascii=False)
