"""
Canonical JSON form of call records.

Call histories are process-lifetime state; callers that want to keep or
ship one use these helpers. Output is canonical (sorted keys, no
whitespace, UTF-8 kept) so identical histories serialize to identical
bytes.

Lowering rules:
- CellValue -> its native payload
- datetime -> {"$timestamp": "<iso-8601>"}
- Enum -> its value
- TableSnapshot -> its dict form
- tuple -> list
"""

import datetime
import json
from enum import Enum
from typing import Any, Dict, Iterable, List

from ..core.snapshot import TableSnapshot
from ..core.values import CellValue
from .records import CallRecord

TIMESTAMP_TAG = "$timestamp"


def to_jsonable(obj: Any) -> Any:
    """Lower engine values to JSON-native structures."""
    if isinstance(obj, CellValue):
        return to_jsonable(obj.value)
    if isinstance(obj, datetime.datetime):
        return {TIMESTAMP_TAG: obj.isoformat()}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, TableSnapshot):
        return to_jsonable(obj.to_dict())
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]
    return obj


def from_jsonable(obj: Any) -> Any:
    """Inverse of to_jsonable for the tagged forms; everything else stays native."""
    if isinstance(obj, dict):
        if set(obj) == {TIMESTAMP_TAG}:
            return datetime.datetime.fromisoformat(obj[TIMESTAMP_TAG])
        return {k: from_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [from_jsonable(x) for x in obj]
    return obj


def canonical_json_str(obj: Any) -> str:
    return json.dumps(to_jsonable(obj), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def record_to_dict(call: CallRecord) -> Dict[str, Any]:
    return {
        "component": call.component,
        "operation": call.operation,
        "succeeded": call.succeeded,
        "arguments": to_jsonable(call.arguments),
    }


def record_from_dict(data: Dict[str, Any]) -> CallRecord:
    """
    Rebuild a CallRecord from its dict form.

    Arguments come back in serialized (sorted) order and JSON-native (lists
    instead of tuples, dicts instead of snapshots); replay handlers accept
    both forms.

    Raises:
        KeyError: If component or operation is missing
    """
    return CallRecord(
        component=data["component"],
        operation=data["operation"],
        succeeded=bool(data.get("succeeded", True)),
        arguments=dict(from_jsonable(data.get("arguments") or {})),
    )


def dump_history(calls: Iterable[CallRecord]) -> str:
    """Serialize a sequence of calls as canonical JSON."""
    return canonical_json_str([record_to_dict(c) for c in calls])


def load_history(text: str) -> List[CallRecord]:
    """Parse the output of dump_history."""
    return [record_from_dict(item) for item in json.loads(text)]
