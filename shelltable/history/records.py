"""
Call record model.

One CallRecord is appended per tracked invocation on a table identity.
Arguments hold the concrete values passed, which is what replay needs to
re-invoke the operation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from ..core.snapshot import TableSnapshot
from ..core.values import CellValue


@dataclass(frozen=True)
class CallRecord:
    """
    Immutable record of one tracked call.

    Fields:
        component: Owning component ("table", "transform", "ingest")
        operation: Operation name within the component
        succeeded: Whether the call completed without error
        arguments: Parameter name -> concrete argument value, in call order
    """
    component: str
    operation: str
    succeeded: bool
    arguments: Dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        args = ", ".join(f"{name}={_describe_argument(value)}" for name, value in self.arguments.items())
        status = "ok" if self.succeeded else "failed"
        return f"{self.component}.{self.operation}({args}) [{status}]"


def _describe_argument(value: Any) -> str:
    if isinstance(value, CellValue):
        return f"{value.kind.value}:{value.to_text()!r}"
    if isinstance(value, TableSnapshot):
        return f"<snapshot title={value.title!r} headers={len(value.headers)} rows={len(value.rows)}>"
    if isinstance(value, tuple):
        return "[" + ", ".join(_describe_argument(v) for v in value) + "]"
    if isinstance(value, Enum):
        return str(value.value)
    return repr(value)
