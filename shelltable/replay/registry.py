"""
Operation registry: (component, operation) -> replay handler.

Handlers re-apply one recorded call to the table under reconstruction.
They must only use the table's untracked internals, so that replaying never
appends to a call log.
"""

from typing import Any, Callable, Dict, Mapping, Tuple

from ..core.errors import UnregisteredOperation
from ..core.table import Table
from ..history.records import CallRecord

# Handler signature: (table_under_construction, arguments) -> resulting table
Handler = Callable[[Table, Mapping[str, Any]], Table]


class OperationRegistry:
    """
    Registry of replay handlers.

    Usage:
        registry = OperationRegistry()
        registry.register("table", "with_header", on_with_header)
        table = registry.apply(table, call)
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[str, str], Handler] = {}

    def register(self, component: str, operation: str, handler: Handler) -> None:
        self._handlers[(component, operation)] = handler

    def handlers(self) -> Dict[Tuple[str, str], Handler]:
        return dict(self._handlers)

    def apply(self, table: Table, call: CallRecord) -> Table:
        """
        Re-apply a recorded call.

        Returns:
            The resulting table (the same instance for in-place operations,
            a new one for transformations)

        Raises:
            UnregisteredOperation: If no handler matches the call
        """
        key = (call.component, call.operation)
        if key not in self._handlers:
            raise UnregisteredOperation(f"No handler for {call.component}.{call.operation}")
        return self._handlers[key](table, call.arguments)
