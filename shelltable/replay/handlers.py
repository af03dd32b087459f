"""
Replay handlers for every tracked operation.

Arguments may arrive either as recorded in-process (tuples, CellValues,
snapshots, enums) or as read back from JSON (lists, natives, dicts,
strings); each handler normalizes what it receives.
"""

from typing import Any, Mapping

from ..core.snapshot import TableSnapshot
from ..core.table import INGEST_COMPONENT, TABLE_COMPONENT, TRANSFORM_COMPONENT, Table
from ..core.values import CellValue, SortOrder
from ..transforms import relational
from .registry import OperationRegistry


def register_handlers(registry: OperationRegistry) -> None:
    registry.register(TABLE_COMPONENT, "with_title", on_with_title)
    registry.register(TABLE_COMPONENT, "with_header", on_with_header)
    registry.register(TABLE_COMPONENT, "begin_row", on_begin_row)
    registry.register(TABLE_COMPONENT, "push_value", on_push_value)
    registry.register(TABLE_COMPONENT, "apply", on_apply)
    registry.register(TRANSFORM_COMPONENT, "select", on_select)
    registry.register(TRANSFORM_COMPONENT, "sort", on_sort)
    registry.register(TRANSFORM_COMPONENT, "filter", on_filter)
    registry.register(TRANSFORM_COMPONENT, "join", on_join)
    registry.register(INGEST_COMPONENT, "load", on_load)


def on_with_title(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._set_title(arguments["title"])
    return table


def on_with_header(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._add_header(arguments["name"])
    return table


def on_begin_row(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._start_row()
    return table


def on_push_value(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._push(CellValue.of(arguments["value"]))
    return table


def on_apply(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._apply_cell(
        arguments["column"],
        arguments["row"],
        arguments.get("header"),
        CellValue.of(arguments["value"]),
    )
    return table


def on_select(table: Table, arguments: Mapping[str, Any]) -> Table:
    return relational.select(table, relational.column_list(arguments["columns"]))


def on_sort(table: Table, arguments: Mapping[str, Any]) -> Table:
    return relational.sort(table, arguments["column"], SortOrder.parse(arguments["order"]))


def on_filter(table: Table, arguments: Mapping[str, Any]) -> Table:
    return relational.filter_rows(table, arguments["column"], arguments["pattern"])


def on_join(table: Table, arguments: Mapping[str, Any]) -> Table:
    left = Table(log=table.log)
    left._restore(TableSnapshot.coerce(arguments["left"]))
    right = Table(log=table.log)
    right._restore(TableSnapshot.coerce(arguments["right"]))
    return relational.join(
        left,
        right,
        arguments["left_column"],
        arguments["right_column"],
        title=arguments.get("title"),
    )


def on_load(table: Table, arguments: Mapping[str, Any]) -> Table:
    table._restore(TableSnapshot.coerce(arguments["snapshot"]))
    return table


_default_registry = OperationRegistry()
register_handlers(_default_registry)


def default_registry() -> OperationRegistry:
    """Registry holding the handler for every tracked operation."""
    return _default_registry
