"""
Shared helpers for CLI commands: load a source, apply a transformation
pipeline and print the result.
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table as RichTable

from ...adapters import DelimitedSource, DocumentSource
from ...core.table import Table
from ...core.values import SortOrder
from ...history.serialize import record_to_dict

FORMATS = ("text", "csv", "json", "rich")


def open_table(path: str, no_headers: bool = False, delimiter: Optional[str] = None,
               title: Optional[str] = None) -> Table:
    if path.lower().endswith(".json"):
        return DocumentSource.from_path(path).load(title=title)
    return DelimitedSource(path, with_headers=not no_headers, delimiter=delimiter).load(title=title)


def apply_pipeline(
    table: Table,
    select: Optional[str] = None,
    sort: Optional[str] = None,
    descending: bool = False,
    filter_expr: Optional[str] = None,
) -> Table:
    """Apply filter, then select, then sort; each step is a tracked derivation."""
    if filter_expr:
        column, sep, pattern = filter_expr.partition("=")
        if not sep:
            raise typer.BadParameter("expected COLUMN=REGEX", param_hint="--filter")
        table = table.filter(column, pattern)
    if select:
        table = table.select(select)
    if sort:
        table = table.sort(sort, SortOrder.DESCENDING if descending else SortOrder.ASCENDING)
    return table


def to_rich(table: Table) -> RichTable:
    out = RichTable(title=table.title)
    table.check_arity()
    columns = table.headers or [""] * max((len(r) for r in table.rows), default=0)
    for name in columns:
        out.add_column(name, style="cyan")
    for row in table.rows:
        out.add_row(*[cell.to_text() for cell in row])
    return out


def emit(table: Table, fmt: str, console: Console) -> None:
    if fmt == "rich":
        console.print(to_rich(table))
    elif fmt == "csv":
        typer.echo(table.to_delimited(), nl=False)
    elif fmt == "json":
        typer.echo(table.to_json())
    else:
        typer.echo(table.to_text(), nl=False)


def check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise typer.BadParameter(f"must be one of {', '.join(FORMATS)}", param_hint="--format")
    return fmt


def history_rows(table: Table) -> list:
    return [dict(step=i, **record_to_dict(call)) for i, call in enumerate(table.call_history(), start=1)]


def dump_json(obj) -> None:
    print(json.dumps(obj, indent=2))
