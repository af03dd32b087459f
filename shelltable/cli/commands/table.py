"""
Table commands: show, join
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ...core.errors import TableError
from ._pipeline import apply_pipeline, check_format, emit, open_table

console = Console()


def show_command(
    path: str = typer.Argument(..., help="CSV file or JSON table document"),
    no_headers: bool = typer.Option(False, "--no-headers", help="First CSV line is data, not headers"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="CSV delimiter"),
    title: Optional[str] = typer.Option(None, "--title", help="Table title"),
    select: Optional[str] = typer.Option(None, "--select", help="Columns to keep, e.g. A,C"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Column to sort by"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    filter_expr: Optional[str] = typer.Option(None, "--filter", help="COLUMN=REGEX (full match)"),
    fmt: str = typer.Option("text", "--format", "-f", help="text, csv, json or rich"),
):
    """
    Load a table, apply a pipeline and print it.

    Examples:
        shelltable show books.csv
        shelltable show books.csv --select id,title --sort title
        shelltable show books.csv --filter "year=19.." --format rich
    """
    check_format(fmt)
    try:
        table = open_table(path, no_headers=no_headers, delimiter=delimiter, title=title)
        table = apply_pipeline(table, select=select, sort=sort, descending=desc, filter_expr=filter_expr)
        emit(table, fmt, console)
    except TableError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def join_command(
    left: str = typer.Argument(..., help="Left CSV/JSON table"),
    right: str = typer.Argument(..., help="Right CSV/JSON table"),
    on: str = typer.Option("0,0", "--on", help="LEFT_INDEX,RIGHT_INDEX of the join columns"),
    title: Optional[str] = typer.Option(None, "--title", help="Title of the joined table"),
    no_headers: bool = typer.Option(False, "--no-headers", help="CSV inputs have no header line"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="CSV delimiter"),
    fmt: str = typer.Option("text", "--format", "-f", help="text, csv, json or rich"),
):
    """
    Equi-join two tables on one column each.

    Examples:
        shelltable join orders.csv customers.csv --on 1,0
    """
    check_format(fmt)
    try:
        left_index, right_index = (int(part) for part in on.split(","))
    except ValueError:
        raise typer.BadParameter("expected two column indexes, e.g. 0,0", param_hint="--on")
    try:
        left_table = open_table(left, no_headers=no_headers, delimiter=delimiter)
        right_table = open_table(right, no_headers=no_headers, delimiter=delimiter)
        joined = left_table.join(right_table, left_index, right_index, title=title)
        emit(joined, fmt, console)
    except TableError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)
