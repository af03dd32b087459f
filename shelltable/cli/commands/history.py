"""
History commands: list, replay
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from ...core.errors import TableError
from ._pipeline import apply_pipeline, check_format, dump_json, emit, history_rows, open_table

app = typer.Typer()
console = Console()


@app.command("list")
def list_command(
    path: str = typer.Argument(..., help="CSV file or JSON table document"),
    no_headers: bool = typer.Option(False, "--no-headers", help="First CSV line is data, not headers"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="CSV delimiter"),
    select: Optional[str] = typer.Option(None, "--select", help="Columns to keep, e.g. A,C"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Column to sort by"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    filter_expr: Optional[str] = typer.Option(None, "--filter", help="COLUMN=REGEX (full match)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the call history of a loaded and transformed table.

    Examples:
        shelltable history list books.csv --select id,title --sort id
        shelltable history list books.csv --json
    """
    try:
        table = open_table(path, no_headers=no_headers, delimiter=delimiter)
        table = apply_pipeline(table, select=select, sort=sort, descending=desc, filter_expr=filter_expr)
    except TableError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    rows = history_rows(table)
    if json_output:
        dump_json({"id": table.identity, "calls": rows, "count": len(rows)})
        return

    out = RichTable(title=f"Call history (id={table.identity})")
    out.add_column("Step", style="cyan", justify="right")
    out.add_column("Component", style="green")
    out.add_column("Operation", style="yellow")
    out.add_column("OK")
    for call, row in zip(table.call_history(), rows):
        out.add_row(str(row["step"]), call.component, call.operation, "yes" if call.succeeded else "no")
    console.print(out)
    console.print(f"\n[bold]Total calls:[/bold] {len(rows)}")


@app.command("replay")
def replay_command(
    path: str = typer.Argument(..., help="CSV file or JSON table document"),
    step: Optional[int] = typer.Option(None, "--step", "-s", help="Replay the first N calls (default: all)"),
    no_headers: bool = typer.Option(False, "--no-headers", help="First CSV line is data, not headers"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="CSV delimiter"),
    select: Optional[str] = typer.Option(None, "--select", help="Columns to keep, e.g. A,C"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Column to sort by"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    filter_expr: Optional[str] = typer.Option(None, "--filter", help="COLUMN=REGEX (full match)"),
    fmt: str = typer.Option("text", "--format", "-f", help="text, csv, json or rich"),
):
    """
    Rebuild a transformed table from its call history, up to a step.

    Examples:
        shelltable history replay books.csv --sort id --step 1
    """
    check_format(fmt)
    try:
        table = open_table(path, no_headers=no_headers, delimiter=delimiter)
        table = apply_pipeline(table, select=select, sort=sort, descending=desc, filter_expr=filter_expr)
        rebuilt = table.replay_all() if step is None else table.replay(step)
        emit(rebuilt, fmt, console)
    except TableError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)
