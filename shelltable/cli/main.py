#!/usr/bin/env python3
"""
shelltable CLI

Main entrypoint for the shelltable command-line tool.
"""

import sys

import typer
from rich.console import Console
from rich.table import Table

from ..logging_config import setup_logging
from .commands import history, table

app = typer.Typer(
    name="shelltable",
    help="Load, transform and replay in-memory tables",
    add_completion=False,
)

console = Console()

app.add_typer(history.app, name="history", help="Call history operations")

app.command("show")(table.show_command)
app.command("join")(table.join_command)


@app.callback()
def configure() -> None:
    """Load, transform and replay in-memory tables."""
    setup_logging(stream=sys.stderr)


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    info = Table(show_header=False, box=None)
    info.add_row("[bold]shelltable[/bold]", f"v{__version__}")
    console.print(info)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
