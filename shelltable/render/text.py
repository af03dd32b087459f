"""
Text renderers: ASCII box and delimited output.

Both enforce the arity invariant first: with headers present every row
must have exactly one value per header.
"""

import csv
import io
from typing import TYPE_CHECKING, List, Optional

from ..config import Settings

if TYPE_CHECKING:
    from ..core.table import Table

PADDING = 2


def _center(text: str, width: int) -> str:
    left = (width - len(text)) // 2
    return (" " * left + text).ljust(width)


def _column_widths(headers: List[str], rows: List[List[str]], columns: int) -> List[int]:
    widths = [len(h) for h in headers] or [0] * columns
    for row in rows:
        for i, text in enumerate(row):
            # values get one extra column so they never touch the right border
            widths[i] = max(widths[i], len(text) + 1)
    return widths


def render_text(table: "Table") -> str:
    """
    Render a table as an ASCII box.

    Example:
        +------------+------------+
        |  Column A  |  Column B  |
        +------------+------------+
        |    123     |    456     |
        +------------+------------+

    Raises:
        InconsistentArity: If headers are present and a row does not match them
    """
    table.check_arity()
    headers = list(table.headers)
    rows = [[cell.to_text() for cell in row] for row in table.rows]
    columns = len(headers) if headers else max((len(r) for r in rows), default=0)

    out = io.StringIO()
    if table.title:
        out.write(table.title + "\n")
    if columns == 0:
        return out.getvalue()

    widths = _column_widths(headers, rows, columns)
    border = "+" + "+".join("-" * (w + 2 * PADDING) for w in widths) + "+\n"

    def line(values: List[str]) -> str:
        cells = []
        for i, width in enumerate(widths):
            text = values[i] if i < len(values) else ""
            cells.append(" " * PADDING + _center(text, width) + " " * PADDING)
        return "|" + "|".join(cells) + "|\n"

    out.write(border)
    if headers:
        out.write(line(headers))
        out.write(border)
    for row in rows:
        out.write(line(row))
    out.write(border)
    return out.getvalue()


def render_delimited(table: "Table", delimiter: Optional[str] = None) -> str:
    """
    Render a table as delimited text (CSV by default).

    Raises:
        InconsistentArity: If headers are present and a row does not match them
    """
    table.check_arity()
    if delimiter is None:
        delimiter = Settings.from_env().delimiter
    out = io.StringIO()
    writer = csv.writer(out, delimiter=delimiter, lineterminator="\n")
    if table.headers:
        writer.writerow(table.headers)
    for row in table.rows:
        writer.writerow([cell.to_text() for cell in row])
    return out.getvalue()
