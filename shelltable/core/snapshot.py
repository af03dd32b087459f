"""
Frozen table snapshots.

A snapshot is the value form of a table (title, headers, rows). Call
records use snapshots as arguments wherever an operation consumes a whole
table (ingestion, join), so replay never has to look anything else up.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from .values import CellValue


@dataclass(frozen=True)
class TableSnapshot:
    """
    Immutable copy of a table's content.

    Fields:
        title: Display label or None
        headers: Column names (may be empty)
        rows: Rows of cell values
    """
    title: Optional[str] = None
    headers: Tuple[str, ...] = ()
    rows: Tuple[Tuple[CellValue, ...], ...] = ()

    @staticmethod
    def build(
        headers: Iterable[str],
        rows: Iterable[Sequence[Any]],
        title: Optional[str] = None,
    ) -> "TableSnapshot":
        """Build a snapshot from raw headers and rows, converting every value."""
        return TableSnapshot(
            title=title,
            headers=tuple(str(h) for h in headers),
            rows=tuple(tuple(CellValue.of(v) for v in row) for row in rows),
        )

    @staticmethod
    def coerce(obj: Any) -> "TableSnapshot":
        """Accept a snapshot or its dict form (as read back from JSON)."""
        if isinstance(obj, TableSnapshot):
            return obj
        if isinstance(obj, dict):
            return TableSnapshot.from_dict(obj)
        raise TypeError(f"Expected TableSnapshot or dict, got {type(obj).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "headers": list(self.headers),
            "rows": [[cell.value for cell in row] for row in self.rows],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TableSnapshot":
        data = data or {}
        return TableSnapshot.build(
            headers=data.get("headers") or (),
            rows=data.get("rows") or (),
            title=data.get("title"),
        )
