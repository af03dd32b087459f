"""
Cell value model.

CellValue is a closed scalar variant (text, integer, float, boolean,
timestamp). Values of the same kind are totally ordered; comparing values
of different kinds is an error rather than a silent coercion.
"""

import datetime
import decimal
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from .errors import IncomparableValues, InvalidSortOrder, UnsupportedValue


class CellKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    @staticmethod
    def parse(order: Any) -> "SortOrder":
        try:
            return SortOrder(order)
        except ValueError:
            raise InvalidSortOrder(f"Unknown sort order: {order!r}") from None


@dataclass(frozen=True, eq=False)
class CellValue:
    """
    Immutable tagged scalar.

    Fields:
        kind: Variant tag
        value: Python payload (str, int, float, bool or datetime)
    """
    kind: CellKind
    value: Any

    @staticmethod
    def of(raw: Any) -> "CellValue":
        """
        Convert a raw scalar to a CellValue.

        bool is checked before int (bool is an int subclass), Decimal is
        widened to float and a bare date is promoted to midnight.

        Raises:
            UnsupportedValue: If raw has no matching variant
        """
        if isinstance(raw, CellValue):
            return raw
        if isinstance(raw, bool):
            return CellValue(CellKind.BOOLEAN, raw)
        if isinstance(raw, int):
            return CellValue(CellKind.INTEGER, raw)
        if isinstance(raw, (float, decimal.Decimal)):
            return CellValue(CellKind.FLOAT, float(raw))
        if isinstance(raw, str):
            return CellValue(CellKind.TEXT, raw)
        if isinstance(raw, datetime.datetime):
            return CellValue(CellKind.TIMESTAMP, raw)
        if isinstance(raw, datetime.date):
            return CellValue(CellKind.TIMESTAMP, datetime.datetime(raw.year, raw.month, raw.day))
        raise UnsupportedValue(f"Unsupported cell value type: {type(raw).__name__}")

    def _order_key(self) -> Tuple[int, Any]:
        # NaN sorts after every number and equals itself
        if self.kind is CellKind.FLOAT and math.isnan(self.value):
            return (1, 0.0)
        return (0, self.value)

    def compare(self, other: "CellValue") -> int:
        """
        Three-way comparison: negative, zero or positive.

        Raises:
            IncomparableValues: If other is not a CellValue of the same kind
        """
        if not isinstance(other, CellValue):
            raise IncomparableValues(f"Cannot compare {self.kind.value} with {type(other).__name__}")
        if self.kind is not other.kind:
            raise IncomparableValues(f"Cannot compare {self.kind.value} with {other.kind.value}")
        a, b = self._order_key(), other._order_key()
        try:
            return (a > b) - (a < b)
        except TypeError as e:
            # naive vs aware timestamps
            raise IncomparableValues(str(e)) from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        return self._order_key() == other._order_key()

    def __hash__(self) -> int:
        return hash((self.kind, self._order_key()))

    def __lt__(self, other: "CellValue") -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "CellValue") -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "CellValue") -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "CellValue") -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        return self.compare(other) >= 0

    def to_text(self) -> str:
        """Text form used by filtering and every renderer."""
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.TIMESTAMP:
            return self.value.isoformat()
        return str(self.value)

    def __str__(self) -> str:
        return self.to_text()
