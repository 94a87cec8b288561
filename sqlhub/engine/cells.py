"""
Dialect-neutral cell model.

Every value read from a result set is stored as a Cell: a tag from a closed
type enumeration plus the Python value. Conversion is driven by the value's
type, so drivers that return different native types for the same SQL type
still land on the same tag.
"""

import base64
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


class CellType(Enum):
    """Closed set of cell tags."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BINARY = "binary"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    NULL = "null"


@dataclass(frozen=True)
class Cell:
    """A single normalized column value."""

    type: CellType
    value: Any = None

    @classmethod
    def string(cls, text: str) -> "Cell":
        return cls(CellType.STRING, text)

    @classmethod
    def null(cls) -> "Cell":
        return cls(CellType.NULL, None)

    @property
    def display(self) -> str | None:
        """Human-readable rendering of the value."""
        if self.type is CellType.NULL:
            return None
        if self.type in (CellType.DATE, CellType.TIME, CellType.DATETIME):
            return self.value.isoformat()
        if self.type is CellType.BINARY:
            return self.value.hex()
        if self.type is CellType.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation."""
        value = self.value
        if self.type is CellType.NUMBER and isinstance(value, Decimal):
            # Keep full precision; JSON numbers are doubles
            value = str(value)
        elif self.type is CellType.NUMBER and isinstance(value, float) and value != value:
            value = None
        elif self.type is CellType.BINARY:
            value = base64.b64encode(value).decode("ascii")
        elif self.type in (CellType.DATE, CellType.TIME, CellType.DATETIME):
            value = value.isoformat()
        return {"type": self.type.value, "value": value}


# Evaluated in order: bool before int (bool is an int subclass) and
# datetime before date (datetime is a date subclass).
_CONVERSIONS: tuple[tuple[tuple[type, ...], CellType], ...] = (
    ((bool,), CellType.BOOLEAN),
    ((int, float, Decimal), CellType.NUMBER),
    ((datetime,), CellType.DATETIME),
    ((date,), CellType.DATE),
    ((time,), CellType.TIME),
    ((bytes, bytearray, memoryview), CellType.BINARY),
    ((str,), CellType.STRING),
)


def to_cell(value: Any) -> Cell:
    """
    Convert a driver value into a Cell.

    Unrecognized types fall back to their string representation.
    """
    if value is None:
        return Cell.null()

    for types, cell_type in _CONVERSIONS:
        if isinstance(value, types):
            if cell_type is CellType.BINARY:
                value = bytes(value)
            return Cell(cell_type, value)

    return Cell.string(str(value))
