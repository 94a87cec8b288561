"""
Execution result structure.
"""

from dataclasses import dataclass, field
from typing import Any

from .cells import Cell


@dataclass(frozen=True)
class ExecuteResult:
    """
    One page of the result of a submitted statement.

    Row-producing statements fill ``header`` and ``rows`` and leave
    ``update_count`` as None. Mutations report ``update_count`` with an empty
    header and no rows.
    """

    sql: str
    success: bool = True
    description: str | None = None
    header: tuple[Cell, ...] = field(default_factory=tuple)
    rows: tuple[tuple[Cell, ...], ...] = field(default_factory=tuple)
    update_count: int | None = None
    has_next_page: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-safe dictionary."""
        return {
            "sql": self.sql,
            "success": self.success,
            "description": self.description,
            "header": [cell.value for cell in self.header],
            "rows": [[cell.to_dict() for cell in row] for row in self.rows],
            "update_count": self.update_count,
            "has_next_page": self.has_next_page,
        }
