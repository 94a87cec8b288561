"""
Catalog query building blocks for database adapters.

Adapters describe each catalog lookup as a parameterized SQL statement whose
result columns are aliased to the standard catalog column names (TABLE_CAT,
TABLE_SCHEM, TABLE_NAME, ...). The introspector runs the statement and maps
rows to records without knowing which engine produced them.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from .core import DatabaseAdapter


@dataclass(frozen=True)
class CatalogQuery:
    """A catalog statement plus its bound parameters."""

    sql: str
    params: tuple[Any, ...] = ()


class CatalogFilter:
    """
    Accumulates optional WHERE conditions using the adapter's placeholder style.

    Empty filter values are skipped, so ``None``/``""`` means unrestricted.
    Patterns follow SQL ``LIKE`` wildcard semantics (``%`` and ``_``).
    """

    def __init__(self, adapter: "DatabaseAdapter") -> None:
        self._adapter = adapter
        self.conditions: list[str] = []
        self.params: list[Any] = []

    def _bind(self, value: Any) -> str:
        self.params.append(value)
        return self._adapter.placeholder(len(self.params))

    def equals(self, expression: str, value: Any) -> "CatalogFilter":
        if value:
            self.conditions.append(f"{expression} = {self._bind(value)}")
        return self

    def like(self, expression: str, pattern: str | None) -> "CatalogFilter":
        # A lone "%" matches everything, including NULLs it would otherwise drop
        if pattern and pattern != "%":
            self.conditions.append(f"{expression} LIKE {self._bind(pattern)}")
        return self

    def one_of(self, expression: str, values: Iterable[Any] | None) -> "CatalogFilter":
        values = [v for v in (values or []) if v]
        if values:
            placeholders = ", ".join(self._bind(v) for v in values)
            self.conditions.append(f"{expression} IN ({placeholders})")
        return self

    def where(self, *fixed: str) -> str:
        """Render the WHERE clause; fixed conditions come first."""
        parts = [*fixed, *self.conditions]
        return f"WHERE {' AND '.join(parts)}" if parts else ""

    def build(self, sql: str) -> CatalogQuery:
        return CatalogQuery(sql=sql.strip(), params=tuple(self.params))


def upper_types(types: Iterable[str] | None) -> list[str]:
    """Normalize requested table types (``table`` -> ``TABLE``)."""
    return [t.strip().upper() for t in (types or []) if t and t.strip()]
