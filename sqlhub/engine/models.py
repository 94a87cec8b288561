"""
Normalized catalog metadata records.

Catalog rows arrive as dicts keyed by upper-cased column label. Each record
type declares a field-mapping table that says which catalog column feeds
which attribute and how the raw value is converted, so normalization can be
exercised with plain dict rows and no driver.
"""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar


@dataclass(frozen=True)
class FieldMapping:
    """Maps one catalog column onto one record attribute."""

    attribute: str
    column: str
    convert: Callable[[Any], Any] | None = None

    def read(self, row: Mapping[str, Any]) -> Any:
        value = row.get(self.column)
        return self.convert(value) if self.convert else value


def as_int(value: Any) -> int | None:
    """Integer conversion with None preserved."""
    if value is None:
        return None
    return int(value)


def as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def is_one(value: Any) -> bool:
    return value is not None and int(value) == 1


def is_yes(value: Any) -> bool:
    return isinstance(value, str) and value.strip().upper() == "YES"


def is_truthy(value: Any) -> bool:
    # Drivers report flags as bool, 0/1 or 't'/'f'
    if isinstance(value, str):
        return value.strip().lower() in ("1", "t", "true", "y", "yes")
    return bool(value)


R = TypeVar("R", bound="CatalogRecord")


class CatalogRecord:
    """Mixin that builds a record from a catalog row through FIELDS."""

    FIELDS: tuple[FieldMapping, ...] = ()

    @classmethod
    def from_row(cls: type[R], row: Mapping[str, Any]) -> R:
        return cls(**{f.attribute: f.read(row) for f in cls.FIELDS})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Table(CatalogRecord):
    database_name: str | None
    schema_name: str | None
    name: str
    type: str | None
    comment: str | None

    FIELDS = (
        FieldMapping("database_name", "TABLE_CAT"),
        FieldMapping("schema_name", "TABLE_SCHEM"),
        FieldMapping("name", "TABLE_NAME"),
        FieldMapping("type", "TABLE_TYPE"),
        FieldMapping("comment", "REMARKS"),
    )


@dataclass(frozen=True)
class TableColumn(CatalogRecord):
    database_name: str | None
    schema_name: str | None
    table_name: str
    name: str
    comment: str | None
    default_value: str | None
    type_name: str | None
    column_size: int | None
    decimal_digits: int | None
    num_prec_radix: int | None
    nullable: bool
    ordinal_position: int | None
    char_octet_length: int | None
    auto_increment: bool
    generated_column: bool

    FIELDS = (
        FieldMapping("database_name", "TABLE_CAT"),
        FieldMapping("schema_name", "TABLE_SCHEM"),
        FieldMapping("table_name", "TABLE_NAME"),
        FieldMapping("name", "COLUMN_NAME"),
        FieldMapping("comment", "REMARKS"),
        FieldMapping("default_value", "COLUMN_DEF", as_text),
        FieldMapping("type_name", "TYPE_NAME"),
        FieldMapping("column_size", "COLUMN_SIZE", as_int),
        FieldMapping("decimal_digits", "DECIMAL_DIGITS", as_int),
        FieldMapping("num_prec_radix", "NUM_PREC_RADIX", as_int),
        FieldMapping("nullable", "NULLABLE", is_one),
        FieldMapping("ordinal_position", "ORDINAL_POSITION", as_int),
        FieldMapping("char_octet_length", "CHAR_OCTET_LENGTH", as_int),
        FieldMapping("auto_increment", "IS_AUTOINCREMENT", is_yes),
        FieldMapping("generated_column", "IS_GENERATEDCOLUMN", is_yes),
    )


@dataclass(frozen=True)
class TableIndexColumn(CatalogRecord):
    database_name: str | None
    schema_name: str | None
    table_name: str
    index_name: str | None
    column_name: str | None
    ordinal_position: int | None
    asc_or_desc: str | None
    cardinality: int | None
    pages: int | None
    filter_condition: str | None
    index_qualifier: str | None
    non_unique: bool

    FIELDS = (
        FieldMapping("database_name", "TABLE_CAT"),
        FieldMapping("schema_name", "TABLE_SCHEM"),
        FieldMapping("table_name", "TABLE_NAME"),
        FieldMapping("index_name", "INDEX_NAME"),
        FieldMapping("column_name", "COLUMN_NAME"),
        FieldMapping("ordinal_position", "ORDINAL_POSITION", as_int),
        FieldMapping("asc_or_desc", "ASC_OR_DESC"),
        FieldMapping("cardinality", "CARDINALITY", as_int),
        FieldMapping("pages", "PAGES", as_int),
        FieldMapping("filter_condition", "FILTER_CONDITION", as_text),
        FieldMapping("index_qualifier", "INDEX_QUALIFIER"),
        FieldMapping("non_unique", "NON_UNIQUE", is_truthy),
    )


@dataclass(frozen=True)
class TableIndex:
    database_name: str | None
    schema_name: str | None
    table_name: str
    name: str
    unique: bool
    columns: tuple[TableIndexColumn, ...]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Function(CatalogRecord):
    database_name: str | None
    schema_name: str | None
    name: str
    remarks: str | None
    function_type: int | None
    specific_name: str | None

    FIELDS = (
        FieldMapping("database_name", "FUNCTION_CAT"),
        FieldMapping("schema_name", "FUNCTION_SCHEM"),
        FieldMapping("name", "FUNCTION_NAME"),
        FieldMapping("remarks", "REMARKS"),
        FieldMapping("function_type", "FUNCTION_TYPE", as_int),
        FieldMapping("specific_name", "SPECIFIC_NAME"),
    )


@dataclass(frozen=True)
class Procedure(CatalogRecord):
    database_name: str | None
    schema_name: str | None
    name: str
    remarks: str | None
    procedure_type: int | None
    specific_name: str | None

    FIELDS = (
        FieldMapping("database_name", "PROCEDURE_CAT"),
        FieldMapping("schema_name", "PROCEDURE_SCHEM"),
        FieldMapping("name", "PROCEDURE_NAME"),
        FieldMapping("remarks", "REMARKS"),
        FieldMapping("procedure_type", "PROCEDURE_TYPE", as_int),
        FieldMapping("specific_name", "SPECIFIC_NAME"),
    )


def group_indexes(index_columns: Iterable[TableIndexColumn]) -> list[TableIndex]:
    """
    Group per-column index rows into indexes.

    Rows without an index name (table statistics on some engines) are dropped.
    Indexes keep the order in which the catalog first reported them, and each
    index keeps its columns in reported order. Uniqueness comes from the first
    row of the group.
    """
    groups: dict[str, list[TableIndexColumn]] = {}
    for column in index_columns:
        if column.index_name is None:
            continue
        groups.setdefault(column.index_name, []).append(column)

    indexes = []
    for name, columns in groups.items():
        first = columns[0]
        indexes.append(
            TableIndex(
                database_name=first.database_name,
                schema_name=first.schema_name,
                table_name=first.table_name,
                name=name,
                unique=not first.non_unique,
                columns=tuple(columns),
            )
        )
    return indexes
