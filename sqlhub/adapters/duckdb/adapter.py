"""
DuckDB adapter implementation.

DuckDB is the embedded engine: one file (or ``:memory:``) per handle,
attached databases listed as catalogs, nothing to switch and no stored
procedures. Catalog lookups read the duckdb_* table functions.
"""

from typing import Any

try:
    import duckdb
except ImportError:
    duckdb = None

from sqlhub.adapters.base import (
    CatalogFeature,
    CatalogQuery,
    ConnectInfo,
    DatabaseAdapter,
    EngineType,
    SwitchMode,
)
from sqlhub.adapters.base.catalog import upper_types
from sqlhub.adapters.registry import register_adapter


class DuckDBAdapter(DatabaseAdapter):
    """DuckDB embedded database adapter."""

    ENGINE = EngineType.DUCKDB
    DIALECT = "duckdb"

    SWITCH_MODE = SwitchMode.NONE

    FEATURES = frozenset(CatalogFeature) - {CatalogFeature.PROCEDURES}

    PLACEHOLDER = "?"

    def _open(self, info: ConnectInfo) -> Any:
        if duckdb is None:
            raise ImportError("DuckDB is not installed. Install it with: uv add duckdb")

        extra = dict(info.extra or {})
        read_only = bool(extra.pop("read_only", False))
        return duckdb.connect(
            database=info.path or ":memory:", read_only=read_only, config=extra
        )

    def update_count(self, cursor: Any, sql: str) -> int | None:
        # DuckDB answers INSERT/UPDATE/DELETE with a one-row "Count" result set;
        # with RETURNING the statement produces ordinary rows instead
        if cursor.description is None:
            return cursor.rowcount
        labels = [column[0] for column in cursor.description]
        if labels != ["Count"]:
            return None
        statements = duckdb.extract_statements(sql)
        mutations = {
            duckdb.StatementType.INSERT,
            duckdb.StatementType.UPDATE,
            duckdb.StatementType.DELETE,
        }
        if len(statements) == 1 and statements[0].type in mutations:
            row = cursor.fetchone()
            return int(row[0]) if row else 0
        return None

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery(
            "SELECT database_name AS TABLE_CAT FROM duckdb_databases() "
            "WHERE NOT internal ORDER BY database_name"
        )

    def schemas_query(self, database, schema_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("catalog_name", database)
        f.like("schema_name", schema_pattern)
        return f.build(
            f"""
            SELECT schema_name AS TABLE_SCHEM, catalog_name AS TABLE_CATALOG
            FROM information_schema.schemata
            {f.where()}
            ORDER BY catalog_name, schema_name
            """
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("TABLE_CAT", database)
        f.like("TABLE_SCHEM", schema)
        f.like("TABLE_NAME", table_pattern)
        f.one_of("TABLE_TYPE", upper_types(types))
        return f.build(
            f"""
            SELECT * FROM (
                SELECT database_name AS TABLE_CAT, schema_name AS TABLE_SCHEM,
                       table_name AS TABLE_NAME, 'TABLE' AS TABLE_TYPE, comment AS REMARKS
                FROM duckdb_tables() WHERE NOT internal
                UNION ALL
                SELECT database_name, schema_name, view_name, 'VIEW', comment
                FROM duckdb_views() WHERE NOT internal
            ) catalog_tables
            {f.where()}
            ORDER BY TABLE_TYPE, TABLE_CAT, TABLE_SCHEM, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("database_name", database)
        f.like("schema_name", schema)
        f.like("table_name", table)
        f.like("column_name", column_pattern)
        return f.build(
            f"""
            SELECT database_name AS TABLE_CAT, schema_name AS TABLE_SCHEM,
                   table_name AS TABLE_NAME, column_name AS COLUMN_NAME,
                   comment AS REMARKS, column_default AS COLUMN_DEF,
                   data_type AS TYPE_NAME,
                   COALESCE(character_maximum_length, numeric_precision) AS COLUMN_SIZE,
                   numeric_scale AS DECIMAL_DIGITS,
                   numeric_precision_radix AS NUM_PREC_RADIX,
                   CASE WHEN is_nullable THEN 1 ELSE 0 END AS NULLABLE,
                   NULL AS CHAR_OCTET_LENGTH, column_index AS ORDINAL_POSITION,
                   CASE WHEN starts_with(COALESCE(column_default, ''), 'nextval(')
                        THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   'NO' AS IS_GENERATEDCOLUMN
            FROM duckdb_columns()
            {f.where("NOT internal")}
            ORDER BY database_name, schema_name, table_name, column_index
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        # duckdb_indexes() reports one row per index with its key expressions
        f = self.catalog_filter()
        f.equals("database_name", database)
        f.equals("schema_name", schema)
        f.equals("table_name", table)
        return f.build(
            f"""
            SELECT database_name AS TABLE_CAT, schema_name AS TABLE_SCHEM,
                   table_name AS TABLE_NAME, NOT is_unique AS NON_UNIQUE,
                   NULL AS INDEX_QUALIFIER, index_name AS INDEX_NAME,
                   1 AS ORDINAL_POSITION, CAST(expressions AS VARCHAR) AS COLUMN_NAME,
                   NULL AS ASC_OR_DESC, NULL AS CARDINALITY, NULL AS PAGES,
                   NULL AS FILTER_CONDITION
            FROM duckdb_indexes()
            {f.where()}
            ORDER BY NON_UNIQUE, INDEX_NAME
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("database_name", database)
        f.like("schema_name", schema)
        return f.build(
            f"""
            SELECT database_name AS FUNCTION_CAT, schema_name AS FUNCTION_SCHEM,
                   function_name AS FUNCTION_NAME, description AS REMARKS,
                   CASE WHEN function_type IN ('table', 'table_macro') THEN 2 ELSE 1 END
                        AS FUNCTION_TYPE,
                   function_name AS SPECIFIC_NAME
            FROM duckdb_functions()
            {f.where("NOT internal")}
            ORDER BY database_name, schema_name, function_name
            """
        )


# Register the adapter
register_adapter(EngineType.DUCKDB, DuckDBAdapter)
