"""
SQL Server adapter implementation.

Connections go through ODBC (pyodbc). The active database is switched
in-session with ``USE``; catalog views are read from the active database.
"""

from typing import Any

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

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"

_TABLE_TYPE = "CASE t.TABLE_TYPE WHEN 'BASE TABLE' THEN 'TABLE' ELSE t.TABLE_TYPE END"


class SQLServerAdapter(DatabaseAdapter):
    """Microsoft SQL Server database adapter."""

    ENGINE = EngineType.SQLSERVER
    DIALECT = "tsql"

    SWITCH_MODE = SwitchMode.IN_SESSION
    SWITCH_TEMPLATE = "USE {database}"

    FEATURES = frozenset(CatalogFeature)

    PLACEHOLDER = "?"

    REQUIRED_FIELDS = ("host",)

    def _open(self, info: ConnectInfo) -> Any:
        pyodbc = self._import_driver("pyodbc", "pyodbc")

        extra = dict(info.extra or {})
        server = info.host if not info.port else f"{info.host},{info.port}"
        parts = {
            "DRIVER": "{" + extra.pop("driver", DEFAULT_ODBC_DRIVER) + "}",
            "SERVER": server,
            "DATABASE": info.database,
            "UID": info.user,
            "PWD": info.password,
            "TrustServerCertificate": extra.pop("trust_server_certificate", "yes"),
        }
        parts.update({key: value for key, value in extra.items() if value is not None})
        connection_string = ";".join(f"{k}={v}" for k, v in parts.items() if v is not None)

        connection = pyodbc.connect(
            connection_string, autocommit=True, timeout=info.connection_timeout
        )
        connection.timeout = info.query_timeout
        return connection

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery("SELECT name AS TABLE_CAT FROM sys.databases ORDER BY name")

    def schemas_query(self, database, schema_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("DB_NAME()", database)
        f.like("s.name", schema_pattern)
        return f.build(
            f"""
            SELECT s.name AS TABLE_SCHEM, DB_NAME() AS TABLE_CATALOG
            FROM sys.schemas s
            {f.where()}
            ORDER BY s.name
            """
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("t.TABLE_CATALOG", database)
        f.like("t.TABLE_SCHEMA", schema)
        f.like("t.TABLE_NAME", table_pattern)
        f.one_of(_TABLE_TYPE, upper_types(types))
        return f.build(
            f"""
            SELECT t.TABLE_CATALOG AS TABLE_CAT, t.TABLE_SCHEMA AS TABLE_SCHEM,
                   t.TABLE_NAME, {_TABLE_TYPE} AS TABLE_TYPE,
                   CAST(ep.value AS NVARCHAR(4000)) AS REMARKS
            FROM INFORMATION_SCHEMA.TABLES t
            LEFT JOIN sys.extended_properties ep
                   ON ep.major_id = OBJECT_ID(QUOTENAME(t.TABLE_SCHEMA) + '.' + QUOTENAME(t.TABLE_NAME))
                  AND ep.minor_id = 0 AND ep.class = 1 AND ep.name = 'MS_Description'
            {f.where()}
            ORDER BY TABLE_TYPE, TABLE_SCHEM, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("c.TABLE_CATALOG", database)
        f.like("c.TABLE_SCHEMA", schema)
        f.like("c.TABLE_NAME", table)
        f.like("c.COLUMN_NAME", column_pattern)
        object_id = "OBJECT_ID(QUOTENAME(c.TABLE_SCHEMA) + '.' + QUOTENAME(c.TABLE_NAME))"
        return f.build(
            f"""
            SELECT c.TABLE_CATALOG AS TABLE_CAT, c.TABLE_SCHEMA AS TABLE_SCHEM,
                   c.TABLE_NAME, c.COLUMN_NAME,
                   CAST(ep.value AS NVARCHAR(4000)) AS REMARKS,
                   c.COLUMN_DEFAULT AS COLUMN_DEF, UPPER(c.DATA_TYPE) AS TYPE_NAME,
                   COALESCE(c.CHARACTER_MAXIMUM_LENGTH, c.NUMERIC_PRECISION,
                            c.DATETIME_PRECISION) AS COLUMN_SIZE,
                   c.NUMERIC_SCALE AS DECIMAL_DIGITS,
                   c.NUMERIC_PRECISION_RADIX AS NUM_PREC_RADIX,
                   CASE c.IS_NULLABLE WHEN 'YES' THEN 1 ELSE 0 END AS NULLABLE,
                   c.CHARACTER_OCTET_LENGTH AS CHAR_OCTET_LENGTH, c.ORDINAL_POSITION,
                   CASE COLUMNPROPERTY({object_id}, c.COLUMN_NAME, 'IsIdentity')
                        WHEN 1 THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   CASE COLUMNPROPERTY({object_id}, c.COLUMN_NAME, 'IsComputed')
                        WHEN 1 THEN 'YES' ELSE 'NO' END AS IS_GENERATEDCOLUMN
            FROM INFORMATION_SCHEMA.COLUMNS c
            LEFT JOIN sys.extended_properties ep
                   ON ep.major_id = {object_id}
                  AND ep.minor_id = COLUMNPROPERTY({object_id}, c.COLUMN_NAME, 'ColumnId')
                  AND ep.class = 1 AND ep.name = 'MS_Description'
            {f.where()}
            ORDER BY c.TABLE_SCHEMA, c.TABLE_NAME, c.ORDINAL_POSITION
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("DB_NAME()", database)
        f.equals("s.name", schema)
        f.equals("t.name", table)
        return f.build(
            f"""
            SELECT DB_NAME() AS TABLE_CAT, s.name AS TABLE_SCHEM, t.name AS TABLE_NAME,
                   CASE i.is_unique WHEN 1 THEN 0 ELSE 1 END AS NON_UNIQUE,
                   NULL AS INDEX_QUALIFIER, i.name AS INDEX_NAME,
                   ic.key_ordinal AS ORDINAL_POSITION, col.name AS COLUMN_NAME,
                   CASE ic.is_descending_key WHEN 1 THEN 'D' ELSE 'A' END AS ASC_OR_DESC,
                   NULL AS CARDINALITY, NULL AS PAGES,
                   i.filter_definition AS FILTER_CONDITION
            FROM sys.indexes i
            JOIN sys.tables t ON t.object_id = i.object_id
            JOIN sys.schemas s ON s.schema_id = t.schema_id
            JOIN sys.index_columns ic
                 ON ic.object_id = i.object_id AND ic.index_id = i.index_id
            JOIN sys.columns col
                 ON col.object_id = ic.object_id AND col.column_id = ic.column_id
            {f.where("i.type > 0", "ic.key_ordinal > 0")}
            ORDER BY NON_UNIQUE, INDEX_NAME, ORDINAL_POSITION
            """
        )

    def _routines_query(self, object_types: str, prefix: str, type_expression: str, database, schema):
        f = self.catalog_filter()
        f.equals("DB_NAME()", database)
        f.like("s.name", schema)
        return f.build(
            f"""
            SELECT DB_NAME() AS {prefix}_CAT, s.name AS {prefix}_SCHEM,
                   o.name AS {prefix}_NAME, CAST(ep.value AS NVARCHAR(4000)) AS REMARKS,
                   {type_expression} AS {prefix}_TYPE, o.name AS SPECIFIC_NAME
            FROM sys.objects o
            JOIN sys.schemas s ON s.schema_id = o.schema_id
            LEFT JOIN sys.extended_properties ep
                   ON ep.major_id = o.object_id AND ep.minor_id = 0
                  AND ep.class = 1 AND ep.name = 'MS_Description'
            {f.where(f"o.type IN ({object_types})")}
            ORDER BY s.name, o.name
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        return self._routines_query(
            "'FN', 'IF', 'TF', 'FS', 'FT'",
            "FUNCTION",
            "CASE WHEN o.type IN ('IF', 'TF', 'FT') THEN 2 ELSE 1 END",
            database,
            schema,
        )

    def procedures_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("'P', 'PC'", "PROCEDURE", "2", database, schema)


# Register the adapter
register_adapter(EngineType.SQLSERVER, SQLServerAdapter)
