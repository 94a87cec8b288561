"""
Snowflake adapter implementation.

This adapter provides Snowflake-specific functionality including:
- Connection management with warehouse and role support
- In-session database switching with ``USE DATABASE``
- Catalog lookups through each database's INFORMATION_SCHEMA

Snowflake has no indexes, so index lookups are not offered.
"""

from typing import Any

try:
    import snowflake.connector
except ImportError:
    snowflake = None

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

_TABLE_TYPE = "CASE TABLE_TYPE WHEN 'BASE TABLE' THEN 'TABLE' ELSE TABLE_TYPE END"


class SnowflakeAdapter(DatabaseAdapter):
    """Snowflake database adapter."""

    ENGINE = EngineType.SNOWFLAKE
    DIALECT = "snowflake"

    SWITCH_MODE = SwitchMode.IN_SESSION
    SWITCH_TEMPLATE = "USE DATABASE {database}"

    FEATURES = frozenset(CatalogFeature) - {CatalogFeature.INDEXES}

    REQUIRED_FIELDS = ("host", "user", "password")

    def _open(self, info: ConnectInfo) -> Any:
        if snowflake is None:
            raise ImportError(
                "Snowflake connector is not installed. Install it with: uv add snowflake-connector-python"
            )

        extra = dict(info.extra or {})

        # Get account from extra fields or extract from host
        account = extra.pop("account", None)
        if account is None:
            # e.g. "IZOMIWY-AM07852.snowflakecomputing.com" -> "IZOMIWY-AM07852"
            account = info.host.replace(".snowflakecomputing.com", "")

        connection_params = {
            "account": account,
            "user": info.user,
            "password": info.password,
            "database": info.database,
            "schema": info.schema,
            "login_timeout": info.connection_timeout,
            "network_timeout": info.query_timeout,
            "autocommit": True,
            **extra,
        }

        # Remove None values
        connection_params = {k: v for k, v in connection_params.items() if v is not None}
        return snowflake.connector.connect(**connection_params)

    def _information_schema(self, database: str | None) -> str:
        if database:
            return f"{self.quote_identifier(database)}.INFORMATION_SCHEMA"
        return "INFORMATION_SCHEMA"

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery(
            "SELECT DATABASE_NAME AS TABLE_CAT FROM INFORMATION_SCHEMA.DATABASES "
            "ORDER BY DATABASE_NAME"
        )

    def schemas_query(self, database, schema_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.like("SCHEMA_NAME", schema_pattern)
        return f.build(
            f"""
            SELECT SCHEMA_NAME AS TABLE_SCHEM, CATALOG_NAME AS TABLE_CATALOG
            FROM {self._information_schema(database)}.SCHEMATA
            {f.where()}
            ORDER BY SCHEMA_NAME
            """
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        f.like("TABLE_SCHEMA", schema)
        f.like("TABLE_NAME", table_pattern)
        f.one_of(_TABLE_TYPE, upper_types(types))
        return f.build(
            f"""
            SELECT TABLE_CATALOG AS TABLE_CAT, TABLE_SCHEMA AS TABLE_SCHEM, TABLE_NAME,
                   {_TABLE_TYPE} AS TABLE_TYPE, COMMENT AS REMARKS
            FROM {self._information_schema(database)}.TABLES
            {f.where()}
            ORDER BY TABLE_SCHEMA, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.like("TABLE_SCHEMA", schema)
        f.like("TABLE_NAME", table)
        f.like("COLUMN_NAME", column_pattern)
        return f.build(
            f"""
            SELECT TABLE_CATALOG AS TABLE_CAT, TABLE_SCHEMA AS TABLE_SCHEM, TABLE_NAME,
                   COLUMN_NAME, COMMENT AS REMARKS, COLUMN_DEFAULT AS COLUMN_DEF,
                   DATA_TYPE AS TYPE_NAME,
                   COALESCE(CHARACTER_MAXIMUM_LENGTH, NUMERIC_PRECISION,
                            DATETIME_PRECISION) AS COLUMN_SIZE,
                   NUMERIC_SCALE AS DECIMAL_DIGITS,
                   NUMERIC_PRECISION_RADIX AS NUM_PREC_RADIX,
                   CASE IS_NULLABLE WHEN 'YES' THEN 1 ELSE 0 END AS NULLABLE,
                   CHARACTER_OCTET_LENGTH AS CHAR_OCTET_LENGTH, ORDINAL_POSITION,
                   CASE IS_IDENTITY WHEN 'YES' THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   'NO' AS IS_GENERATEDCOLUMN
            FROM {self._information_schema(database)}.COLUMNS
            {f.where()}
            ORDER BY TABLE_SCHEMA, TABLE_NAME, ORDINAL_POSITION
            """
        )

    def _routines_query(self, view: str, prefix: str, database, schema) -> CatalogQuery:
        f = self.catalog_filter()
        f.like(f"{prefix}_SCHEMA", schema)
        return f.build(
            f"""
            SELECT {prefix}_CATALOG AS {prefix}_CAT, {prefix}_SCHEMA AS {prefix}_SCHEM,
                   {prefix}_NAME, COMMENT AS REMARKS, 1 AS {prefix}_TYPE,
                   {prefix}_NAME || ARGUMENT_SIGNATURE AS SPECIFIC_NAME
            FROM {self._information_schema(database)}.{view}
            {f.where()}
            ORDER BY {prefix}_SCHEMA, {prefix}_NAME
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("FUNCTIONS", "FUNCTION", database, schema)

    def procedures_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("PROCEDURES", "PROCEDURE", database, schema)


# Register the adapter
register_adapter(EngineType.SNOWFLAKE, SnowflakeAdapter)
