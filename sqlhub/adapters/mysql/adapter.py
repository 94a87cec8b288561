"""
MySQL adapter implementation.

MySQL exposes databases as catalogs and has no separate schema level, so
TABLE_SCHEM is always NULL and schema lookups are not offered. The active
database is switched in-session with ``USE``.
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

_TABLE_TYPE = "CASE TABLE_TYPE WHEN 'BASE TABLE' THEN 'TABLE' ELSE TABLE_TYPE END"


class MySQLAdapter(DatabaseAdapter):
    """MySQL and MariaDB database adapter."""

    ENGINE = EngineType.MYSQL
    DIALECT = "mysql"

    SWITCH_MODE = SwitchMode.IN_SESSION
    SWITCH_TEMPLATE = "USE {database}"

    FEATURES = frozenset(
        {
            CatalogFeature.DATABASES,
            CatalogFeature.TABLES,
            CatalogFeature.COLUMNS,
            CatalogFeature.INDEXES,
            CatalogFeature.FUNCTIONS,
            CatalogFeature.PROCEDURES,
        }
    )

    REQUIRED_FIELDS = ("host", "user")

    def _open(self, info: ConnectInfo) -> Any:
        pymysql = self._import_driver("pymysql", "pymysql")

        connection_params = {
            "host": info.host,
            "port": info.port or 3306,
            "user": info.user,
            "password": info.password or "",
            "database": info.database,
            "connect_timeout": info.connection_timeout,
            "read_timeout": info.query_timeout,
            "charset": "utf8mb4",
            "autocommit": True,
        }
        connection_params.update(info.extra or {})
        return pymysql.connect(**connection_params)

    def switch_statement(self, database: str) -> str | None:
        # Database names are always backquoted, they may contain dashes or dots
        return self.SWITCH_TEMPLATE.format(database=self.quote_identifier(database, force=True))

    def _database_condition(self, column: str, database: str | None, f) -> tuple[str, ...]:
        if database:
            f.equals(column, database)
            return ()
        return (f"{column} = DATABASE()",)

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery(
            "SELECT SCHEMA_NAME AS TABLE_CAT FROM information_schema.SCHEMATA ORDER BY SCHEMA_NAME"
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._database_condition("TABLE_SCHEMA", database, f)
        f.like("TABLE_NAME", table_pattern)
        f.one_of(_TABLE_TYPE, upper_types(types))
        return f.build(
            f"""
            SELECT TABLE_SCHEMA AS TABLE_CAT, NULL AS TABLE_SCHEM, TABLE_NAME,
                   {_TABLE_TYPE} AS TABLE_TYPE, TABLE_COMMENT AS REMARKS
            FROM information_schema.TABLES
            {f.where(*fixed)}
            ORDER BY TABLE_TYPE, TABLE_SCHEMA, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._database_condition("TABLE_SCHEMA", database, f)
        f.like("TABLE_NAME", table)
        f.like("COLUMN_NAME", column_pattern)
        return f.build(
            f"""
            SELECT TABLE_SCHEMA AS TABLE_CAT, NULL AS TABLE_SCHEM, TABLE_NAME, COLUMN_NAME,
                   COLUMN_COMMENT AS REMARKS, COLUMN_DEFAULT AS COLUMN_DEF,
                   UPPER(DATA_TYPE) AS TYPE_NAME,
                   COALESCE(CHARACTER_MAXIMUM_LENGTH, NUMERIC_PRECISION, DATETIME_PRECISION) AS COLUMN_SIZE,
                   NUMERIC_SCALE AS DECIMAL_DIGITS,
                   CASE WHEN NUMERIC_PRECISION IS NULL THEN NULL ELSE 10 END AS NUM_PREC_RADIX,
                   CASE IS_NULLABLE WHEN 'YES' THEN 1 ELSE 0 END AS NULLABLE,
                   CHARACTER_OCTET_LENGTH AS CHAR_OCTET_LENGTH, ORDINAL_POSITION,
                   CASE WHEN LOCATE('auto_increment', EXTRA) > 0 THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   CASE WHEN LOCATE('GENERATED', EXTRA) > 0 THEN 'YES' ELSE 'NO' END AS IS_GENERATEDCOLUMN
            FROM information_schema.COLUMNS
            {f.where(*fixed)}
            ORDER BY TABLE_SCHEMA, TABLE_NAME, ORDINAL_POSITION
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._database_condition("TABLE_SCHEMA", database, f)
        f.equals("TABLE_NAME", table)
        return f.build(
            f"""
            SELECT TABLE_SCHEMA AS TABLE_CAT, NULL AS TABLE_SCHEM, TABLE_NAME,
                   NON_UNIQUE, NULL AS INDEX_QUALIFIER, INDEX_NAME,
                   SEQ_IN_INDEX AS ORDINAL_POSITION, COLUMN_NAME,
                   COLLATION AS ASC_OR_DESC, CARDINALITY, 0 AS PAGES,
                   NULL AS FILTER_CONDITION
            FROM information_schema.STATISTICS
            {f.where(*fixed)}
            ORDER BY NON_UNIQUE, INDEX_NAME, SEQ_IN_INDEX
            """
        )

    def _routines_query(self, routine_type: str, prefix: str, database) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._database_condition("ROUTINE_SCHEMA", database, f)
        f.equals("ROUTINE_TYPE", routine_type)
        return f.build(
            f"""
            SELECT ROUTINE_SCHEMA AS {prefix}_CAT, NULL AS {prefix}_SCHEM,
                   ROUTINE_NAME AS {prefix}_NAME, ROUTINE_COMMENT AS REMARKS,
                   1 AS {prefix}_TYPE, SPECIFIC_NAME
            FROM information_schema.ROUTINES
            {f.where(*fixed)}
            ORDER BY ROUTINE_SCHEMA, ROUTINE_NAME
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("FUNCTION", "FUNCTION", database)

    def procedures_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("PROCEDURE", "PROCEDURE", database)


# Register the adapter
register_adapter(EngineType.MYSQL, MySQLAdapter)
