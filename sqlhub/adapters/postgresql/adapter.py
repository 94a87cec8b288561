"""
PostgreSQL adapter implementation.

A PostgreSQL connection is bound to one database for its whole lifetime, so
switching databases means reconnecting. Catalog lookups read pg_catalog and
only ever see the database the handle is bound to.
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

_RELATION_TYPE = """CASE
    WHEN n.nspname IN ('pg_catalog', 'information_schema') AND c.relkind = 'v' THEN 'SYSTEM VIEW'
    WHEN n.nspname IN ('pg_catalog', 'information_schema') THEN 'SYSTEM TABLE'
    WHEN c.relkind IN ('r', 'p') THEN 'TABLE'
    WHEN c.relkind = 'v' THEN 'VIEW'
    WHEN c.relkind = 'm' THEN 'MATERIALIZED VIEW'
    WHEN c.relkind = 'f' THEN 'FOREIGN TABLE'
END"""


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter."""

    ENGINE = EngineType.POSTGRESQL
    DIALECT = "postgres"

    SWITCH_MODE = SwitchMode.RECONNECT

    FEATURES = frozenset(CatalogFeature)

    REQUIRED_FIELDS = ("host", "user", "database")

    def _open(self, info: ConnectInfo) -> Any:
        psycopg2 = self._import_driver("psycopg2", "psycopg2-binary")

        connection_params = {
            "host": info.host,
            "port": info.port or 5432,
            "dbname": info.database,
            "user": info.user,
            "password": info.password,
            "connect_timeout": info.connection_timeout,
            # statement_timeout is expressed in milliseconds
            "options": f"-c statement_timeout={info.query_timeout * 1000}",
        }
        connection_params.update(info.extra or {})

        connection = psycopg2.connect(**connection_params)
        connection.autocommit = True
        if info.schema:
            with connection.cursor() as cursor:
                cursor.execute(f"SET search_path TO {self.quote_identifier(info.schema)}")
        return connection

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery(
            """
            SELECT datname AS TABLE_CAT
            FROM pg_catalog.pg_database
            WHERE datallowconn AND NOT datistemplate
            ORDER BY datname
            """.strip()
        )

    def schemas_query(self, database, schema_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("current_database()", database)
        f.like("nspname", schema_pattern)
        return f.build(
            f"""
            SELECT nspname AS TABLE_SCHEM, current_database() AS TABLE_CATALOG
            FROM pg_catalog.pg_namespace
            {f.where()}
            ORDER BY nspname
            """
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("current_database()", database)
        f.like("n.nspname", schema)
        f.like("c.relname", table_pattern)
        f.one_of(_RELATION_TYPE, upper_types(types))
        return f.build(
            f"""
            SELECT current_database() AS TABLE_CAT, n.nspname AS TABLE_SCHEM,
                   c.relname AS TABLE_NAME, {_RELATION_TYPE} AS TABLE_TYPE,
                   obj_description(c.oid, 'pg_class') AS REMARKS
            FROM pg_catalog.pg_class c
            JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
            {f.where("c.relkind IN ('r', 'p', 'v', 'm', 'f')")}
            ORDER BY TABLE_TYPE, TABLE_SCHEM, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("ic.table_catalog", database)
        f.like("ic.table_schema", schema)
        f.like("ic.table_name", table)
        f.like("ic.column_name", column_pattern)
        return f.build(
            f"""
            SELECT ic.table_catalog AS TABLE_CAT, ic.table_schema AS TABLE_SCHEM,
                   ic.table_name AS TABLE_NAME, ic.column_name AS COLUMN_NAME,
                   pd.description AS REMARKS, ic.column_default AS COLUMN_DEF,
                   ic.udt_name AS TYPE_NAME,
                   COALESCE(ic.character_maximum_length, ic.numeric_precision,
                            ic.datetime_precision) AS COLUMN_SIZE,
                   ic.numeric_scale AS DECIMAL_DIGITS,
                   ic.numeric_precision_radix AS NUM_PREC_RADIX,
                   CASE ic.is_nullable WHEN 'YES' THEN 1 ELSE 0 END AS NULLABLE,
                   ic.character_octet_length AS CHAR_OCTET_LENGTH,
                   ic.ordinal_position AS ORDINAL_POSITION,
                   CASE WHEN ic.is_identity = 'YES'
                          OR position('nextval(' in coalesce(ic.column_default, '')) = 1
                        THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   CASE WHEN ic.is_generated = 'ALWAYS' THEN 'YES' ELSE 'NO' END AS IS_GENERATEDCOLUMN
            FROM information_schema.columns ic
            LEFT JOIN pg_catalog.pg_namespace pn ON pn.nspname = ic.table_schema
            LEFT JOIN pg_catalog.pg_class pc
                   ON pc.relname = ic.table_name AND pc.relnamespace = pn.oid
            LEFT JOIN pg_catalog.pg_attribute pa
                   ON pa.attrelid = pc.oid AND pa.attname = ic.column_name
            LEFT JOIN pg_catalog.pg_description pd
                   ON pd.objoid = pc.oid AND pd.objsubid = pa.attnum
                  AND pd.classoid = 'pg_catalog.pg_class'::regclass
            {f.where()}
            ORDER BY ic.table_schema, ic.table_name, ic.ordinal_position
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        f = self.catalog_filter()
        f.equals("current_database()", database)
        f.equals("n.nspname", schema)
        f.equals("t.relname", table)
        return f.build(
            f"""
            SELECT current_database() AS TABLE_CAT, n.nspname AS TABLE_SCHEM,
                   t.relname AS TABLE_NAME, NOT ix.indisunique AS NON_UNIQUE,
                   NULL AS INDEX_QUALIFIER, i.relname AS INDEX_NAME,
                   k.ord AS ORDINAL_POSITION,
                   pg_catalog.pg_get_indexdef(ix.indexrelid, k.ord, false) AS COLUMN_NAME,
                   CASE WHEN (ix.indoption[k.ord - 1] & 1) = 1 THEN 'D' ELSE 'A' END AS ASC_OR_DESC,
                   i.reltuples AS CARDINALITY, i.relpages AS PAGES,
                   pg_catalog.pg_get_expr(ix.indpred, ix.indrelid) AS FILTER_CONDITION
            FROM pg_catalog.pg_index ix
            JOIN pg_catalog.pg_class t ON t.oid = ix.indrelid
            JOIN pg_catalog.pg_class i ON i.oid = ix.indexrelid
            JOIN pg_catalog.pg_namespace n ON n.oid = t.relnamespace
            CROSS JOIN LATERAL generate_series(1, ix.indnatts) AS k(ord)
            {f.where()}
            ORDER BY NON_UNIQUE, INDEX_NAME, ORDINAL_POSITION
            """
        )

    def _routines_query(self, prokind: str, prefix: str, type_expression: str, database, schema):
        f = self.catalog_filter()
        f.equals("current_database()", database)
        f.like("n.nspname", schema)
        return f.build(
            f"""
            SELECT current_database() AS {prefix}_CAT, n.nspname AS {prefix}_SCHEM,
                   p.proname AS {prefix}_NAME, d.description AS REMARKS,
                   {type_expression} AS {prefix}_TYPE,
                   p.proname || '_' || p.oid AS SPECIFIC_NAME
            FROM pg_catalog.pg_proc p
            JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace
            LEFT JOIN pg_catalog.pg_description d
                   ON d.objoid = p.oid AND d.classoid = 'pg_catalog.pg_proc'::regclass
            {f.where(f"p.prokind = '{prokind}'")}
            ORDER BY n.nspname, p.proname, p.oid
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        # functionReturnsTable (2) for set-returning functions
        return self._routines_query(
            "f", "FUNCTION", "CASE WHEN p.proretset THEN 2 ELSE 1 END", database, schema
        )

    def procedures_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("p", "PROCEDURE", "1", database, schema)


# Register the adapter
register_adapter(EngineType.POSTGRESQL, PostgreSQLAdapter)
