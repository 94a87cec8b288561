"""
SQLite adapter implementation.

A SQLite handle is bound to one database file. Attached databases show up as
catalogs ("main", "temp", aliases given to ATTACH), but there is no schema
level, no stored routines and nothing to switch.
"""

import sqlite3
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


class SQLiteAdapter(DatabaseAdapter):
    """SQLite database adapter (standard library driver)."""

    ENGINE = EngineType.SQLITE
    DIALECT = "sqlite"

    SWITCH_MODE = SwitchMode.NONE

    FEATURES = frozenset(
        {
            CatalogFeature.DATABASES,
            CatalogFeature.TABLES,
            CatalogFeature.COLUMNS,
            CatalogFeature.INDEXES,
        }
    )

    PLACEHOLDER = "?"

    REQUIRED_FIELDS = ("path",)

    def _open(self, info: ConnectInfo) -> Any:
        extra = dict(info.extra or {})
        uri = extra.pop("uri", info.path.startswith("file:"))
        # isolation_level=None keeps the connection in autocommit mode.
        # Sessions hop threads between operations but never overlap them.
        return sqlite3.connect(
            info.path,
            timeout=info.connection_timeout,
            isolation_level=None,
            check_same_thread=False,
            uri=uri,
            **extra,
        )

    def _catalog(self, database: str | None) -> tuple[str, str]:
        """Return (catalog literal, qualified sqlite_master) for a catalog."""
        name = database or "main"
        return self.quote_literal(name), f"{self.quote_identifier(name)}.sqlite_master"

    def databases_query(self) -> CatalogQuery:
        return CatalogQuery("SELECT name AS TABLE_CAT FROM pragma_database_list ORDER BY seq")

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        catalog, master = self._catalog(database)
        f = self.catalog_filter()
        f.like("m.name", table_pattern)
        f.one_of("UPPER(m.type)", upper_types(types))
        return f.build(
            f"""
            SELECT {catalog} AS TABLE_CAT, NULL AS TABLE_SCHEM, m.name AS TABLE_NAME,
                   UPPER(m.type) AS TABLE_TYPE, NULL AS REMARKS
            FROM {master} m
            {f.where("m.type IN ('table', 'view')", "m.name NOT LIKE 'sqlite!_%' ESCAPE '!'")}
            ORDER BY TABLE_TYPE, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        catalog, master = self._catalog(database)
        f = self.catalog_filter()
        f.like("m.name", table)
        f.like("p.name", column_pattern)
        return f.build(
            f"""
            SELECT {catalog} AS TABLE_CAT, NULL AS TABLE_SCHEM, m.name AS TABLE_NAME,
                   p.name AS COLUMN_NAME, NULL AS REMARKS, p.dflt_value AS COLUMN_DEF,
                   p.type AS TYPE_NAME, NULL AS COLUMN_SIZE, NULL AS DECIMAL_DIGITS,
                   NULL AS NUM_PREC_RADIX,
                   CASE p."notnull" WHEN 1 THEN 0 ELSE 1 END AS NULLABLE,
                   NULL AS CHAR_OCTET_LENGTH, p.cid + 1 AS ORDINAL_POSITION,
                   CASE WHEN p.pk = 1 AND UPPER(p.type) = 'INTEGER' THEN 'YES' ELSE 'NO' END
                        AS IS_AUTOINCREMENT,
                   'NO' AS IS_GENERATEDCOLUMN
            FROM {master} m
            JOIN pragma_table_info(m.name, {catalog}) p
            {f.where("m.type IN ('table', 'view')")}
            ORDER BY m.name, p.cid
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        catalog, master = self._catalog(database)
        f = self.catalog_filter()
        f.equals("m.name", table)
        return f.build(
            f"""
            SELECT {catalog} AS TABLE_CAT, NULL AS TABLE_SCHEM, m.name AS TABLE_NAME,
                   CASE il."unique" WHEN 1 THEN 0 ELSE 1 END AS NON_UNIQUE,
                   NULL AS INDEX_QUALIFIER, il.name AS INDEX_NAME,
                   ii.seqno + 1 AS ORDINAL_POSITION, ii.name AS COLUMN_NAME,
                   CASE ii."desc" WHEN 1 THEN 'D' ELSE 'A' END AS ASC_OR_DESC,
                   NULL AS CARDINALITY, NULL AS PAGES, NULL AS FILTER_CONDITION
            FROM {master} m
            JOIN pragma_index_list(m.name, {catalog}) il
            JOIN pragma_index_xinfo(il.name, {catalog}) ii
            {f.where("m.type = 'table'", "ii.key = 1")}
            ORDER BY NON_UNIQUE, INDEX_NAME, ORDINAL_POSITION
            """
        )


# Register the adapter
register_adapter(EngineType.SQLITE, SQLiteAdapter)
