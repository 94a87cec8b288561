"""
Oracle adapter implementation.

Oracle has no catalog level above schemas: TABLE_CAT is always NULL, there is
nothing to list as databases and nothing to switch. Lookups without a schema
default to the session's current schema.
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
from sqlhub.exceptions import InputError

_CURRENT_SCHEMA = "SYS_CONTEXT('USERENV', 'CURRENT_SCHEMA')"


class OracleAdapter(DatabaseAdapter):
    """Oracle database adapter (python-oracledb, thin mode)."""

    ENGINE = EngineType.ORACLE
    DIALECT = "oracle"

    SWITCH_MODE = SwitchMode.NONE

    FEATURES = frozenset(CatalogFeature) - {CatalogFeature.DATABASES}

    REQUIRED_FIELDS = ("user",)

    def placeholder(self, position: int) -> str:
        return f":{position}"

    def validate(self, info: ConnectInfo) -> None:
        super().validate(info)
        if not info.host and not (info.extra or {}).get("dsn"):
            raise InputError("oracle connection requires host or extra.dsn")

    def _open(self, info: ConnectInfo) -> Any:
        oracledb = self._import_driver("oracledb", "oracledb")

        # LOBs come back as str/bytes so result cells never hold live locators
        oracledb.defaults.fetch_lobs = False

        extra = dict(info.extra or {})
        dsn = extra.pop("dsn", None)
        if dsn is None:
            dsn = oracledb.makedsn(info.host, info.port or 1521, service_name=info.database)

        connection = oracledb.connect(
            user=info.user,
            password=info.password,
            dsn=dsn,
            tcp_connect_timeout=float(info.connection_timeout),
            **extra,
        )
        connection.autocommit = True
        # call_timeout is expressed in milliseconds
        connection.call_timeout = info.query_timeout * 1000
        return connection

    def _owner_condition(self, column: str, schema: str | None, f) -> tuple[str, ...]:
        if schema:
            f.like(column, schema)
            return ()
        return (f"{column} = {_CURRENT_SCHEMA}",)

    def schemas_query(self, database, schema_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        f.like("username", schema_pattern)
        return f.build(
            f"""
            SELECT username AS TABLE_SCHEM, NULL AS TABLE_CATALOG
            FROM all_users
            {f.where()}
            ORDER BY username
            """
        )

    def tables_query(self, database, schema, table_pattern, types) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._owner_condition("o.owner", schema, f)
        f.like("o.object_name", table_pattern)
        f.one_of("o.object_type", upper_types(types))
        return f.build(
            f"""
            SELECT NULL AS TABLE_CAT, o.owner AS TABLE_SCHEM, o.object_name AS TABLE_NAME,
                   o.object_type AS TABLE_TYPE, tc.comments AS REMARKS
            FROM all_objects o
            LEFT JOIN all_tab_comments tc
                   ON tc.owner = o.owner AND tc.table_name = o.object_name
            {f.where("o.object_type IN ('TABLE', 'VIEW', 'MATERIALIZED VIEW')", *fixed)}
            ORDER BY TABLE_TYPE, TABLE_SCHEM, TABLE_NAME
            """
        )

    def columns_query(self, database, schema, table, column_pattern) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._owner_condition("c.owner", schema, f)
        f.like("c.table_name", table)
        f.like("c.column_name", column_pattern)
        return f.build(
            f"""
            SELECT NULL AS TABLE_CAT, c.owner AS TABLE_SCHEM, c.table_name AS TABLE_NAME,
                   c.column_name AS COLUMN_NAME, cc.comments AS REMARKS,
                   c.data_default AS COLUMN_DEF, c.data_type AS TYPE_NAME,
                   COALESCE(c.data_precision, NULLIF(c.char_length, 0), c.data_length) AS COLUMN_SIZE,
                   c.data_scale AS DECIMAL_DIGITS,
                   CASE WHEN c.data_precision IS NULL THEN NULL ELSE 10 END AS NUM_PREC_RADIX,
                   CASE c.nullable WHEN 'Y' THEN 1 ELSE 0 END AS NULLABLE,
                   c.data_length AS CHAR_OCTET_LENGTH, c.column_id AS ORDINAL_POSITION,
                   CASE c.identity_column WHEN 'YES' THEN 'YES' ELSE 'NO' END AS IS_AUTOINCREMENT,
                   CASE c.virtual_column WHEN 'YES' THEN 'YES' ELSE 'NO' END AS IS_GENERATEDCOLUMN
            FROM all_tab_cols c
            LEFT JOIN all_col_comments cc
                   ON cc.owner = c.owner AND cc.table_name = c.table_name
                  AND cc.column_name = c.column_name
            {f.where("c.hidden_column = 'NO'", *fixed)}
            ORDER BY c.owner, c.table_name, c.column_id
            """
        )

    def indexes_query(self, database, schema, table) -> CatalogQuery:
        f = self.catalog_filter()
        if schema:
            f.equals("i.table_owner", schema)
            fixed: tuple[str, ...] = ()
        else:
            fixed = (f"i.table_owner = {_CURRENT_SCHEMA}",)
        f.equals("i.table_name", table)
        return f.build(
            f"""
            SELECT NULL AS TABLE_CAT, i.table_owner AS TABLE_SCHEM, i.table_name AS TABLE_NAME,
                   CASE i.uniqueness WHEN 'UNIQUE' THEN 0 ELSE 1 END AS NON_UNIQUE,
                   i.owner AS INDEX_QUALIFIER, i.index_name AS INDEX_NAME,
                   ic.column_position AS ORDINAL_POSITION, ic.column_name AS COLUMN_NAME,
                   CASE ic.descend WHEN 'DESC' THEN 'D' ELSE 'A' END AS ASC_OR_DESC,
                   i.distinct_keys AS CARDINALITY, i.leaf_blocks AS PAGES,
                   NULL AS FILTER_CONDITION
            FROM all_indexes i
            JOIN all_ind_columns ic
                 ON ic.index_owner = i.owner AND ic.index_name = i.index_name
            {f.where(*fixed)}
            ORDER BY NON_UNIQUE, INDEX_NAME, ORDINAL_POSITION
            """
        )

    def _routines_query(self, object_type: str, prefix: str, schema) -> CatalogQuery:
        f = self.catalog_filter()
        fixed = self._owner_condition("o.owner", schema, f)
        return f.build(
            f"""
            SELECT NULL AS {prefix}_CAT, o.owner AS {prefix}_SCHEM,
                   o.object_name AS {prefix}_NAME, NULL AS REMARKS,
                   1 AS {prefix}_TYPE, o.object_name AS SPECIFIC_NAME
            FROM all_objects o
            {f.where(f"o.object_type = '{object_type}'", *fixed)}
            ORDER BY o.owner, o.object_name
            """
        )

    def functions_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("FUNCTION", "FUNCTION", schema)

    def procedures_query(self, database, schema) -> CatalogQuery:
        return self._routines_query("PROCEDURE", "PROCEDURE", schema)


# Register the adapter
register_adapter(EngineType.ORACLE, OracleAdapter)
