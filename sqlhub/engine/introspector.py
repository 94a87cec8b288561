"""
Catalog metadata introspection.

The introspector asks the session's adapter for the catalog query of each
lookup, runs it on the session handle and maps the rows to records. Lookups
an engine does not support return an empty list without any I/O.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from sqlhub.adapters.base import CatalogFeature, CatalogQuery
from sqlhub.exceptions import (
    DatabaseConnectionError,
    InputError,
    MetadataError,
    SessionBusyError,
)

from .models import (
    Function,
    Procedure,
    Table,
    TableColumn,
    TableIndex,
    TableIndexColumn,
    group_indexes,
)

if TYPE_CHECKING:
    from .context import ConnectionContext

T = TypeVar("T")


class MetadataIntrospector:
    """Lists catalog objects of a session's engine."""

    def __init__(self, context: "ConnectionContext") -> None:
        self.context = context
        self.adapter = context.adapter
        self.logger = logging.getLogger(self.__class__.__name__)

    def list_databases(self) -> list[str]:
        return self._list(
            CatalogFeature.DATABASES,
            self.adapter.databases_query,
            lambda row: row["TABLE_CAT"],
        )

    def list_schemas(
        self, database: str | None = None, schema_pattern: str | None = None
    ) -> list[str]:
        return self._list(
            CatalogFeature.SCHEMAS,
            lambda: self.adapter.schemas_query(database, schema_pattern),
            lambda row: row["TABLE_SCHEM"],
        )

    def list_tables(
        self,
        database: str | None = None,
        schema: str | None = None,
        table_pattern: str | None = None,
        types: list[str] | None = None,
    ) -> list[Table]:
        return self._list(
            CatalogFeature.TABLES,
            lambda: self.adapter.tables_query(database, schema, table_pattern, types),
            Table.from_row,
        )

    def list_columns(
        self,
        database: str | None = None,
        schema: str | None = None,
        table: str | None = None,
        column_pattern: str | None = None,
    ) -> list[TableColumn]:
        return self._list(
            CatalogFeature.COLUMNS,
            lambda: self.adapter.columns_query(database, schema, table, column_pattern),
            TableColumn.from_row,
        )

    def list_indexes(
        self, database: str | None = None, schema: str | None = None, table: str | None = None
    ) -> list[TableIndex]:
        """
        List the indexes of one table, columns grouped per index.

        Raises:
            InputError: If no table is given
        """
        if not table:
            raise InputError("Table name is required to list indexes")

        index_columns = self._list(
            CatalogFeature.INDEXES,
            lambda: self.adapter.indexes_query(database, schema, table),
            TableIndexColumn.from_row,
        )
        return group_indexes(index_columns)

    def list_functions(
        self, database: str | None = None, schema: str | None = None
    ) -> list[Function]:
        return self._list(
            CatalogFeature.FUNCTIONS,
            lambda: self.adapter.functions_query(database, schema),
            Function.from_row,
        )

    def list_procedures(
        self, database: str | None = None, schema: str | None = None
    ) -> list[Procedure]:
        return self._list(
            CatalogFeature.PROCEDURES,
            lambda: self.adapter.procedures_query(database, schema),
            Procedure.from_row,
        )

    def _list(
        self,
        feature: CatalogFeature,
        build_query: Callable[[], CatalogQuery],
        convert: Callable[[dict[str, Any]], T],
    ) -> list[T]:
        if not self.adapter.supports(feature):
            self.logger.debug(
                f"{self.adapter.ENGINE.value} does not support listing {feature.value}"
            )
            return []

        query = build_query()
        with self.context.operation():
            rows = self._fetch(feature, query)

        try:
            records = [convert(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise MetadataError(f"Unexpected catalog row while listing {feature.value}: {e}") from e

        self.logger.debug(f"Listed {len(records)} {feature.value}")
        return records

    def _fetch(self, feature: CatalogFeature, query: CatalogQuery) -> list[dict[str, Any]]:
        """Run a catalog query and return rows keyed by upper-cased column label."""
        cursor = None
        try:
            cursor = self.context.get_connection().cursor()
            if query.params:
                cursor.execute(query.sql, query.params)
            else:
                cursor.execute(query.sql)

            labels = [column[0].upper() for column in cursor.description]
            return [dict(zip(labels, row)) for row in cursor.fetchall()]

        except (DatabaseConnectionError, SessionBusyError):
            raise
        except Exception as e:
            self.logger.error(f"Failed to list {feature.value}: {e}")
            if cursor is not None:
                self._close_cursor(cursor)
                cursor = None
            # Drop the handle; the next lookup reopens it
            self.context.close()
            raise MetadataError(f"Failed to list {feature.value}: {e}") from e
        finally:
            if cursor is not None:
                self._close_cursor(cursor)

    def _close_cursor(self, cursor: Any) -> None:
        try:
            cursor.close()
        except Exception as e:
            self.logger.warning(f"Error closing cursor: {e}")
