"""
Core database adapter base class.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import sqlglot
from sqlglot import exp

from sqlhub.exceptions import InputError

from .catalog import CatalogFilter, CatalogQuery
from .config import CatalogFeature, ConnectInfo, EngineType, SwitchMode


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    An adapter is the dialect policy for one engine: how to open a native
    DB-API handle, how (and whether) to switch the active database, which
    catalog lookups are meaningful, and the catalog SQL that answers them.
    Adapters hold no connection state; handles are owned by a
    ConnectionContext.
    """

    ENGINE: EngineType
    # sqlglot dialect used for identifier quoting
    DIALECT: str

    SWITCH_MODE = SwitchMode.NONE
    SWITCH_TEMPLATE: str | None = None

    FEATURES: frozenset[CatalogFeature] = frozenset(
        {CatalogFeature.TABLES, CatalogFeature.COLUMNS}
    )

    # DB-API placeholder style of the driver
    PLACEHOLDER = "%s"

    # Override in subclasses to define required ConnectInfo fields
    REQUIRED_FIELDS: tuple[str, ...] = ()

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    def supports(self, feature: CatalogFeature) -> bool:
        """Check whether a catalog lookup is meaningful for this engine."""
        return feature in self.FEATURES

    def validate(self, info: ConnectInfo) -> None:
        """Validate that the descriptor carries what this engine needs to connect."""
        missing = [name for name in self.REQUIRED_FIELDS if not getattr(info, name)]
        if missing:
            raise InputError(
                f"{self.ENGINE.value} connection requires {', '.join(missing)}"
            )

    def connect(self, info: ConnectInfo) -> Any:
        """
        Open a native connection for the descriptor.

        This is the only place where I/O towards the target engine starts.

        Returns:
            An open DB-API connection in autocommit mode
        """
        self.validate(info)
        handle = self._open(info)
        self.logger.info(f"Connected to {info.describe()}")
        return handle

    @abstractmethod
    def _open(self, info: ConnectInfo) -> Any:
        """Open the driver connection. Drivers are imported lazily here."""
        pass

    def switch_statement(self, database: str) -> str | None:
        """Statement that switches the active database in-session, if any."""
        if self.SWITCH_MODE is not SwitchMode.IN_SESSION or not self.SWITCH_TEMPLATE:
            return None
        return self.SWITCH_TEMPLATE.format(database=self.quote_identifier(database))

    def update_count(self, cursor: Any, sql: str) -> int | None:
        """
        Affected-row count of an executed statement.

        Returns None when the statement produced a row set to be read.
        """
        if cursor.description is None:
            return cursor.rowcount
        return None

    def quote_identifier(self, name: str, force: bool = False) -> str:
        """Quote an identifier for this dialect when it needs quoting."""
        identifier = exp.to_identifier(name, quoted=True if force else None)
        return identifier.sql(dialect=self.DIALECT)

    def quote_literal(self, value: str) -> str:
        """Render a string literal for this dialect."""
        return exp.Literal.string(value).sql(dialect=self.DIALECT)

    def placeholder(self, position: int) -> str:
        """Parameter marker for the n-th (1-based) bound value."""
        return self.PLACEHOLDER

    def catalog_filter(self) -> CatalogFilter:
        return CatalogFilter(self)

    def get_adapter_info(self) -> dict[str, Any]:
        """Describe the policy of this adapter."""
        return {
            "adapter_type": self.__class__.__name__,
            "engine": self.ENGINE.value,
            "dialect": self.DIALECT,
            "switch_mode": self.SWITCH_MODE.value,
            "catalog_features": sorted(f.value for f in self.FEATURES),
        }

    # Catalog queries. Every adapter answers tables and columns; the other
    # lookups are only called when the matching CatalogFeature is declared.

    def databases_query(self) -> CatalogQuery:
        raise self._unsupported(CatalogFeature.DATABASES)

    def schemas_query(self, database: str | None, schema_pattern: str | None) -> CatalogQuery:
        raise self._unsupported(CatalogFeature.SCHEMAS)

    @abstractmethod
    def tables_query(
        self,
        database: str | None,
        schema: str | None,
        table_pattern: str | None,
        types: list[str] | None,
    ) -> CatalogQuery:
        pass

    @abstractmethod
    def columns_query(
        self,
        database: str | None,
        schema: str | None,
        table: str | None,
        column_pattern: str | None,
    ) -> CatalogQuery:
        pass

    def indexes_query(self, database: str | None, schema: str | None, table: str) -> CatalogQuery:
        raise self._unsupported(CatalogFeature.INDEXES)

    def functions_query(self, database: str | None, schema: str | None) -> CatalogQuery:
        raise self._unsupported(CatalogFeature.FUNCTIONS)

    def procedures_query(self, database: str | None, schema: str | None) -> CatalogQuery:
        raise self._unsupported(CatalogFeature.PROCEDURES)

    def _unsupported(self, feature: CatalogFeature) -> NotImplementedError:
        return NotImplementedError(
            f"Adapter {self.__class__.__name__} does not support listing {feature.value}"
        )

    @staticmethod
    def _import_driver(module: str, package: str) -> Any:
        """Import a driver module or explain how to install it."""
        import importlib

        try:
            return importlib.import_module(module)
        except ImportError:
            raise ImportError(
                f"{module} is not installed. Install it with: uv add {package}"
            ) from None


def sqlglot_dialect_exists(name: str) -> bool:
    """Check that sqlglot knows a dialect name."""
    try:
        sqlglot.Dialect.get_or_raise(name)
    except ValueError:
        return False
    return True
