"""
Database adapters for sqlhub.

This package provides one adapter per database engine. An adapter is the
dialect policy of its engine:
- How a native connection is opened
- How the active database is switched (in-session, reconnect, or not at all)
- Which catalog lookups are meaningful
- The catalog SQL that answers them

Each adapter is organized in its own subpackage and registers itself on import.
"""

from .base import (
    CatalogFeature,
    CatalogQuery,
    ConnectInfo,
    DatabaseAdapter,
    EngineType,
    SwitchMode,
)

# Import adapters to register them
from .duckdb import DuckDBAdapter
from .mysql import MySQLAdapter
from .oracle import OracleAdapter
from .postgresql import PostgreSQLAdapter
from .registry import (
    AdapterRegistry,
    get_adapter,
    is_adapter_supported,
    list_available_adapters,
    register_adapter,
)
from .snowflake import SnowflakeAdapter
from .sqlite import SQLiteAdapter
from .sqlserver import SQLServerAdapter

__all__ = [
    # Base classes and configuration
    "DatabaseAdapter",
    "ConnectInfo",
    "EngineType",
    "SwitchMode",
    "CatalogFeature",
    "CatalogQuery",
    # Registry and factory functions
    "AdapterRegistry",
    "get_adapter",
    "register_adapter",
    "list_available_adapters",
    "is_adapter_supported",
    # Available adapters
    "MySQLAdapter",
    "PostgreSQLAdapter",
    "SQLServerAdapter",
    "OracleAdapter",
    "SQLiteAdapter",
    "DuckDBAdapter",
    "SnowflakeAdapter",
]
