"""
Session-scoped execution and introspection engine.

This module provides:
- Per-session connection contexts with lazy handles and database switching
- SQL execution with one-row lookahead pagination and normalized cells
- Catalog introspection mapped onto dialect-neutral records
- Configuration management from pyproject.toml and environment variables
"""

from sqlhub.adapters import ConnectInfo, EngineType, get_adapter

from .cells import Cell, CellType, to_cell
from .config import DatabaseConfigManager, load_connect_info
from .context import ConnectionContext
from .executor import SQLExecutor
from .introspector import MetadataIntrospector
from .models import (
    FieldMapping,
    Function,
    Procedure,
    Table,
    TableColumn,
    TableIndex,
    TableIndexColumn,
    group_indexes,
)
from .results import ExecuteResult
from .sessions import SessionRegistry

__all__ = [
    # Sessions
    "ConnectionContext",
    "SessionRegistry",
    "ConnectInfo",
    "EngineType",
    "get_adapter",
    # Execution
    "SQLExecutor",
    "ExecuteResult",
    "Cell",
    "CellType",
    "to_cell",
    # Introspection
    "MetadataIntrospector",
    "FieldMapping",
    "Table",
    "TableColumn",
    "TableIndex",
    "TableIndexColumn",
    "Function",
    "Procedure",
    "group_indexes",
    # Configuration
    "DatabaseConfigManager",
    "load_connect_info",
]
