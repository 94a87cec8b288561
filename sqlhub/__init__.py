"""
sqlhub

Cross-dialect database access: session connections, paginated SQL execution
and catalog introspection behind one interface.
"""

from .adapters import ConnectInfo, DatabaseAdapter, EngineType, get_adapter
from .engine import (
    ConnectionContext,
    ExecuteResult,
    MetadataIntrospector,
    SessionRegistry,
    SQLExecutor,
    load_connect_info,
)
from .exceptions import (
    DatabaseConnectionError,
    ExecutionError,
    InputError,
    MetadataError,
    SessionBusyError,
    SessionNotFoundError,
    SQLHubError,
)

__version__ = "0.1.0"

__all__ = [
    "ConnectInfo",
    "EngineType",
    "DatabaseAdapter",
    "get_adapter",
    "ConnectionContext",
    "SessionRegistry",
    "SQLExecutor",
    "ExecuteResult",
    "MetadataIntrospector",
    "load_connect_info",
    "SQLHubError",
    "InputError",
    "DatabaseConnectionError",
    "ExecutionError",
    "MetadataError",
    "SessionBusyError",
    "SessionNotFoundError",
]
