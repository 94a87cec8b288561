"""
Configuration types and structures for database adapters.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from sqlhub.exceptions import InputError


class EngineType(Enum):
    """Database engines supported by sqlhub."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    ORACLE = "oracle"
    SQLSERVER = "sqlserver"
    SQLITE = "sqlite"
    DUCKDB = "duckdb"
    SNOWFLAKE = "snowflake"

    @classmethod
    def parse(cls, value: "EngineType | str") -> "EngineType":
        """Resolve an engine from an enum member, a name or a known alias."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InputError("Database type is required")

        name = value.strip().lower()
        name = _ENGINE_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            supported = ", ".join(sorted(e.value for e in cls))
            raise InputError(
                f"Unsupported database type: {value}. Supported types: {supported}"
            ) from None


_ENGINE_ALIASES = {
    "postgres": "postgresql",
    "pg": "postgresql",
    "mssql": "sqlserver",
    "embedded": "duckdb",
}


# Engines that open a local file (or an in-memory database) instead of a server
FILE_ENGINES = frozenset({EngineType.SQLITE, EngineType.DUCKDB})


class SwitchMode(Enum):
    """How an engine changes the active database of a session."""

    IN_SESSION = "in_session"  # native "use database" on the live handle
    RECONNECT = "reconnect"  # database is bound at connect time
    NONE = "none"  # no meaningful concept of switching


class CatalogFeature(Enum):
    """Catalog introspection calls an engine can answer."""

    DATABASES = "databases"
    SCHEMAS = "schemas"
    TABLES = "tables"
    COLUMNS = "columns"
    INDEXES = "indexes"
    FUNCTIONS = "functions"
    PROCEDURES = "procedures"


@dataclass(frozen=True)
class ConnectInfo:
    """Connection descriptor for one session."""

    engine: EngineType
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = field(default=None, repr=False)
    database: str | None = None
    schema: str | None = None
    path: str | None = None  # For file-based databases like SQLite and DuckDB

    # Connection settings
    connection_timeout: int = 30
    query_timeout: int = 300

    # Additional driver keyword arguments
    extra: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ConnectInfo":
        """
        Create a ConnectInfo from a plain configuration dictionary.

        Args:
            config_dict: Mapping with at least a ``type`` key

        Returns:
            Validated ConnectInfo

        Raises:
            InputError: If required fields are missing or values are invalid
        """
        if "type" not in config_dict:
            raise InputError("Missing required field for connection: type")

        _validate_field_types(config_dict)
        _validate_field_values(config_dict)

        return cls(
            engine=EngineType.parse(config_dict["type"]),
            host=config_dict.get("host"),
            port=config_dict.get("port"),
            user=config_dict.get("user"),
            password=config_dict.get("password"),
            database=config_dict.get("database"),
            schema=config_dict.get("schema"),
            path=config_dict.get("path"),
            connection_timeout=config_dict.get("connection_timeout") or 30,
            query_timeout=config_dict.get("query_timeout") or 300,
            extra=config_dict.get("extra"),
        )

    def with_database(self, database: str) -> "ConnectInfo":
        """Return a copy bound to another database."""
        return replace(self, database=database)

    def describe(self) -> str:
        """Credential-free description used in log messages."""
        if self.engine in FILE_ENGINES:
            return f"{self.engine.value}:{self.path or ':memory:'}"
        location = self.host or "localhost"
        if self.port:
            location = f"{location}:{self.port}"
        return f"{self.engine.value}://{location}/{self.database or ''}"


def _validate_field_types(config_dict: dict[str, Any]) -> None:
    """Validate field types."""
    if config_dict.get("port") is not None:
        if not isinstance(config_dict["port"], int):
            raise InputError("Port must be an integer")

    for key in ("connection_timeout", "query_timeout"):
        if config_dict.get(key) is not None and not isinstance(config_dict[key], int):
            raise InputError(f"{key.replace('_', ' ').capitalize()} must be an integer")

    if config_dict.get("extra") is not None and not isinstance(config_dict["extra"], dict):
        raise InputError("Extra connection settings must be a table/dictionary")


def _validate_field_values(config_dict: dict[str, Any]) -> None:
    """Validate field values."""
    if config_dict.get("port") is not None:
        if not (1 <= config_dict["port"] <= 65535):
            raise InputError("Port must be between 1 and 65535")

    for key in ("connection_timeout", "query_timeout"):
        if config_dict.get(key) is not None and config_dict[key] <= 0:
            raise InputError(f"{key.replace('_', ' ').capitalize()} must be positive")
