"""
Custom exceptions for sqlhub.

Every failure surfaced by the engine is one of these. Wrapped driver errors
are always chained (``raise ... from e``) so the native cause stays available.
"""


class SQLHubError(Exception):
    """Base exception for all sqlhub errors."""

    pass


class InputError(SQLHubError, ValueError):
    """Raised for missing or invalid caller input, before any I/O happens."""

    pass


class DatabaseConnectionError(SQLHubError):
    """Raised when a native handle cannot be opened or the database switched."""

    pass


class ExecutionError(SQLHubError):
    """Raised when the engine rejects or fails a submitted statement."""

    def __init__(self, sql: str, cause: BaseException) -> None:
        self.sql = sql
        self.cause = cause
        super().__init__(f"Failed to execute SQL: {cause}")


class MetadataError(SQLHubError):
    """Raised when a catalog query fails."""

    pass


class SessionBusyError(SQLHubError):
    """Raised when an operation overlaps another one on the same session."""

    pass


class SessionNotFoundError(SQLHubError, KeyError):
    """Raised when no connection context is registered for a session key."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Session not found"
