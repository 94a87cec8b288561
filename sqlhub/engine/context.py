"""
Per-session connection context.

A ConnectionContext owns the connection descriptor of one session and at most
one live native handle. The handle is opened lazily on first use, reused by
every later operation, and reopened transparently after close().
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from sqlhub.adapters import get_adapter
from sqlhub.adapters.base import ConnectInfo, DatabaseAdapter, SwitchMode
from sqlhub.exceptions import (
    DatabaseConnectionError,
    ExecutionError,
    InputError,
    SessionBusyError,
)


class ConnectionContext:
    """Connection descriptor plus the lazily opened handle of one session."""

    def __init__(self, info: ConnectInfo, adapter: DatabaseAdapter | None = None) -> None:
        self._info = info
        self.adapter = adapter or get_adapter(info.engine)
        self._handle: Any = None
        self._guard = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def info(self) -> ConnectInfo:
        return self._info

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def get_connection(self) -> Any:
        """
        Return the live handle, opening one when absent.

        Raises:
            DatabaseConnectionError: If the adapter cannot open a handle
        """
        if self._handle is None:
            try:
                self._handle = self.adapter.connect(self._info)
            except InputError:
                raise
            except Exception as e:
                self.logger.error(f"Failed to connect to {self._info.describe()}: {e}")
                raise DatabaseConnectionError(
                    f"Failed to connect to {self._info.describe()}: {e}"
                ) from e
        return self._handle

    def switch_database(self, name: str | None) -> None:
        """
        Make ``name`` the active database of the session.

        Engines that switch in-session run their native statement on the
        current handle. Engines that bind the database at connect time get a
        new handle. Engines without the concept ignore the call.

        Raises:
            DatabaseConnectionError: If the switch fails
        """
        if not name:
            return

        mode = self.adapter.SWITCH_MODE
        if mode is SwitchMode.IN_SESSION:
            # Imported here: the executor depends on this module
            from .executor import SQLExecutor

            statement = self.adapter.switch_statement(name)
            try:
                SQLExecutor(self).execute_statement(statement)
            except ExecutionError as e:
                self.logger.error(f"Failed to switch to database {name}: {e.cause}")
                raise DatabaseConnectionError(
                    f"Failed to switch to database {name}: {e.cause}"
                ) from e
            self._info = self._info.with_database(name)
            self.logger.info(f"Switched to database {name}")

        elif mode is SwitchMode.RECONNECT:
            with self.operation():
                self._info = self._info.with_database(name)
                self.close()
                self.get_connection()
            self.logger.info(f"Reconnected to database {name}")

        else:
            self.logger.debug(
                f"{self.adapter.ENGINE.value} has no database switching; ignoring {name}"
            )

    def close(self) -> None:
        """Release the handle. The descriptor is kept so the session can reopen."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
            self.logger.info(f"Closed connection to {self._info.describe()}")
        except Exception as e:
            self.logger.warning(f"Error closing connection to {self._info.describe()}: {e}")

    @contextmanager
    def operation(self) -> Iterator["ConnectionContext"]:
        """
        Guard one operation on this context.

        Overlapping operations on the same context are rejected rather than
        queued.

        Raises:
            SessionBusyError: If another operation is already in flight
        """
        if not self._guard.acquire(blocking=False):
            raise SessionBusyError(
                f"Another operation is in progress on {self._info.describe()}"
            )
        try:
            yield self
        finally:
            self._guard.release()

    def __enter__(self) -> "ConnectionContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"ConnectionContext({self._info.describe()}, {state})"
