"""
Session registry.

Maps caller-chosen session keys to their ConnectionContext. There is no
process-wide current connection: every caller names the session it works on.
"""

import logging
import threading

from sqlhub.adapters.base import ConnectInfo
from sqlhub.exceptions import SessionNotFoundError

from .context import ConnectionContext


class SessionRegistry:
    """Thread-safe mapping of session keys to connection contexts."""

    def __init__(self) -> None:
        self._contexts: dict[str, ConnectionContext] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def open(self, session_key: str, info: ConnectInfo) -> ConnectionContext:
        """
        Create the context for a session, replacing (and closing) any previous one.

        No handle is opened until the context is first used.
        """
        context = ConnectionContext(info)
        with self._lock:
            previous = self._contexts.get(session_key)
            self._contexts[session_key] = context

        if previous is not None:
            self.logger.info(f"Replacing session {session_key}")
            previous.close()
        else:
            self.logger.debug(f"Opened session {session_key} for {info.describe()}")
        return context

    def get(self, session_key: str) -> ConnectionContext:
        with self._lock:
            context = self._contexts.get(session_key)
        if context is None:
            raise SessionNotFoundError(f"No session registered for key: {session_key}")
        return context

    def close(self, session_key: str) -> None:
        """Close and forget a session. Unknown keys are ignored."""
        with self._lock:
            context = self._contexts.pop(session_key, None)
        if context is not None:
            context.close()
            self.logger.debug(f"Closed session {session_key}")

    def close_all(self) -> None:
        with self._lock:
            contexts = list(self._contexts.values())
            self._contexts.clear()
        for context in contexts:
            context.close()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._contexts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)

    def __contains__(self, session_key: object) -> bool:
        with self._lock:
            return session_key in self._contexts
