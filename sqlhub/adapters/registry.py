"""
Adapter registry for managing database adapters.

This module provides the lookup table that selects a dialect policy by
engine type. Adapters register themselves when their subpackage is imported.
"""

import logging

from sqlhub.exceptions import InputError

from .base import DatabaseAdapter, EngineType
from .base.core import sqlglot_dialect_exists


class AdapterRegistry:
    """Registry for managing database adapters."""

    def __init__(self) -> None:
        self._adapters: dict[EngineType, type[DatabaseAdapter]] = {}
        self._instances: dict[EngineType, DatabaseAdapter] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def register(self, engine: EngineType | str, adapter_class: type[DatabaseAdapter]) -> None:
        """
        Register a database adapter.

        Args:
            engine: Engine type or its name (e.g., 'mysql', 'postgresql')
            adapter_class: Adapter class that implements DatabaseAdapter
        """
        engine = EngineType.parse(engine)
        if not sqlglot_dialect_exists(adapter_class.DIALECT):
            self.logger.warning(
                f"Adapter {adapter_class.__name__} declares unknown sqlglot dialect: "
                f"{adapter_class.DIALECT}"
            )
        self._adapters[engine] = adapter_class
        self._instances.pop(engine, None)
        self.logger.debug(f"Registered adapter: {engine.value} -> {adapter_class.__name__}")

    def get_adapter_class(self, engine: EngineType | str) -> type[DatabaseAdapter] | None:
        """Get adapter class for an engine type, or None if not registered."""
        return self._adapters.get(EngineType.parse(engine))

    def get_adapter(self, engine: EngineType | str) -> DatabaseAdapter:
        """
        Get the adapter for an engine type.

        Adapters are stateless, so one instance per engine is shared.

        Raises:
            InputError: If the engine has no registered adapter
        """
        engine = EngineType.parse(engine)
        if engine not in self._instances:
            adapter_class = self._adapters.get(engine)
            if adapter_class is None:
                supported_types = sorted(e.value for e in self._adapters)
                raise InputError(
                    f"Unsupported database type: {engine.value}. "
                    f"Supported types: {supported_types}"
                )
            self._instances[engine] = adapter_class()
        return self._instances[engine]

    def list_adapters(self) -> list[str]:
        """Get list of registered adapter types."""
        return [engine.value for engine in self._adapters]

    def is_supported(self, engine: str) -> bool:
        """Check if an adapter type is supported."""
        try:
            return EngineType.parse(engine) in self._adapters
        except InputError:
            return False


# Global registry instance
_registry = AdapterRegistry()


def register_adapter(engine: EngineType | str, adapter_class: type[DatabaseAdapter]) -> None:
    """Register an adapter with the global registry."""
    _registry.register(engine, adapter_class)


def get_adapter(engine: EngineType | str) -> DatabaseAdapter:
    """Get the adapter (dialect policy) for an engine type."""
    return _registry.get_adapter(engine)


def list_available_adapters() -> list[str]:
    """Get list of available adapter types."""
    return _registry.list_adapters()


def is_adapter_supported(engine: str) -> bool:
    """Check if an adapter type is supported."""
    return _registry.is_supported(engine)
