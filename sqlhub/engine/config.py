"""
Connection configuration management.

This module loads connection descriptors from pyproject.toml (or project.toml)
and environment variables, with environment variables taking precedence.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from sqlhub.adapters.base import ConnectInfo
from sqlhub.exceptions import InputError

# Environment variable -> config key
ENV_MAPPINGS = {
    "SQLHUB_DB_TYPE": "type",
    "SQLHUB_DB_HOST": "host",
    "SQLHUB_DB_PORT": "port",
    "SQLHUB_DB_DATABASE": "database",
    "SQLHUB_DB_USER": "user",
    "SQLHUB_DB_PASSWORD": "password",
    "SQLHUB_DB_PATH": "path",
    "SQLHUB_DB_SCHEMA": "schema",
}


class DatabaseConfigManager:
    """Manages connection configurations from multiple sources."""

    def __init__(self, project_root: str | Path | None = None) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_config(self, config_name: str = "default") -> ConnectInfo:
        """
        Load a connection descriptor from TOML and environment variables.

        Args:
            config_name: Name of the configuration under [tool.sqlhub.databases]

        Returns:
            Validated ConnectInfo

        Raises:
            InputError: If configuration is invalid or missing
        """
        toml_config = self._load_toml_config(config_name)
        env_config = self._load_env_config()

        merged = {**toml_config, **env_config}
        if not merged:
            raise InputError(f"No database configuration '{config_name}' found")

        return ConnectInfo.from_dict(merged)

    def _load_toml_config(self, config_name: str) -> dict[str, Any]:
        """Load configuration from pyproject.toml or project.toml."""
        toml_file = self.project_root / "pyproject.toml"
        if not toml_file.exists():
            toml_file = self.project_root / "project.toml"
            if not toml_file.exists():
                self.logger.debug("No pyproject.toml or project.toml found")
                return {}

        try:
            with open(toml_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            self.logger.warning(f"Could not read {toml_file.name}: {e}")
            return {}

        sqlhub_config = data.get("tool", {}).get("sqlhub", {})

        # Named configurations win over the single [tool.sqlhub.database] table
        databases = sqlhub_config.get("databases", {})
        if isinstance(databases, dict) and config_name in databases:
            return dict(databases[config_name])

        if "database" in sqlhub_config:
            return dict(sqlhub_config["database"])

        if "connection" in data:
            self.logger.debug(f"Using [connection] section of {toml_file.name}")
            return dict(data["connection"])

        self.logger.debug(f"No database configuration '{config_name}' found in {toml_file.name}")
        return {}

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for env_var, config_key in ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            if config_key == "port":
                if not value.isdigit():
                    raise InputError(f"{env_var} must be an integer, got {value!r}")
                env_config[config_key] = int(value)
            else:
                env_config[config_key] = value

        return env_config


def load_connect_info(
    config_name: str = "default", project_root: str | Path | None = None
) -> ConnectInfo:
    """
    Convenience function to load a connection descriptor.

    Args:
        config_name: Name of the configuration to load
        project_root: Project root directory (defaults to current directory)

    Returns:
        ConnectInfo
    """
    manager = DatabaseConfigManager(project_root)
    return manager.load_config(config_name)
