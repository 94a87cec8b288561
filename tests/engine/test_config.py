"""
Tests for connection configuration loading.
"""

import logging

import pytest

from sqlhub.adapters.base import EngineType
from sqlhub.engine.config import ENV_MAPPINGS, DatabaseConfigManager, load_connect_info
from sqlhub.exceptions import InputError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no SQLHUB_DB_* variable leaks in from the environment."""
    for env_var in ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)


class TestDatabaseConfigManager:
    """Test loading descriptors from TOML and environment variables."""

    def test_pyproject_single_database(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.sqlhub.database]\ntype = "postgres"\nhost = "db.local"\n'
            'port = 5433\nuser = "app"\ndatabase = "sales"\n'
        )

        info = load_connect_info(project_root=tmp_path)

        assert info.engine is EngineType.POSTGRESQL
        assert info.host == "db.local"
        assert info.port == 5433
        assert info.database == "sales"

    def test_pyproject_named_databases(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.sqlhub.databases.default]\ntype = "sqlite"\npath = "local.db"\n\n'
            '[tool.sqlhub.databases.warehouse]\ntype = "duckdb"\npath = "wh.duckdb"\n'
        )
        manager = DatabaseConfigManager(tmp_path)

        assert manager.load_config().engine is EngineType.SQLITE
        assert manager.load_config("warehouse").path == "wh.duckdb"

    def test_project_toml_connection_section(self, tmp_path):
        (tmp_path / "project.toml").write_text(
            '[connection]\ntype = "mysql"\nhost = "localhost"\nuser = "root"\n'
            "[connection.extra]\nssl_disabled = true\n"
        )

        info = load_connect_info(project_root=tmp_path)

        assert info.engine is EngineType.MYSQL
        assert info.extra == {"ssl_disabled": True}

    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.sqlhub.database]\ntype = "postgresql"\nhost = "db.local"\nuser = "app"\n'
        )
        monkeypatch.setenv("SQLHUB_DB_HOST", "db.prod")
        monkeypatch.setenv("SQLHUB_DB_PORT", "6543")
        monkeypatch.setenv("SQLHUB_DB_PASSWORD", "secret")

        info = load_connect_info(project_root=tmp_path)

        assert info.host == "db.prod"
        assert info.port == 6543
        assert info.password == "secret"
        assert info.user == "app"

    def test_env_only(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SQLHUB_DB_TYPE", "duckdb")
        monkeypatch.setenv("SQLHUB_DB_PATH", ":memory:")

        info = load_connect_info(project_root=tmp_path)

        assert info.engine is EngineType.DUCKDB
        assert info.path == ":memory:"

    def test_invalid_env_port(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SQLHUB_DB_TYPE", "mysql")
        monkeypatch.setenv("SQLHUB_DB_PORT", "abc")

        with pytest.raises(InputError, match="SQLHUB_DB_PORT"):
            load_connect_info(project_root=tmp_path)

    def test_missing_configuration(self, tmp_path):
        with pytest.raises(InputError, match="No database configuration"):
            load_connect_info("missing", project_root=tmp_path)

    def test_unreadable_toml_is_treated_as_absent(self, tmp_path, caplog):
        (tmp_path / "pyproject.toml").write_text("[tool.sqlhub.database\ntype = ")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(InputError):
                load_connect_info(project_root=tmp_path)

        assert "Could not read pyproject.toml" in caplog.text

    def test_invalid_values_are_rejected(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.sqlhub.database]\ntype = "mysql"\nport = 70000\n'
        )

        with pytest.raises(InputError, match="Port must be between"):
            load_connect_info(project_root=tmp_path)
