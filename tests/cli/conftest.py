"""
Shared fixtures for CLI tests.
"""

import sqlite3

import pytest
from typer.testing import CliRunner

from sqlhub.engine.config import ENV_MAPPINGS


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def sqlite_project(tmp_path):
    """Project folder whose pyproject.toml points at a small SQLite database."""
    db_path = tmp_path / "shop.db"
    connection = sqlite3.connect(db_path)
    connection.executescript(
        """
        CREATE TABLE products (id INTEGER PRIMARY KEY, name TEXT NOT NULL, price REAL);
        CREATE INDEX ix_products_name ON products (name);
        INSERT INTO products (name, price) VALUES ('pen', 1.5), ('book', 12.0), ('lamp', 30.0);
        """
    )
    connection.close()

    (tmp_path / "pyproject.toml").write_text(
        f"[tool.sqlhub.database]\ntype = \"sqlite\"\npath = '{db_path}'\n"
    )
    return tmp_path
