"""
Tests for the sqlhub command-line interface.
"""

import json

import yaml

from sqlhub.cli.main import app


class TestHelp:
    """Test help output."""

    def test_no_command_shows_help(self, runner):
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "catalog" in result.output
        assert "debug" in result.output
        assert "query" in result.output

    def test_commands_are_listed_alphabetically(self, runner):
        result = runner.invoke(app, ["--help"])

        output = result.output
        assert output.index("catalog") < output.index("debug") < output.index("query")


class TestQueryCommand:
    """Test the query command against SQLite."""

    def test_json_output(self, runner, sqlite_project):
        result = runner.invoke(
            app,
            ["query", "SELECT name FROM products ORDER BY id", "--page-size", "2",
             "--project", str(sqlite_project)],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["header"] == ["name"]
        assert [row[0]["value"] for row in data["rows"]] == ["pen", "book"]
        assert data["has_next_page"] is True

    def test_yaml_output(self, runner, sqlite_project):
        result = runner.invoke(
            app,
            ["query", "SELECT COUNT(*) AS n FROM products", "--format", "yaml",
             "--project", str(sqlite_project)],
        )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.stdout)
        assert data["rows"] == [[{"type": "number", "value": 3}]]

    def test_mutation(self, runner, sqlite_project):
        result = runner.invoke(
            app, ["query", "DELETE FROM products WHERE price > 10;", "--project", str(sqlite_project)]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["update_count"] == 2

    def test_execution_error(self, runner, sqlite_project):
        result = runner.invoke(
            app, ["query", "SELECT * FROM nowhere", "--project", str(sqlite_project)]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "nowhere" in result.output

    def test_invalid_format(self, runner, sqlite_project):
        result = runner.invoke(
            app, ["query", "SELECT 1", "--format", "xml", "--project", str(sqlite_project)]
        )

        assert result.exit_code != 0

    def test_missing_configuration(self, runner, tmp_path):
        result = runner.invoke(app, ["query", "SELECT 1", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert "No database configuration" in result.output


class TestCatalogCommand:
    """Test the catalog command against SQLite."""

    def test_tables(self, runner, sqlite_project):
        result = runner.invoke(app, ["catalog", "tables", "--project", str(sqlite_project)])

        assert result.exit_code == 0, result.output
        tables = json.loads(result.stdout)
        assert [t["name"] for t in tables] == ["products"]
        assert tables[0]["type"] == "TABLE"

    def test_columns(self, runner, sqlite_project):
        result = runner.invoke(
            app, ["catalog", "columns", "--table", "products", "--project", str(sqlite_project)]
        )

        assert result.exit_code == 0, result.output
        assert [c["name"] for c in json.loads(result.stdout)] == ["id", "name", "price"]

    def test_indexes(self, runner, sqlite_project):
        result = runner.invoke(
            app, ["catalog", "indexes", "--table", "products", "--project", str(sqlite_project)]
        )

        assert result.exit_code == 0, result.output
        indexes = json.loads(result.stdout)
        assert indexes[0]["name"] == "ix_products_name"
        assert indexes[0]["unique"] is False

    def test_indexes_require_table(self, runner, sqlite_project):
        result = runner.invoke(app, ["catalog", "indexes", "--project", str(sqlite_project)])

        assert result.exit_code == 1
        assert "Table name is required" in result.output

    def test_unsupported_lookup_is_empty(self, runner, sqlite_project):
        result = runner.invoke(app, ["catalog", "procedures", "--project", str(sqlite_project)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == []

    def test_unknown_kind(self, runner, sqlite_project):
        result = runner.invoke(app, ["catalog", "triggers", "--project", str(sqlite_project)])

        assert result.exit_code == 2


class TestDebugCommand:
    """Test the debug command."""

    def test_debug(self, runner, sqlite_project):
        result = runner.invoke(app, ["debug", "--project", str(sqlite_project)])

        assert result.exit_code == 0, result.output
        assert "Database connection successful!" in result.output
        assert "engine: sqlite" in result.output
        assert "  - indexes" in result.output

    def test_debug_connection_failure(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("SQLHUB_DB_TYPE", "sqlite")
        monkeypatch.setenv("SQLHUB_DB_PATH", str(tmp_path / "missing" / "nested" / "x.db"))

        result = runner.invoke(app, ["debug", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error:" in result.output
