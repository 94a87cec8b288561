"""
Tests for the SQL execution engine.
"""

import pytest

from sqlhub.engine import ConnectionContext, SQLExecutor
from sqlhub.engine.cells import Cell, CellType
from sqlhub.engine.executor import normalize_sql
from sqlhub.exceptions import (
    DatabaseConnectionError,
    ExecutionError,
    InputError,
    SessionBusyError,
)
from tests.fakes import FakeResult


def _rows(count):
    return [(i, f"name-{i}") for i in range(1, count + 1)]


class TestNormalizeSQL:
    """Test SQL text validation."""

    @pytest.mark.parametrize("sql", [None, "", "   ", "\n\t", ";", "  ;  "])
    def test_blank_sql_is_rejected(self, sql):
        with pytest.raises(InputError):
            normalize_sql(sql)

    def test_strips_one_trailing_terminator(self):
        assert normalize_sql("SELECT 1;") == "SELECT 1"
        assert normalize_sql("SELECT 1 ;  \n") == "SELECT 1"

    def test_strips_only_one_terminator(self):
        assert normalize_sql("SELECT 1;;") == "SELECT 1;"

    def test_inner_semicolons_are_kept(self):
        assert normalize_sql("SELECT ';' AS sep") == "SELECT ';' AS sep"


class TestSQLExecutorRows:
    """Test row-producing statements against the fake driver."""

    def test_header_and_rows(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id", "name"], rows=_rows(2)))

        result = SQLExecutor(fake_context).execute("SELECT id, name FROM users;")

        assert result.success is True
        assert result.description == "Query succeeded"
        assert result.header == (Cell.string("id"), Cell.string("name"))
        assert result.rows[0] == (Cell(CellType.NUMBER, 1), Cell.string("name-1"))
        assert result.update_count is None
        assert result.has_next_page is False
        assert all(len(row) == len(result.header) for row in result.rows)

    def test_result_keeps_the_callers_sql(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id"], rows=[(1,)]))

        result = SQLExecutor(fake_context).execute("SELECT id FROM users;")

        assert result.sql == "SELECT id FROM users;"
        assert fake_adapter.connections[0].executed == [("SELECT id FROM users", None)]

    def test_exact_page_has_no_next_page(self, fake_context, fake_adapter):
        """N rows with page size N: all rows, no next page."""
        fake_adapter.respond(FakeResult(columns=["id", "name"], rows=_rows(3)))

        result = SQLExecutor(fake_context).execute("SELECT * FROM t", page_size=3)

        assert result.row_count == 3
        assert result.has_next_page is False

    def test_one_extra_row_sets_next_page(self, fake_context, fake_adapter):
        """N+1 rows with page size N: N rows and a next page."""
        fake_adapter.respond(FakeResult(columns=["id", "name"], rows=_rows(4)))

        result = SQLExecutor(fake_context).execute("SELECT * FROM t", page_size=3)

        assert result.row_count == 3
        assert result.has_next_page is True

    def test_reads_exactly_one_row_past_the_page(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id", "name"], rows=_rows(50)))

        SQLExecutor(fake_context).execute("SELECT * FROM t", page_size=10)

        cursor = fake_adapter.cursors[-1]
        assert cursor.fetch_calls == 11
        assert len(cursor._rows) == 39

    def test_short_result_has_no_next_page(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id", "name"], rows=_rows(2)))

        result = SQLExecutor(fake_context).execute("SELECT * FROM t", page_size=10)

        assert result.row_count == 2
        assert result.has_next_page is False

    def test_empty_result_keeps_header(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id"], rows=[]))

        result = SQLExecutor(fake_context).execute("SELECT id FROM t WHERE 1 = 0")

        assert result.header == (Cell.string("id"),)
        assert result.rows == ()

    def test_default_page_size(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id"], rows=[(i,) for i in range(1001)]))

        result = SQLExecutor(fake_context).execute("SELECT id FROM t")

        assert result.row_count == SQLExecutor.DEFAULT_PAGE_SIZE == 1000
        assert result.has_next_page is True

    def test_cursor_is_closed(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(columns=["id"], rows=[(1,)]))

        SQLExecutor(fake_context).execute("SELECT 1")

        assert fake_adapter.cursors[-1].closed is True

    def test_handle_is_reused(self, fake_context, fake_adapter):
        executor = SQLExecutor(fake_context)
        executor.execute("SELECT 1")
        executor.execute("SELECT 2")

        assert len(fake_adapter.connections) == 1
        assert [sql for sql, _ in fake_adapter.connections[0].executed] == ["SELECT 1", "SELECT 2"]


class TestSQLExecutorMutations:
    """Test statements that do not produce rows."""

    def test_update_count(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(rowcount=3))

        result = SQLExecutor(fake_context).execute("UPDATE t SET x = 1")

        assert result.update_count == 3
        assert result.description == "3 row(s) affected"
        assert result.header == ()
        assert result.rows == ()
        assert result.has_next_page is False

    def test_unknown_count_is_passed_through(self, fake_context, fake_adapter):
        fake_adapter.respond(FakeResult(rowcount=-1))

        result = SQLExecutor(fake_context).execute("CREATE TABLE t (id INT)")

        assert result.update_count == -1
        assert result.description == "Statement succeeded"

    def test_execute_statement(self, fake_context, fake_adapter):
        assert SQLExecutor(fake_context).execute_statement("SET NAMES utf8mb4;") is None
        assert fake_adapter.connections[0].executed == [("SET NAMES utf8mb4", None)]
        assert fake_adapter.cursors[-1].closed is True


class TestSQLExecutorErrors:
    """Test validation and error handling."""

    @pytest.mark.parametrize("sql", [None, "", "   "])
    def test_blank_sql_never_opens_a_handle(self, fake_context, fake_adapter, sql):
        with pytest.raises(InputError):
            SQLExecutor(fake_context).execute(sql)

        assert fake_adapter.connections == []
        assert fake_context.is_open is False

    @pytest.mark.parametrize("page_size", [0, -5, 2.5, "10", True])
    def test_invalid_page_size(self, fake_context, fake_adapter, page_size):
        with pytest.raises(InputError):
            SQLExecutor(fake_context).execute("SELECT 1", page_size=page_size)

        assert fake_adapter.connections == []

    def test_driver_error_is_wrapped(self, fake_context, fake_adapter):
        cause = RuntimeError("syntax error at or near FROMM")
        fake_adapter.respond(cause)

        with pytest.raises(ExecutionError) as exc_info:
            SQLExecutor(fake_context).execute("SELECT * FROMM t")

        assert exc_info.value.sql == "SELECT * FROMM t"
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert "syntax error" in str(exc_info.value)

    def test_error_keeps_the_callers_sql(self, fake_context, fake_adapter):
        fake_adapter.respond(RuntimeError("syntax error"))

        with pytest.raises(ExecutionError) as exc_info:
            SQLExecutor(fake_context).execute("SELECT * FROMM t;  ")

        assert exc_info.value.sql == "SELECT * FROMM t;  "

    def test_cursor_is_closed_on_error(self, fake_context, fake_adapter):
        fake_adapter.respond(RuntimeError("boom"))

        with pytest.raises(ExecutionError):
            SQLExecutor(fake_context).execute("SELECT 1")

        assert fake_adapter.cursors[-1].closed is True

    def test_handle_survives_execution_error(self, fake_context, fake_adapter):
        fake_adapter.respond(RuntimeError("boom"))

        with pytest.raises(ExecutionError):
            SQLExecutor(fake_context).execute("SELECT 1")

        assert fake_context.is_open is True

    def test_connect_failure_is_not_an_execution_error(self, fake_context, fake_adapter):
        fake_adapter.connect_error = OSError("connection refused")

        with pytest.raises(DatabaseConnectionError):
            SQLExecutor(fake_context).execute("SELECT 1")

    def test_busy_context_is_rejected(self, fake_context):
        with fake_context.operation():
            with pytest.raises(SessionBusyError):
                SQLExecutor(fake_context).execute("SELECT 1")

    def test_busy_guard_is_released_after_error(self, fake_context, fake_adapter):
        fake_adapter.respond(RuntimeError("boom"), FakeResult(columns=["x"], rows=[(1,)]))
        executor = SQLExecutor(fake_context)

        with pytest.raises(ExecutionError):
            executor.execute("SELECT 1")

        assert executor.execute("SELECT 1").row_count == 1


class TestSQLExecutorSQLite:
    """Run statements against a real SQLite database."""

    def test_select(self, sqlite_context):
        result = SQLExecutor(sqlite_context).execute(
            "SELECT id, name, email FROM users ORDER BY id"
        )

        assert [cell.value for cell in result.header] == ["id", "name", "email"]
        assert [row[1].value for row in result.rows] == ["alice", "bob", "carol"]
        assert result.rows[0][0].type is CellType.NUMBER

    def test_pagination(self, sqlite_context):
        executor = SQLExecutor(sqlite_context)

        exact = executor.execute("SELECT * FROM users", page_size=3)
        short = executor.execute("SELECT * FROM users", page_size=2)

        assert (exact.row_count, exact.has_next_page) == (3, False)
        assert (short.row_count, short.has_next_page) == (2, True)

    def test_mutation_is_visible_without_commit(self, sqlite_context, temp_db_path):
        result = SQLExecutor(sqlite_context).execute("UPDATE users SET balance = 1;")

        assert result.update_count == 3
        assert result.rows == ()

        # A second, independent handle sees the change
        other = ConnectionContext(sqlite_context.info)
        try:
            check = SQLExecutor(other).execute("SELECT COUNT(*) FROM users WHERE balance = 1")
            assert check.rows[0][0].value == 3
        finally:
            other.close()

    def test_null_and_binary_values(self, sqlite_context):
        result = SQLExecutor(sqlite_context).execute("SELECT NULL AS n, X'CAFE' AS b")

        assert result.rows[0][0] == Cell.null()
        assert result.rows[0][1] == Cell(CellType.BINARY, b"\xca\xfe")

    def test_error(self, sqlite_context):
        with pytest.raises(ExecutionError) as exc_info:
            SQLExecutor(sqlite_context).execute("SELECT * FROM missing_table")

        assert "missing_table" in str(exc_info.value)


class TestSQLExecutorDuckDB:
    """Run statements against an in-memory DuckDB database."""

    def test_select(self, duckdb_context):
        result = SQLExecutor(duckdb_context).execute(
            "SELECT id, customer, amount, placed_at FROM orders ORDER BY id"
        )

        assert [cell.value for cell in result.header] == ["id", "customer", "amount", "placed_at"]
        first = result.rows[0]
        assert first[1] == Cell.string("acme")
        assert first[2].type is CellType.NUMBER
        assert first[3].type is CellType.DATETIME

    def test_insert_reports_update_count(self, duckdb_context):
        result = SQLExecutor(duckdb_context).execute(
            "INSERT INTO orders VALUES (3, 'initech', 10.00, NULL), (4, 'hooli', 20.00, NULL)"
        )

        assert result.update_count == 2
        assert result.header == ()
        assert result.rows == ()

    def test_delete_reports_update_count(self, duckdb_context):
        result = SQLExecutor(duckdb_context).execute("DELETE FROM orders WHERE id = 1")

        assert result.update_count == 1
        assert result.description == "1 row(s) affected"

    def test_insert_returning_pages_rows(self, duckdb_context):
        result = SQLExecutor(duckdb_context).execute(
            "INSERT INTO orders VALUES (42, 'initech', 10.00, NULL), (43, 'hooli', 20.00, NULL) "
            "RETURNING id, customer"
        )

        assert result.update_count is None
        assert [cell.value for cell in result.header] == ["id", "customer"]
        assert sorted(row[0].value for row in result.rows) == [42, 43]
        assert result.description == "Query succeeded"

    def test_pagination(self, duckdb_context):
        result = SQLExecutor(duckdb_context).execute("SELECT * FROM range(10)", page_size=4)

        assert result.row_count == 4
        assert result.has_next_page is True
