"""
SQL execution engine.

Runs arbitrary SQL text against a session's handle and returns one page of
normalized rows. Exactly one extra row is read past the page to tell whether
more rows exist; no count query is ever issued.
"""

import logging
from typing import TYPE_CHECKING, Any

from sqlhub.exceptions import (
    DatabaseConnectionError,
    ExecutionError,
    InputError,
    SessionBusyError,
)

from .cells import Cell, to_cell
from .results import ExecuteResult

if TYPE_CHECKING:
    from .context import ConnectionContext

_LOG_SQL_LIMIT = 200

QUERY_SUCCEEDED = "Query succeeded"
STATEMENT_SUCCEEDED = "Statement succeeded"


def normalize_sql(sql: str | None) -> str:
    """
    Validate SQL text and drop at most one trailing statement terminator.

    Raises:
        InputError: If the text is None or blank
    """
    if sql is None or not sql.strip():
        raise InputError("SQL text is required")

    sql = sql.rstrip()
    if sql.endswith(";"):
        sql = sql[:-1].rstrip()
    if not sql:
        raise InputError("SQL text is required")
    return sql


def _truncate(sql: str) -> str:
    if len(sql) <= _LOG_SQL_LIMIT:
        return sql
    return sql[:_LOG_SQL_LIMIT] + "..."


def _affected(update_count: int) -> str:
    # Drivers report -1 when the count is unknown
    if update_count < 0:
        return STATEMENT_SUCCEEDED
    return f"{update_count} row(s) affected"


class SQLExecutor:
    """Executes SQL on a ConnectionContext."""

    DEFAULT_PAGE_SIZE = 1000

    def __init__(self, context: "ConnectionContext") -> None:
        self.context = context
        self.logger = logging.getLogger(self.__class__.__name__)

    def execute(self, sql: str | None, page_size: int | None = None) -> ExecuteResult:
        """
        Execute SQL and return the first page of its result.

        Args:
            sql: SQL text; one trailing ``;`` is tolerated
            page_size: Maximum number of rows to return (default 1000)

        Returns:
            ExecuteResult with either rows or an update count

        Raises:
            InputError: If the SQL is blank or the page size is invalid
            SessionBusyError: If the session is running another operation
            DatabaseConnectionError: If no handle can be opened
            ExecutionError: If the engine rejects the statement
        """
        statement = normalize_sql(sql)
        page_size = self._check_page_size(page_size)

        with self.context.operation():
            return self._run(sql, statement, page_size)

    def execute_statement(self, sql: str | None) -> None:
        """Execute SQL for its side effect only."""
        statement = normalize_sql(sql)

        with self.context.operation():
            self._run(sql, statement, page_size=0)

    def _check_page_size(self, page_size: Any) -> int:
        if page_size is None:
            return self.DEFAULT_PAGE_SIZE
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise InputError(f"Page size must be a positive integer, got {page_size!r}")
        return page_size

    def _run(self, sql: str, statement: str, page_size: int) -> ExecuteResult:
        """Run the normalized statement; results and errors carry the caller's SQL."""
        self.logger.info(f"Executing SQL: {_truncate(statement)}")
        cursor = None
        try:
            cursor = self.context.get_connection().cursor()
            cursor.execute(statement)

            update_count = self.context.adapter.update_count(cursor, statement)
            if update_count is not None:
                self.logger.debug(f"Statement affected {update_count} rows")
                return ExecuteResult(
                    sql=sql, description=_affected(update_count), update_count=update_count
                )

            if page_size == 0:
                return ExecuteResult(sql=sql, description=STATEMENT_SUCCEEDED)

            header = tuple(Cell.string(column[0]) for column in cursor.description)
            rows = []
            while len(rows) < page_size:
                row = cursor.fetchone()
                if row is None:
                    break
                rows.append(tuple(to_cell(value) for value in row))

            # Look one row ahead; the row itself is discarded
            has_next_page = len(rows) == page_size and cursor.fetchone() is not None

            self.logger.debug(f"Fetched {len(rows)} rows (more: {has_next_page})")
            return ExecuteResult(
                sql=sql,
                description=QUERY_SUCCEEDED,
                header=header,
                rows=tuple(rows),
                has_next_page=has_next_page,
            )

        except (DatabaseConnectionError, SessionBusyError, InputError):
            raise
        except Exception as e:
            self.logger.error(f"Failed to execute SQL: {e}")
            raise ExecutionError(sql, e) from e
        finally:
            if cursor is not None:
                self._close_cursor(cursor)

    def _close_cursor(self, cursor: Any) -> None:
        try:
            cursor.close()
        except Exception as e:
            self.logger.warning(f"Error closing cursor: {e}")
