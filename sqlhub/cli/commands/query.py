"""
Query command implementation.
"""

import typer

from sqlhub.cli.context import CommandContext
from sqlhub.cli.utils import render_output
from sqlhub.engine import SQLExecutor


def cmd_query(
    sql: str,
    page_size: int | None = None,
    database: str | None = None,
    output_format: str = "json",
    config_name: str = "default",
    project_folder: str | None = None,
    verbose: bool = False,
) -> None:
    """Execute SQL and print the first page of its result."""
    ctx = CommandContext(config_name=config_name, project_folder=project_folder, verbose=verbose)

    try:
        if database:
            ctx.connection.switch_database(database)

        result = SQLExecutor(ctx.connection).execute(sql, page_size)
        typer.echo(render_output(result.to_dict(), output_format))

    except Exception as e:
        ctx.handle_error(e)
    finally:
        ctx.close()
