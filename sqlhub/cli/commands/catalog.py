"""
Catalog command implementation.
"""

from typing import Any

import typer

from sqlhub.cli.context import CommandContext
from sqlhub.cli.utils import render_output
from sqlhub.engine import MetadataIntrospector

CATALOG_KINDS = ("databases", "schemas", "tables", "columns", "indexes", "functions", "procedures")


def _list(
    introspector: MetadataIntrospector,
    kind: str,
    database: str | None,
    schema: str | None,
    table: str | None,
    pattern: str | None,
) -> list[Any]:
    if kind == "databases":
        return introspector.list_databases()
    if kind == "schemas":
        return introspector.list_schemas(database, pattern)
    if kind == "tables":
        return introspector.list_tables(database, schema, pattern or table)
    if kind == "columns":
        return introspector.list_columns(database, schema, table, pattern)
    if kind == "indexes":
        return introspector.list_indexes(database, schema, table)
    if kind == "functions":
        return introspector.list_functions(database, schema)
    if kind == "procedures":
        return introspector.list_procedures(database, schema)
    raise ValueError(f"Unknown catalog kind '{kind}'. Must be one of: {', '.join(CATALOG_KINDS)}")


def cmd_catalog(
    kind: str,
    database: str | None = None,
    schema: str | None = None,
    table: str | None = None,
    pattern: str | None = None,
    output_format: str = "json",
    config_name: str = "default",
    project_folder: str | None = None,
    verbose: bool = False,
) -> None:
    """List catalog objects of the configured database."""
    ctx = CommandContext(config_name=config_name, project_folder=project_folder, verbose=verbose)

    try:
        introspector = MetadataIntrospector(ctx.connection)
        records = _list(introspector, kind, database, schema, table, pattern)
        data = [r if isinstance(r, str) else r.to_dict() for r in records]
        typer.echo(render_output(data, output_format))

    except Exception as e:
        ctx.handle_error(e)
    finally:
        ctx.close()
