"""
sqlhub CLI Main Module

Command-line interface for running SQL and browsing catalogs of any
supported database engine.
"""

from typing import Literal

import typer

from sqlhub.cli.commands import CATALOG_KINDS, cmd_catalog, cmd_debug, cmd_query
from sqlhub.cli.utils import OUTPUT_FORMATS

OutputFormat = Literal["json", "yaml"]


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


def validate_format(value: str) -> OutputFormat:
    """Validate format option (json or yaml)."""
    if value not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid format '{value}'. Must be 'json' or 'yaml'."
        )
    return value  # type: ignore[return-value]


def validate_catalog_kind(value: str) -> str:
    """Validate catalog kind argument."""
    kind = value.lower()
    if kind not in CATALOG_KINDS:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Unknown catalog kind '{value}'. "
            f"Supported: {', '.join(CATALOG_KINDS)}"
        )
    return kind


app = typer.Typer(
    name="sqlhub",
    help="sqlhub - one interface to run SQL and browse catalogs across database engines",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# Common option definitions to reduce duplication
CONFIG_OPTION = typer.Option(
    "default", "--config", help="Name of the connection configuration to use"
)
PROJECT_OPTION = typer.Option(
    None, "--project", help="Folder holding pyproject.toml or project.toml (default: cwd)"
)
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")
DATABASE_OPTION = typer.Option(None, "--database", help="Database (catalog) to work in")
FORMAT_OPTION = typer.Option(
    "json", "--format", callback=validate_format, help="Output format: json or yaml"
)


@app.command()
def debug(
    config: str = CONFIG_OPTION,
    project: str | None = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Test database connectivity and show the engine's capabilities."""
    cmd_debug(config_name=config, project_folder=project, verbose=verbose)


@app.command()
def query(
    sql: str = typer.Argument(..., help="SQL text to execute"),
    page_size: int | None = typer.Option(
        None, "--page-size", min=1, help="Maximum number of rows to return (default 1000)"
    ),
    database: str | None = DATABASE_OPTION,
    output_format: str = FORMAT_OPTION,
    config: str = CONFIG_OPTION,
    project: str | None = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Execute SQL and print the first page of the result."""
    cmd_query(
        sql=sql,
        page_size=page_size,
        database=database,
        output_format=output_format,
        config_name=config,
        project_folder=project,
        verbose=verbose,
    )


@app.command()
def catalog(
    kind: str = typer.Argument(
        ..., callback=validate_catalog_kind, help=f"One of: {', '.join(CATALOG_KINDS)}"
    ),
    database: str | None = DATABASE_OPTION,
    schema: str | None = typer.Option(None, "--schema", help="Schema name or LIKE pattern"),
    table: str | None = typer.Option(None, "--table", help="Table name (required for indexes)"),
    pattern: str | None = typer.Option(
        None, "--pattern", help="LIKE pattern for the listed object names"
    ),
    output_format: str = FORMAT_OPTION,
    config: str = CONFIG_OPTION,
    project: str | None = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List databases, schemas, tables, columns, indexes, functions or procedures."""
    cmd_catalog(
        kind=kind,
        database=database,
        schema=schema,
        table=table,
        pattern=pattern,
        output_format=output_format,
        config_name=config,
        project_folder=project,
        verbose=verbose,
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
