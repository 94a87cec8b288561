"""
Debug command implementation.
"""

import typer

from sqlhub.cli.context import CommandContext


def cmd_debug(
    config_name: str = "default",
    project_folder: str | None = None,
    verbose: bool = False,
) -> None:
    """Execute the debug command to test database connectivity."""
    ctx = CommandContext(config_name=config_name, project_folder=project_folder, verbose=verbose)

    try:
        info = ctx.load_info()
        typer.echo(f"Testing database connectivity for: {info.describe()}")

        typer.echo("\n" + "=" * 50)
        typer.echo("DATABASE CONNECTION TEST")
        typer.echo("=" * 50)

        ctx.connection.get_connection()
        typer.echo("✅ Database connection successful!")

        adapter_info = ctx.connection.adapter.get_adapter_info()
        features = adapter_info.pop("catalog_features")

        typer.echo("\nDatabase Information:")
        for key, value in adapter_info.items():
            typer.echo(f"  {key}: {value}")

        typer.echo("\nSupported Catalog Lookups:")
        for feature in features:
            typer.echo(f"  - {feature}")

        typer.echo("\n✅ All connectivity tests passed!")

    except Exception as e:
        ctx.handle_error(e)
    finally:
        ctx.close()
