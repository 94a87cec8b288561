"""
Command context for shared setup across CLI commands.
"""

import traceback
from pathlib import Path

import typer

from sqlhub.adapters.base import ConnectInfo
from sqlhub.engine import ConnectionContext, load_connect_info

from .utils import setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Handles common setup: logging, loading the connection descriptor and
    creating the session's connection context.
    """

    def __init__(
        self,
        config_name: str = "default",
        project_folder: str | None = None,
        verbose: bool = False,
    ) -> None:
        self.verbose = verbose
        setup_logging(self.verbose)

        self.config_name = config_name
        self.project_path = Path(project_folder).resolve() if project_folder else Path.cwd()
        self._connection: ConnectionContext | None = None

    def load_info(self) -> ConnectInfo:
        return load_connect_info(self.config_name, self.project_path)

    @property
    def connection(self) -> ConnectionContext:
        """Connection context for this invocation, created on first use."""
        if self._connection is None:
            self._connection = ConnectionContext(self.load_info())
        return self._connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()

    def handle_error(self, error: Exception, show_traceback: bool | None = None) -> None:
        """
        Handle errors consistently across commands.

        Args:
            error: The exception that occurred
            show_traceback: Whether to show traceback (defaults to verbose mode)
        """
        if show_traceback is None:
            show_traceback = self.verbose

        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        if show_traceback:
            traceback.print_exc()
        raise typer.Exit(1)
