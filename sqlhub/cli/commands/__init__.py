"""
CLI command implementations.
"""

from sqlhub.cli.commands.catalog import CATALOG_KINDS, cmd_catalog
from sqlhub.cli.commands.debug import cmd_debug
from sqlhub.cli.commands.query import cmd_query

__all__ = ["cmd_debug", "cmd_query", "cmd_catalog", "CATALOG_KINDS"]
