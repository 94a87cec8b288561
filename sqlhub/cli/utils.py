"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import json
import logging
from typing import Any

import yaml

OUTPUT_FORMATS = ("json", "yaml")


def render_output(data: Any, output_format: str = "json") -> str:
    """
    Render command output as JSON or YAML.

    Args:
        data: JSON-safe data (dicts, lists, scalars)
        output_format: "json" or "yaml"

    Returns:
        Rendered text

    Raises:
        ValueError: If the format is not supported
    """
    if output_format == "json":
        return json.dumps(data, indent=2, default=str)
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValueError(
        f"Invalid format '{output_format}'. Must be one of: {', '.join(OUTPUT_FORMATS)}"
    )


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise WARNING
    """
    # Command output goes to stdout; keep INFO chatter for verbose runs only
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")
