"""
SQL Server adapter implementation.
"""

from .adapter import SQLServerAdapter

__all__ = ["SQLServerAdapter"]
