"""
SQLite adapter implementation.
"""

from .adapter import SQLiteAdapter

__all__ = ["SQLiteAdapter"]
