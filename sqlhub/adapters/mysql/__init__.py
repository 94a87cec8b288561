"""
MySQL and MariaDB adapter implementation.
"""

from .adapter import MySQLAdapter

__all__ = ["MySQLAdapter"]
