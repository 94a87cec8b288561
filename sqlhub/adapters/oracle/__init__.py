"""
Oracle adapter implementation.
"""

from .adapter import OracleAdapter

__all__ = ["OracleAdapter"]
