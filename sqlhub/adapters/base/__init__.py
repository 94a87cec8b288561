"""
Base adapter classes and configuration.

This module provides the core DatabaseAdapter class and related types.
"""

from .catalog import CatalogFilter, CatalogQuery
from .config import CatalogFeature, ConnectInfo, EngineType, SwitchMode
from .core import DatabaseAdapter

__all__ = [
    "DatabaseAdapter",
    "ConnectInfo",
    "EngineType",
    "SwitchMode",
    "CatalogFeature",
    "CatalogQuery",
    "CatalogFilter",
]
