"""
Dialect strategy registry.
"""

from .base import Dialect, DialectCapabilities, TableName
from .duckdb import DuckDBDialect, DuckDBOptions

__all__ = ["Dialect", "DialectCapabilities", "DuckDBDialect", "DuckDBOptions", "TableName"]
