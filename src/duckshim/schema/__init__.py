"""
DDL generation for DuckDB.
"""

from .builder import AUTOINCREMENT_MARKER, ColumnDescriptor, GeneratedStatement, SchemaBuilder

__all__ = ["AUTOINCREMENT_MARKER", "ColumnDescriptor", "GeneratedStatement", "SchemaBuilder"]
