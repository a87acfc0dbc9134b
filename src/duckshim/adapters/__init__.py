"""
Database adapter interfaces and implementations.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
    DatabaseError,
    ExecutionMetadata,
    ExecutionResult,
    UniqueConstraintError,
    UnsupportedOperationError,
)
from .duckdb import DuckDBAdapter

__all__ = [
    "ConnectionConfig",
    "DatabaseAdapter",
    "ExecutionMetadata",
    "ExecutionResult",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "DatabaseError",
    "UniqueConstraintError",
    "UnsupportedOperationError",
    "DuckDBAdapter",
]
