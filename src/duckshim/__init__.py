"""
duckshim public package initialization.

DuckDB dialect layer: sequence-backed auto-increment DDL, statement
execution with sequence cleanup, and result/error translation.
"""

from .adapters import ConnectionConfig, DuckDBAdapter  # noqa: F401
from .core.fields import (
    AutoField,
    BigIntegerField,
    BooleanField,
    DateField,
    DateTimeField,
    EnumField,
    FloatField,
    IntegerField,
    StringField,
)  # noqa: F401
from .core.model import Model, ModelConfigurationError  # noqa: F401
from .dialects import DuckDBDialect, DuckDBOptions, TableName  # noqa: F401
from .errors import (
    AdapterError,
    DatabaseError,
    UniqueConstraintError,
    UnsupportedOperationError,
)  # noqa: F401
from .query import QueryExecutor, QueryRequest, QueryType  # noqa: F401
from .schema import ColumnDescriptor, GeneratedStatement, SchemaBuilder  # noqa: F401

__all__ = [
    "AdapterError",
    "AutoField",
    "BigIntegerField",
    "BooleanField",
    "ColumnDescriptor",
    "ConnectionConfig",
    "DatabaseError",
    "DateField",
    "DateTimeField",
    "DuckDBAdapter",
    "DuckDBDialect",
    "DuckDBOptions",
    "EnumField",
    "FloatField",
    "GeneratedStatement",
    "IntegerField",
    "Model",
    "ModelConfigurationError",
    "QueryExecutor",
    "QueryRequest",
    "QueryType",
    "SchemaBuilder",
    "StringField",
    "TableName",
    "UniqueConstraintError",
    "UnsupportedOperationError",
]
