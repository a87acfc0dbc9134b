"""
Statement execution and result translation.
"""

from .executor import SEQUENCE_LOOKUP_SQL, QueryExecutor, dropped_table, referenced_sequence
from .request import QueryRequest, QueryType
from .translator import ColumnDescription, ResultTranslator, is_describe_query

__all__ = [
    "ColumnDescription",
    "QueryExecutor",
    "QueryRequest",
    "QueryType",
    "ResultTranslator",
    "SEQUENCE_LOOKUP_SQL",
    "dropped_table",
    "is_describe_query",
    "referenced_sequence",
]
