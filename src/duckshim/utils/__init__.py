"""
Utility helpers shared across duckshim packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import camel_to_snake, sequence_name, sequence_prefix
from .performance import resolve_slow_query_ms

__all__ = [
    "camel_to_snake",
    "configure_logging",
    "get_logger",
    "resolve_slow_query_ms",
    "sequence_name",
    "sequence_prefix",
    "time_call",
]
