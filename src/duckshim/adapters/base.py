"""
Adapter protocol definitions for duckshim.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from ..dialects.base import Dialect
from ..errors import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    DatabaseError,
    UniqueConstraintError,
    UnsupportedOperationError,
)

__all__ = [
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "ConnectionConfig",
    "DatabaseAdapter",
    "ExecutionMetadata",
    "ExecutionResult",
    "DatabaseError",
    "UniqueConstraintError",
    "UnsupportedOperationError",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.

    DuckDB opens a database file (or ``:memory:``); connection URLs are not
    accepted.
    """

    database: str = ":memory:"
    read_only: bool = False
    autocommit: bool = True
    config: dict[str, Any] | None = None
    source: str | None = None

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "ConnectionConfig":
        raise UnsupportedOperationError(
            'The "url" option is not supported in DuckDB. Use the "database" option instead.'
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable holding a database path.
        ``<env_var>_READ_ONLY`` toggles read-only mode when set.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        read_only_raw = os.getenv(f"{env_var}_READ_ONLY")
        if read_only_raw is not None and "read_only" not in kwargs:
            kwargs["read_only"] = _parse_bool(read_only_raw, key=f"{env_var}_READ_ONLY")
        return cls(database=value, source=env_var, **kwargs)

    @property
    def in_memory(self) -> bool:
        return self.database in ("", ":memory:") or self.database.startswith(":memory:")

    def descriptive_label(self) -> str:
        """
        Describe the config source for diagnostics.
        """

        if self.source:
            return f"{self.source} ({self.database})"
        return self.database


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing database operations used by higher layers.
    """

    dialect: Dialect
    slow_query_ms: int

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning an :class:`ExecutionResult`.
        """

    def begin(self) -> None:
        """
        Start a transaction.
        """

    def commit(self) -> None:
        """
        Commit the current transaction.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction.
        """


@dataclass
class ExecutionMetadata:
    """
    Side information reported for an executed statement.

    Rows are always passed through untouched. ``changes`` is filled in by
    the result translator for statement kinds that report a row count; it
    stays ``None`` otherwise and is never estimated.
    """

    last_id: Any = None
    changes: int | None = None
    columns: tuple[str, ...] = ()


@dataclass
class ExecutionResult:
    rows: list[dict[str, Any]]
    metadata: ExecutionMetadata
