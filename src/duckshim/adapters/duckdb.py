"""
DuckDB database adapter implementation.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Sequence

from ..dialects.duckdb import DuckDBDialect, DuckDBOptions
from ..utils import get_logger, time_call
from ..utils.performance import resolve_slow_query_ms
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
    DatabaseError,
    ExecutionMetadata,
    ExecutionResult,
    UniqueConstraintError,
)

DUPLICATE_KEY_MARKER = "duplicate key"
_CONSTRAINT_ERROR_NAMES = {"ConstraintException", "IntegrityError"}


def _load_driver():
    try:
        import duckdb

        return duckdb
    except ImportError:
        return None


@dataclass
class DuckDBConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class DuckDBAdapter(DatabaseAdapter):
    """
    Adapter wrapping the ``duckdb`` Python driver.

    One statement runs at a time per adapter; concurrent callers queue on an
    internal lock. Driver exceptions are translated to
    :class:`~duckshim.errors.DatabaseError` or
    :class:`~duckshim.errors.UniqueConstraintError` before they leave.
    """

    def __init__(
        self,
        dialect: DuckDBDialect | None = None,
        *,
        options: DuckDBOptions | None = None,
        slow_query_ms: int | None = None,
    ) -> None:
        self.dialect = dialect or DuckDBDialect(options)
        self._state: DuckDBConnectionState | None = None
        self._lock = threading.Lock()
        self.logger = get_logger("adapters.duckdb")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("duckdb is required to use DuckDBAdapter.")
        if config.read_only and config.in_memory:
            raise AdapterConfigurationError("An in-memory DuckDB database cannot be opened read-only.")

        self.logger.info(
            "Opening DuckDB database %s (read_only=%s)",
            config.descriptive_label(),
            config.read_only,
        )
        try:
            connection = driver.connect(
                database=config.database,
                read_only=config.read_only,
                config=dict(config.config or {}),
            )
        except Exception as exc:
            raise AdapterConnectionError(
                f"Failed to open DuckDB database {config.descriptive_label()}."
            ) from exc

        self._state = DuckDBConnectionState(connection, config, driver)
        if not config.autocommit:
            self.begin()
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    @property
    def connected(self) -> bool:
        return self._state is not None

    def _ensure_state(self) -> DuckDBConnectionState:
        if not self._state:
            raise AdapterConnectionError("DuckDBAdapter is not connected.")
        return self._state

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    def execute(self, sql: str, params: Sequence[Any] | None = None) -> ExecutionResult:
        state = self._ensure_state()
        bound = self.normalize_params(params or ())
        driver_error = getattr(state.driver, "Error", Exception)
        with self._lock:
            try:
                with time_call(
                    "duckdb.execute",
                    self.logger,
                    sql=sql,
                    params=self._redact(bound),
                    threshold_ms=self.slow_query_ms,
                ):
                    if bound:
                        state.connection.execute(sql, bound)
                    else:
                        state.connection.execute(sql)
                    columns = self._columns(state.connection)
                    raw_rows = state.connection.fetchall() if columns else []
            except driver_error as exc:
                raise self.translate_error(exc, sql=sql, params=bound) from exc

        rows = [dict(zip(columns, row)) for row in raw_rows]
        return ExecutionResult(rows=rows, metadata=ExecutionMetadata(columns=tuple(columns)))

    def normalize_params(self, params: Sequence[Any]) -> list[Any]:
        """
        Bind integers the driver cannot represent as decimal strings.
        """
        limit = self.dialect.options.max_bind_int
        normalized: list[Any] = []
        for value in params:
            if isinstance(value, int) and not isinstance(value, bool):
                if value > limit or value < -limit - 1:
                    normalized.append(str(value))
                    continue
            normalized.append(value)
        return normalized

    def translate_error(
        self, exc: BaseException, *, sql: str | None = None, params: Sequence[Any] | None = None
    ) -> DatabaseError:
        message = str(exc)
        if self._is_unique_violation(exc, message):
            self.logger.debug("Unique constraint violation: %s", message)
            return UniqueConstraintError(message, original=exc, sql=sql, params=params)
        return DatabaseError(message, original=exc, sql=sql, params=params)

    def _is_unique_violation(self, exc: BaseException, message: str) -> bool:
        if DUPLICATE_KEY_MARKER not in message.lower():
            return False
        driver = self._state.driver if self._state else None
        constraint_type = getattr(driver, "ConstraintException", None)
        if isinstance(constraint_type, type) and isinstance(exc, constraint_type):
            return True
        if any(klass.__name__ in _CONSTRAINT_ERROR_NAMES for klass in type(exc).__mro__):
            return True
        return message.startswith("Constraint Error")

    @staticmethod
    def _columns(connection: Any) -> list[str]:
        description = getattr(connection, "description", None)
        if not description:
            return []
        return [column[0] for column in description]

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin(self) -> None:
        self._transaction_call("begin")

    def commit(self) -> None:
        self._transaction_call("commit")

    def rollback(self) -> None:
        self._transaction_call("rollback")

    def _transaction_call(self, name: str) -> None:
        state = self._ensure_state()
        driver_error = getattr(state.driver, "Error", Exception)
        with self._lock:
            try:
                getattr(state.connection, name)()
            except driver_error as exc:
                raise AdapterTransactionError(f"DuckDB {name} failed: {exc}") from exc

    @staticmethod
    def _redact(params: Sequence[Any]) -> Sequence[Any]:
        redacted = []
        for value in params:
            if isinstance(value, str) and any(
                token in value.lower() for token in ("password", "secret", "token")
            ):
                redacted.append("***")
            else:
                redacted.append(value)
        return redacted
