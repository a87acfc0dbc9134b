"""
Error taxonomy raised across duckshim layers.

Driver exceptions never leave the adapter untranslated: callers only ever
see subclasses of :class:`AdapterError`.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class UnsupportedOperationError(AdapterConfigurationError):
    """Raised for operations DuckDB cannot perform, such as connecting by URL."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


class DatabaseError(AdapterExecutionError):
    """
    Driver-reported failure. The driver exception is kept on ``original``
    and the message is preserved verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        original: BaseException | None = None,
        sql: str | None = None,
        params: Sequence[object] | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original
        self.sql = sql
        self.params = list(params) if params is not None else None


class UniqueConstraintError(DatabaseError):
    """
    Duplicate-key violation, shaped like a validation error so uniqueness
    handling written against field errors keeps working.
    """

    MESSAGE_PREFIX = "Validation error: "

    def __init__(
        self,
        message: str,
        *,
        original: BaseException | None = None,
        sql: str | None = None,
        params: Sequence[object] | None = None,
        fields: Mapping[str, List[str]] | None = None,
    ) -> None:
        if not message.startswith(self.MESSAGE_PREFIX):
            message = f"{self.MESSAGE_PREFIX}{message}"
        super().__init__(message, original=original, sql=sql, params=params)
        self.errors: Dict[str, List[str]] = {
            key: list(messages) for key, messages in (fields or {"__all__": [message]}).items()
        }
