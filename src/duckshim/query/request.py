"""
Tagged statement requests handed to the executor.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..dialects.base import TableName

if TYPE_CHECKING:
    from ..core.model import Model


class QueryType(enum.Enum):
    """
    Operation kind the engine declares for a statement. The result shape
    depends on this tag, never on the rows themselves.
    """

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPSERT = "UPSERT"
    UPDATE = "UPDATE"
    BULK_UPDATE = "BULKUPDATE"
    DELETE = "DELETE"
    DESCRIBE = "DESCRIBE"
    RAW = "RAW"
    SHOW_CONSTRAINTS = "SHOWCONSTRAINTS"
    SHOW_INDEXES = "SHOWINDEXES"
    # Engine kinds without a dedicated translation; they take the fallback.
    VERSION = "VERSION"
    SHOW_TABLES = "SHOWTABLES"
    FOREIGN_KEYS = "FOREIGNKEYS"

    @classmethod
    def coerce(cls, value: "str | QueryType") -> "QueryType":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            pass
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown query type {value!r}") from exc


@dataclass
class QueryRequest:
    """
    A statement plus everything needed to shape its result.

    ``table`` names the table a ``DROP TABLE`` statement removes so its
    sequences can be cleaned up first.
    """

    sql: str
    params: Optional[Sequence[Any]] = None
    type: QueryType = QueryType.RAW
    model: Optional[type["Model"]] = None
    instance: Optional["Model"] = None
    table: Optional[TableName] = None

    def __post_init__(self) -> None:
        self.type = QueryType.coerce(self.type)
        if isinstance(self.table, str):
            self.table = TableName.parse(self.table)
        if self.model is None and self.instance is not None:
            self.model = type(self.instance)
