"""
Dialect strategy interfaces describing SQL compilation behaviors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_returning: bool = False
    supports_savepoints: bool = True
    supports_schema_namespaces: bool = False
    supports_identity_columns: bool = True
    supports_sequences: bool = False
    supports_key_constraints: bool = True
    supports_constraint_alteration: bool = True
    supports_connection_url: bool = True


@dataclass(frozen=True)
class TableName:
    """
    Structured, optionally schema-qualified table identifier.
    """

    table: str
    schema: str | None = None

    @classmethod
    def parse(cls, value: "str | TableName") -> "TableName":
        if isinstance(value, TableName):
            return value
        if "." in value:
            schema, table = value.split(".", 1)
            return cls(table=table, schema=schema)
        return cls(table=value)

    def __str__(self) -> str:
        if self.schema:
            return f"{self.schema}.{self.table}"
        return self.table


class Dialect(Protocol):
    """
    Strategy interface consumed across query, schema, and adapter layers.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def format_table(self, table: "str | TableName") -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...

