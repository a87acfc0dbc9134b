"""
DuckDB dialect implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..errors import UnsupportedOperationError
from ..utils.naming import sequence_name, sequence_prefix
from .base import DialectCapabilities, TableName

INT64_MAX: Final[int] = 2**63 - 1


@dataclass(frozen=True)
class DuckDBOptions:
    """
    Per-connection dialect settings.

    ``comment_primary_keys`` records primary-key columns as column comments
    since DuckDB tables are created without key constraints.
    ``max_bind_int`` is the widest integer bound as a number; larger values
    are bound as decimal strings.
    """

    default_schema: str = "main"
    comment_primary_keys: bool = False
    max_bind_int: int = INT64_MAX
    cleanup_workers: int = 4


class DuckDBDialect:
    """
    DuckDB dialect using qmark placeholders and sequence-backed auto-increment.

    Primary and foreign keys are never enforced: DuckDB's ART index checks
    uniqueness too eagerly for keyed tables that are updated in place.
    """

    name: Final[str] = "duckdb"
    param_style: Final[str] = "qmark"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_returning=True,
        supports_savepoints=False,
        supports_schema_namespaces=True,
        supports_identity_columns=False,
        supports_sequences=True,
        supports_key_constraints=False,
        supports_constraint_alteration=False,
        supports_connection_url=False,
    )

    def __init__(self, options: DuckDBOptions | None = None) -> None:
        self.options = options or DuckDBOptions()

    @property
    def default_schema(self) -> str:
        return self.options.default_schema

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def format_table(self, table: str | TableName) -> str:
        name = TableName.parse(table)
        if name.schema:
            return f"{self.quote_identifier(name.schema)}.{self.quote_identifier(name.table)}"
        return self.quote_identifier(name.table)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"

    def escape_string(self, value: str) -> str:
        escaped = value.replace("'", "''")
        return f"'{escaped}'"

    def sequence_name(self, table: str | TableName, column: str) -> str:
        name = TableName.parse(table)
        return sequence_name(name.table, column, schema=name.schema)

    def sequence_prefix(self, table: str | TableName) -> str:
        name = TableName.parse(table)
        return sequence_prefix(name.table, schema=name.schema)

    def parse_connection_url(self, url: str):
        raise UnsupportedOperationError(
            'The "url" option is not supported in DuckDB. Use the "database" option instead.'
        )
