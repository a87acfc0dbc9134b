"""
Statement execution against a DuckDB adapter.
"""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, List, Optional

from ..adapters.base import DatabaseAdapter
from ..dialects.base import TableName
from ..dialects.duckdb import DuckDBDialect
from ..utils import get_logger
from .request import QueryRequest
from .translator import ResultTranslator

SEQUENCE_LOOKUP_SQL = (
    "SELECT column_name, column_default FROM duckdb_columns() "
    "WHERE schema_name = ? AND table_name = ? AND column_default IS NOT NULL "
    "ORDER BY column_index"
)

_IDENTIFIER = r'(?:"((?:[^"]|"")+)"|([A-Za-z_][A-Za-z0-9_$]*))'
_DROP_TABLE_RE = re.compile(
    rf"^\s*DROP\s+TABLE\s+(?:IF\s+EXISTS\s+)?{_IDENTIFIER}(?:\s*\.\s*{_IDENTIFIER})?",
    re.IGNORECASE,
)
_NEXTVAL_RE = re.compile(r"nextval\(\s*'([^']+)'", re.IGNORECASE)


def _identifier(quoted: Optional[str], bare: Optional[str]) -> Optional[str]:
    if quoted is not None:
        return quoted.replace('""', '"')
    return bare


def dropped_table(sql: str) -> Optional[TableName]:
    """
    Recognise ``DROP TABLE [IF EXISTS] <table>`` or ``<schema>.<table>``,
    quoted or bare.
    """
    match = _DROP_TABLE_RE.match(sql)
    if not match:
        return None
    first = _identifier(match.group(1), match.group(2))
    second = _identifier(match.group(3), match.group(4))
    if second is None:
        return TableName(table=first)
    return TableName(table=second, schema=first)


def referenced_sequence(default: str) -> Optional[str]:
    """
    Sequence name inside a ``nextval('...')`` column default, unqualified.
    """
    match = _NEXTVAL_RE.search(default)
    if not match:
        return None
    return match.group(1).split(".")[-1].strip('"')


class QueryExecutor:
    """
    Runs one :class:`QueryRequest` at a time and returns the shaped result.

    Dropping a table first drops the sequences its own auto-increment
    columns draw from; the drop itself only runs once all of them have
    completed. Sequences of any other table are never touched.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        *,
        translator: ResultTranslator | None = None,
    ) -> None:
        self.adapter = adapter
        self.translator = translator or ResultTranslator()
        self.logger = get_logger("query.executor")

    @property
    def dialect(self) -> DuckDBDialect:
        return self.adapter.dialect  # type: ignore[return-value]

    def run(self, request: QueryRequest) -> Any:
        table = self.cleanup_target(request)
        if table is not None:
            self.drop_sequences(table)

        result = self.adapter.execute(request.sql, request.params)
        return self.translator.translate(request, result.rows, result.metadata)

    def cleanup_target(self, request: QueryRequest) -> Optional[TableName]:
        """
        Table whose sequences must go before ``request`` runs, if any.

        Only ``DROP TABLE`` statements qualify. A structured ``table`` on the
        request must name the same table the statement drops.
        """
        parsed = dropped_table(request.sql)
        if request.table is None:
            return parsed
        if parsed is None:
            raise ValueError(
                f"QueryRequest.table ({request.table}) is only accepted for DROP TABLE statements."
            )
        if self._same_table(parsed, request.table):
            return request.table
        raise ValueError(
            f"QueryRequest.table ({request.table}) does not match the dropped table ({parsed})."
        )

    def table_sequences(self, table: TableName) -> List[str]:
        """
        Sequences referenced by ``table``'s column defaults that follow the
        ``<schema>_<table>_<column>_seq`` naming of this package.
        """
        schema = table.schema or self.dialect.default_schema
        result = self.adapter.execute(SEQUENCE_LOOKUP_SQL, [schema, table.table])
        prefix = self.dialect.sequence_prefix(table)
        sequences: List[str] = []
        for row in result.rows:
            name = referenced_sequence(str(row["column_default"]))
            if name and name.startswith(prefix) and name not in sequences:
                sequences.append(name)
        return sequences

    def drop_sequences(self, table: TableName) -> List[str]:
        """
        Drop every sequence belonging to ``table``. All drops are awaited;
        the first failure is re-raised once every drop has settled.
        """
        sequences = self.table_sequences(table)
        if not sequences:
            return []

        self.logger.info("Dropping %d sequence(s) for table %s", len(sequences), table)
        statements = [
            f"DROP SEQUENCE {self.dialect.quote_identifier(name)} CASCADE" for name in sequences
        ]
        workers = max(1, min(len(statements), self.dialect.options.cleanup_workers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="duckshim-cleanup") as pool:
            futures = [pool.submit(self.adapter.execute, sql) for sql in statements]
            wait(futures)
        for future in futures:
            exc = future.exception()
            if exc is not None:
                raise exc
        return sequences

    def _same_table(self, left: TableName, right: TableName) -> bool:
        default = self.dialect.default_schema
        return left.table == right.table and (left.schema or default) == (right.schema or default)
