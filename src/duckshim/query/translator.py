"""
Result shaping for executed statements.

Each :class:`QueryType` maps to the shape the engine expects back; rows
coming out of DuckDB are reshaped here and nowhere else.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from ..adapters.base import ExecutionMetadata
from ..core.model import Model
from ..utils import get_logger
from .request import QueryRequest, QueryType

_COLUMN_CATALOG_RE = re.compile(r"\b(duckdb_columns|information_schema\.columns)\b", re.IGNORECASE)
_PRIMARY_KEY_MARKERS = {"PRI", "PRIMARY KEY"}
_RETURNING_RE = re.compile(r"\bRETURNING\b", re.IGNORECASE)

# DuckDB answers DML without RETURNING with one row holding this column.
COUNT_COLUMN = "Count"


@dataclass(frozen=True)
class ColumnDescription:
    type: str
    allow_null: bool
    default_value: Any
    primary_key: bool
    unique: bool = False


def is_describe_query(request: QueryRequest) -> bool:
    if request.type is QueryType.DESCRIBE:
        return True
    return bool(_COLUMN_CATALOG_RE.search(request.sql))


def reported_count(rows: List[Dict[str, Any]]) -> Optional[int]:
    if len(rows) == 1 and list(rows[0]) == [COUNT_COLUMN]:
        return rows[0][COUNT_COLUMN]
    return None


def _to_text(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in {"YES", "TRUE", "T", "1"}
    return bool(value)


class ResultTranslator:
    """
    Turns raw rows plus execution metadata into per-kind results.
    """

    def __init__(self) -> None:
        self.logger = get_logger("query.translator")

    def translate(
        self,
        request: QueryRequest,
        rows: List[Dict[str, Any]],
        metadata: ExecutionMetadata,
    ) -> Any:
        kind = request.type
        if kind is QueryType.SELECT:
            return self.select_rows(request, rows)
        if kind in (QueryType.INSERT, QueryType.UPSERT):
            return self.insert_result(request, rows, metadata)
        if kind is QueryType.UPDATE:
            count = reported_count(rows)
            if count is not None:
                metadata.changes = count
            return request.instance, metadata
        if is_describe_query(request):
            return self.describe_table(rows)
        if kind is QueryType.RAW:
            return rows, rows
        if kind in (QueryType.SHOW_CONSTRAINTS, QueryType.SHOW_INDEXES):
            return list(rows)
        if kind in (QueryType.BULK_UPDATE, QueryType.DELETE):
            return self.affected_rows(rows, metadata)

        self.logger.warning(
            "No result translation for query type %s; returning raw rows.",
            kind.name,
            extra={"sql": request.sql},
        )
        return rows, rows

    # ------------------------------------------------------------------ #
    def select_rows(self, request: QueryRequest, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # Unbound rows go back as plain values; bound rows are parsed by the model.
        if request.model is not None:
            return rows
        return [{column: _to_text(value) for column, value in row.items()} for row in rows]

    def insert_result(
        self,
        request: QueryRequest,
        rows: List[Dict[str, Any]],
        metadata: ExecutionMetadata,
    ) -> tuple[Any, ExecutionMetadata]:
        if not _RETURNING_RE.search(request.sql) and reported_count(rows) is not None:
            rows = []
        metadata.last_id = self._generated_id(request, rows)
        # DuckDB's insert count ignores conflict handling, so it is not reported.
        metadata.changes = None
        instance = request.instance
        if instance is None:
            return metadata.last_id, metadata
        if rows:
            self.hydrate(instance, rows[0])
        return instance, metadata

    def hydrate(self, instance: Model, row: Dict[str, Any]) -> None:
        """
        Copy returned columns onto ``instance`` as database-sourced values.
        """
        meta = instance._meta
        for column, value in row.items():
            field = meta.field_for_column(column)
            if field is None:
                self.logger.debug(
                    "Returned column %s has no attribute on %s", column, type(instance).__name__
                )
                continue
            if value is not None:
                value = field.to_python(value)
            instance.set_from_database(field.require_name(), value)

    def describe_table(self, rows: List[Dict[str, Any]]) -> Dict[str, ColumnDescription]:
        result: Dict[str, ColumnDescription] = {}
        for row in rows:
            if "null" in row:
                allow_null = _as_flag(row["null"])
            else:
                allow_null = _as_flag(row.get("is_nullable", True))
            key = row.get("key")
            comment = row.get("comment") or ""
            primary_key = (
                isinstance(key, str) and key.strip().upper() in _PRIMARY_KEY_MARKERS
            ) or "PRIMARY KEY" in str(comment).upper()
            result[row["column_name"]] = ColumnDescription(
                type=str(row.get("column_type") or row.get("data_type") or "").upper(),
                allow_null=allow_null,
                default_value=row.get("default", row.get("column_default")),
                primary_key=primary_key,
                unique=False,
            )
        return result

    @staticmethod
    def affected_rows(rows: List[Dict[str, Any]], metadata: ExecutionMetadata) -> int:
        count = reported_count(rows)
        if count is not None:
            metadata.changes = count
        # Best effort; no range check on what the driver reports.
        return int(metadata.changes or 0)

    @staticmethod
    def _generated_id(request: QueryRequest, rows: List[Dict[str, Any]]) -> Optional[Any]:
        if not rows:
            return None
        first = rows[0]
        if request.model is not None and request.model._meta.primary_key is not None:
            column = request.model._meta.primary_key.column_name()
            if column in first:
                return first[column]
        return next(iter(first.values()), None)
