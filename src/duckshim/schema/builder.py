"""
Schema builder converting column metadata into DuckDB DDL statements.

DuckDB has no identity/auto-increment clause, so auto-increment columns are
fed from one sequence each. Primary-key and foreign-key constraints are
recorded on the descriptors but never emitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Union

from ..core.model import Model
from ..dialects.base import TableName
from ..dialects.duckdb import DuckDBDialect
from ..utils import get_logger

AUTOINCREMENT_MARKER = " AUTOINCREMENT"
PRIMARY_KEY_COMMENT = "PRIMARY KEY"


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Engine-provided description of a single column.
    """

    name: str
    type: str
    nullable: bool = True
    auto_increment: bool = False
    primary_key: bool = False
    references: str | None = None
    column: str | None = None

    @property
    def column_name(self) -> str:
        return self.column or self.name


@dataclass(frozen=True)
class GeneratedStatement:
    """
    Primary DDL statement plus the sequence statements that must run first.
    """

    preamble: tuple[str, ...]
    statement: str

    @property
    def sql(self) -> str:
        return " ".join((*self.preamble, self.statement))

    def __str__(self) -> str:
        return self.sql


ColumnSpec = Union[ColumnDescriptor, str]
TableRef = Union[str, TableName]


class SchemaBuilder:
    """
    Produces DuckDB SQL for schema manipulation.
    """

    def __init__(self, dialect: DuckDBDialect | None = None) -> None:
        self.dialect = dialect or DuckDBDialect()
        self.logger = get_logger("schema.builder")

    # ------------------------------------------------------------------ #
    # Column fragments
    # ------------------------------------------------------------------ #
    def attributes_to_sql(self, columns: Mapping[str, ColumnSpec]) -> dict[str, str]:
        """
        Map each column to its SQL fragment, keyed by database column name.

        Auto-increment columns carry an internal marker that only
        :meth:`create_table_statement` and :meth:`add_column_sql` know how
        to rewrite. Fragments given as plain strings pass through unchanged.
        """
        result: dict[str, str] = {}
        for name, column in columns.items():
            if isinstance(column, str):
                result[name] = column
                continue
            sql = column.type
            if not column.nullable:
                sql += " NOT NULL"
            if column.auto_increment:
                sql += AUTOINCREMENT_MARKER
            result[column.column_name] = sql
        return result

    def columns_for_model(self, model: type[Model]) -> dict[str, ColumnDescriptor]:
        columns: dict[str, ColumnDescriptor] = {}
        for field in model._meta.get_fields():
            column_type = field.sql_type(self.dialect)
            if not column_type:
                raise ValueError(f"Field '{field.name}' missing db_type for schema generation.")
            name = field.require_name()
            columns[name] = ColumnDescriptor(
                name=name,
                type=column_type,
                nullable=field.nullable,
                auto_increment=field.auto_increment,
                primary_key=field.primary_key,
                references=field.references,
                column=field.column_name(),
            )
        return columns

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #
    def create_table_statement(
        self, table: TableRef, columns: Mapping[str, ColumnSpec]
    ) -> GeneratedStatement:
        if not columns:
            raise ValueError("create_table_statement requires at least one column.")
        name = TableName.parse(table)
        quoted_table = self.dialect.format_table(name)
        fragments = self.attributes_to_sql(columns)

        preamble: List[str] = []
        pieces: List[str] = []
        for column, fragment in fragments.items():
            fragment, sequence_sql = self._rewrite_autoincrement(name, column, fragment)
            if sequence_sql:
                preamble.append(sequence_sql)
            pieces.append(f"{self.dialect.quote_identifier(column)} {fragment}")

        statement = f"CREATE TABLE IF NOT EXISTS {quoted_table} ({', '.join(pieces)});"
        comments = self._primary_key_comments(name, columns)
        if comments:
            statement = " ".join([statement, *comments])
        return GeneratedStatement(preamble=tuple(preamble), statement=statement)

    def create_table_sql(self, table: TableRef, columns: Mapping[str, ColumnSpec]) -> str:
        return self.create_table_statement(table, columns).sql

    def create_model_table_sql(self, model: type[Model]) -> str:
        return self.create_table_sql(model._meta.table, self.columns_for_model(model))

    def add_column_sql(
        self,
        table: TableRef,
        name: str,
        column: ColumnSpec,
        *,
        if_not_exists: bool = False,
    ) -> str:
        table_name = TableName.parse(table)
        fragment = self.attributes_to_sql({name: column})
        column_name, column_sql = next(iter(fragment.items()))
        column_sql, sequence_sql = self._rewrite_autoincrement(table_name, column_name, column_sql)

        sql = f"ALTER TABLE {self.dialect.format_table(table_name)} ADD COLUMN "
        if if_not_exists:
            sql += "IF NOT EXISTS "
        sql += f"{self.dialect.quote_identifier(column_name)} {column_sql};"
        if sequence_sql:
            return f"{sequence_sql} {sql}"
        return sql

    def rename_column_sql(
        self, table: TableRef, old_name: str, new_names: Mapping[str, object]
    ) -> str:
        old = self.dialect.quote_identifier(old_name)
        clauses = [f"{old} TO {self.dialect.quote_identifier(new)}" for new in new_names]
        if not clauses:
            raise ValueError("rename_column_sql requires at least one new column name.")
        return (
            f"ALTER TABLE {self.dialect.format_table(table)} "
            f"RENAME COLUMN {', '.join(clauses)};"
        )

    def drop_table_sql(self, table: TableRef) -> str:
        table_name = self.dialect.format_table(table)
        self.logger.warning(
            "DROP TABLE generated for %s; its sequences are dropped with it.",
            table_name,
        )
        return f"DROP TABLE IF EXISTS {table_name};"

    def describe_table_sql(self, table: TableRef) -> tuple[str, list[str]]:
        name = TableName.parse(table)
        sql = (
            "SELECT column_name, data_type AS column_type, is_nullable, "
            'column_default AS "default", comment '
            "FROM duckdb_columns() "
            "WHERE schema_name = ? AND table_name = ? "
            "ORDER BY column_index"
        )
        return sql, [name.schema or self.dialect.default_schema, name.table]

    # ------------------------------------------------------------------ #
    def _rewrite_autoincrement(
        self, table: TableName, column: str, fragment: str
    ) -> tuple[str, str | None]:
        if AUTOINCREMENT_MARKER not in fragment:
            return fragment, None
        sequence = self.dialect.sequence_name(table, column)
        sequence_sql = (
            f"CREATE SEQUENCE IF NOT EXISTS {self.dialect.quote_identifier(sequence)} START 1;"
        )
        rewritten = fragment.replace(AUTOINCREMENT_MARKER, f" DEFAULT nextval('{sequence}')")
        return rewritten, sequence_sql

    def _primary_key_comments(
        self, table: TableName, columns: Mapping[str, ColumnSpec]
    ) -> List[str]:
        if not self.dialect.options.comment_primary_keys:
            return []
        quoted_table = self.dialect.format_table(table)
        comments: List[str] = []
        for column in columns.values():
            if isinstance(column, ColumnDescriptor) and column.primary_key:
                target = f"{quoted_table}.{self.dialect.quote_identifier(column.column_name)}"
                comments.append(f"COMMENT ON COLUMN {target} IS '{PRIMARY_KEY_COMMENT}';")
        return comments
