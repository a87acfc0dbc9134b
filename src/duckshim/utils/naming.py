"""
Naming conventions shared by DDL generation and table cleanup.
"""

import re


_FIRST_CAP_RE = re.compile("(.)([A-Z][a-z]+)")
_ALL_CAP_RE = re.compile("([a-z0-9])([A-Z])")

SEQUENCE_SUFFIX = "_seq"


def camel_to_snake(name: str) -> str:
    """
    Convert ``CamelCase`` names to ``snake_case`` for table naming.
    """
    step1 = _FIRST_CAP_RE.sub(r"\1_\2", name)
    snake = _ALL_CAP_RE.sub(r"\1_\2", step1).lower()
    return snake


def _clean(part: str) -> str:
    return part.replace('"', "").replace(".", "_")


def sequence_prefix(table: str, schema: str | None = None) -> str:
    """
    Prefix shared by every sequence backing an auto-increment column of
    ``table``. Includes the trailing underscore.
    """
    parts = [schema, table] if schema else [table]
    return "_".join(_clean(part) for part in parts) + "_"


def sequence_name(table: str, column: str, schema: str | None = None) -> str:
    """
    Name of the sequence that feeds ``column`` of ``table``.

    ``sequence_name("users", "id", schema="foo")`` is ``"foo_users_id_seq"``.
    The result is derived on every call and never cached.
    """
    return f"{sequence_prefix(table, schema)}{_clean(column)}{SEQUENCE_SUFFIX}"
