"""
Attribute descriptors for duckshim models.

A field carries the DuckDB column type it is created with, the parse rule
for values coming back from the database, and the key/auto-increment
flags the schema builder reads. Key and reference settings are recorded
even though DuckDB tables are created without the matching constraints.
"""

from __future__ import annotations

import itertools
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from ..dialects.duckdb import DuckDBDialect
    from .model import Model

_declaration_order = itertools.count()
_BOOLEAN_TEXT = {"true": True, "t": True, "1": True, "false": False, "f": False, "0": False}


class FieldError(Exception):
    """Raised for a field that cannot be used as declared."""


class Field:
    """
    Base descriptor. Subclasses set ``sql_name`` and ``python_type`` and
    override :meth:`parse` when plain construction is not enough.
    """

    sql_name: Optional[str] = None
    python_type: Optional[type] = None

    def __init__(
        self,
        *,
        primary_key: bool = False,
        auto_increment: bool = False,
        nullable: bool = True,
        default: Any = None,
        db_type: Optional[str] = None,
        db_column: Optional[str] = None,
        references: Optional[str] = None,
        choices: Optional[Sequence[Any]] = None,
    ) -> None:
        self.primary_key = primary_key
        self.auto_increment = auto_increment
        self.nullable = nullable
        self.default = default
        self.db_type = self.sql_name if db_type is None else db_type
        self.db_column = db_column
        self.references = references
        self.choices = None if choices is None else tuple(choices)

        self.model: type["Model"] | None = None
        self.name: str | None = None
        self.order = next(_declaration_order)

    def bind(self, model: type["Model"], name: str) -> None:
        self.model = model
        self.name = name
        setattr(model, name, self)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        values = instance._field_values
        name = self.require_name()
        if name not in values:
            default = self.get_default()
            if default is None:
                return None
            values[name] = default
        return values[name]

    def __set__(self, instance: Any, value: Any) -> None:
        name = self.require_name()
        if value is None:
            if not (self.nullable or self.auto_increment):
                raise ValueError(f"Field '{name}' cannot be None")
        else:
            if self.choices is not None and value not in self.choices:
                raise ValueError(f"Value {value!r} for field '{name}' not in choices {self.choices}")
            value = self.to_python(value)
        instance._field_values[name] = value

    def require_name(self) -> str:
        if self.name is None:
            raise FieldError("Field is not bound to a model.")
        return self.name

    def column_name(self) -> str:
        return self.db_column or self.require_name()

    def get_default(self) -> Any:
        return self.default() if callable(self.default) else self.default

    def sql_type(self, dialect: "DuckDBDialect") -> Optional[str]:
        """
        Column type used in generated DDL.
        """
        return self.db_type

    def to_python(self, value: Any) -> Any:
        """
        Parse a raw value into the attribute's Python type.
        """
        if value is None or self.python_type is None or type(value) is self.python_type:
            return value
        try:
            return self.parse(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Invalid value {value!r} for {type(self).__name__} '{self.name}'"
            ) from exc

    def parse(self, value: Any) -> Any:
        return self.python_type(value)  # type: ignore[misc]


class IntegerField(Field):
    sql_name = "INTEGER"
    python_type = int


class AutoField(IntegerField):
    """
    Sequence-backed integer, the primary key models get when they declare none.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("primary_key", True)
        kwargs.setdefault("nullable", False)
        super().__init__(auto_increment=True, **kwargs)


class BigIntegerField(IntegerField):
    # Values past the driver's 64-bit range are bound as decimal strings.
    sql_name = "BIGINT"


class FloatField(Field):
    sql_name = "DOUBLE"
    python_type = float


class BooleanField(Field):
    sql_name = "BOOLEAN"
    python_type = bool

    def __init__(self, *, default: Any = False, **kwargs: Any) -> None:
        kwargs.setdefault("nullable", False)
        super().__init__(default=default, **kwargs)

    def parse(self, value: Any) -> bool:
        text = value.strip().lower() if isinstance(value, str) else None
        if text in _BOOLEAN_TEXT:
            return _BOOLEAN_TEXT[text]
        if isinstance(value, (int, float)):
            return bool(value)
        return _reject(value)


class StringField(Field):
    sql_name = "VARCHAR"
    python_type = str

    def __init__(self, *, max_length: int | None = 255, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length

    def to_python(self, value: Any) -> Any:
        value = super().to_python(value)
        if value is not None and self.max_length and len(value) > self.max_length:
            raise ValueError(
                f"Value for field '{self.name}' exceeds max_length {self.max_length}"
            )
        return value


class EnumField(StringField):
    """
    DuckDB ``ENUM`` column restricted to ``values``.
    """

    sql_name = None

    def __init__(self, *values: str, **kwargs: Any) -> None:
        if not values:
            raise FieldError("EnumField requires at least one value.")
        kwargs.setdefault("choices", values)
        kwargs.setdefault("max_length", None)
        super().__init__(**kwargs)
        self.values = tuple(values)

    def sql_type(self, dialect: "DuckDBDialect") -> Optional[str]:
        if self.db_type:
            return self.db_type
        members = ", ".join(dialect.escape_string(value) for value in self.values)
        return f"ENUM({members})"


class DateTimeField(Field):
    sql_name = "TIMESTAMP"
    python_type = datetime

    def parse(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return _reject(value)


class DateField(Field):
    sql_name = "DATE"
    python_type = date

    def parse(self, value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return date.fromisoformat(value)
        return _reject(value)


def _reject(value: Any) -> Any:
    raise TypeError(f"Unsupported value {value!r}")
