"""
Model base classes and metadata orchestration for duckshim.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Type

from ..dialects.base import TableName
from ..utils import camel_to_snake
from .fields import AutoField, Field


class ModelConfigurationError(Exception):
    """Raised when a model class is misconfigured."""


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.
    """

    model: Type["Model"]
    table_name: str = ""
    schema: Optional[str] = None
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)
    primary_key: Optional[Field] = None

    def add_field(self, field_obj: Field) -> None:
        if field_obj.name in self.fields:
            raise ModelConfigurationError(
                f"Duplicate field name '{field_obj.name}' on model '{self.model.__name__}'"
            )
        self.fields[field_obj.name] = field_obj
        if field_obj.primary_key:
            if self.primary_key and self.primary_key is not field_obj:
                raise ModelConfigurationError(
                    f"Multiple primary keys defined on model '{self.model.__name__}'"
                )
            self.primary_key = field_obj

    @property
    def table(self) -> TableName:
        return TableName(table=self.table_name, schema=self.schema)

    def get_field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise KeyError(f"Unknown field '{name}' on model '{self.model.__name__}'") from exc

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()

    def field_for_column(self, column: str) -> Optional[Field]:
        """
        Resolve a database column name to its field, falling back to the
        attribute name when no field declares that column.
        """
        for field_obj in self.fields.values():
            if field_obj.column_name() == column:
                return field_obj
        return self.fields.get(column)


class ModelMeta(type):
    """
    Metaclass responsible for collecting fields and establishing metadata.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        # Allow creation of the base Model class without processing fields.
        if name == "Model" and bases == (object,):
            return super().__new__(mcls, name, bases, attrs)

        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)

        meta = getattr(cls, "Meta", None)
        table_name = camel_to_snake(name)
        schema = None
        if meta:
            table_name = getattr(meta, "table", table_name)
            schema = getattr(meta, "schema", None)

        cls._meta = ModelOptions(model=cls, table_name=table_name, schema=schema)

        sorted_fields = sorted(
            declared_fields.items(), key=lambda item: item[1].order
        )
        for attr_name, field_obj in sorted_fields:
            field_obj.bind(cls, attr_name)
            cls._meta.add_field(field_obj)

        if not cls._meta.primary_key:
            if "id" in cls._meta.fields:
                raise ModelConfigurationError(
                    f"Model '{cls.__name__}' defines a field named 'id' but no primary key. "
                    "Either set primary_key=True on that field or define a different name."
                )
            auto_field = AutoField()
            auto_field.bind(cls, "id")
            cls._meta.add_field(auto_field)
            cls._meta.fields = OrderedDict(
                sorted(
                    cls._meta.fields.items(),
                    key=lambda item: (0 if item[0] == "id" else 1, item[1].order),
                )
            )

        return cls


class Model(metaclass=ModelMeta):
    """
    Base model providing data container functionality.

    Values assigned through attributes count as user-set and make the
    instance dirty; values written by :meth:`set_from_database` do not.
    """

    _meta: ModelOptions

    def __init__(self, **kwargs: Any) -> None:
        self._field_values: Dict[str, Any] = {}
        self._initial_state: Dict[str, Any] = {}

        for field_obj in self._meta.get_fields():
            if field_obj.name in kwargs:
                setattr(self, field_obj.name, kwargs[field_obj.name])
            else:
                default_value = field_obj.get_default()
                if default_value is not None:
                    setattr(self, field_obj.name, default_value)

        self._initial_state = dict(self._field_values)

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{field_obj.name}={repr(self._field_values.get(field_obj.name))}"
            for field_obj in self._meta.get_fields()
            if field_obj.name in self._field_values
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    @property
    def pk(self) -> Any:
        if not self._meta.primary_key:
            raise ModelConfigurationError(
                f"Model '{self.__class__.__name__}' does not define a primary key."
            )
        return getattr(self, self._meta.primary_key.require_name())

    def set_from_database(self, name: str, value: Any) -> None:
        """
        Store an already-parsed value that came back from the database.
        Skips choice checks and leaves the attribute clean.
        """
        self._meta.get_field(name)
        self._field_values[name] = value
        self._initial_state[name] = value

    def changed(self) -> list[str]:
        return [
            name
            for name in self._field_values
            if self._field_values.get(name) != self._initial_state.get(name)
            or name not in self._initial_state
        ]

    def is_dirty(self) -> bool:
        return bool(self.changed())
