"""
Engine-side building blocks: models and the attribute metadata the
schema builder and result translator work from.
"""

from .fields import (
    AutoField,
    BigIntegerField,
    BooleanField,
    DateField,
    DateTimeField,
    EnumField,
    Field,
    FieldError,
    FloatField,
    IntegerField,
    StringField,
)
from .model import Model, ModelConfigurationError, ModelMeta, ModelOptions

__all__ = [
    "AutoField",
    "BigIntegerField",
    "BooleanField",
    "DateField",
    "DateTimeField",
    "EnumField",
    "Field",
    "FieldError",
    "FloatField",
    "IntegerField",
    "Model",
    "ModelConfigurationError",
    "ModelMeta",
    "ModelOptions",
    "StringField",
]
