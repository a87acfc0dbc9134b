from datetime import date, datetime

import pytest

from duckshim.core import (
    AutoField,
    BooleanField,
    DateField,
    DateTimeField,
    EnumField,
    IntegerField,
    Model,
    ModelConfigurationError,
    StringField,
)
from duckshim.dialects import DuckDBDialect


class User(Model):
    name = StringField(max_length=50, nullable=False)
    age = IntegerField(default=0)
    is_active = BooleanField(default=True)


def test_model_metadata_collects_fields_in_order():
    assert list(User._meta.fields.keys()) == ["id", "name", "age", "is_active"]
    assert User._meta.primary_key.name == "id"
    assert isinstance(User._meta.primary_key, AutoField)
    assert User._meta.primary_key.auto_increment is True
    assert User._meta.table_name == "user"


def test_model_initializes_defaults():
    user = User(name="Alice")
    assert user.name == "Alice"
    assert user.age == 0
    assert user.is_active is True
    assert user.pk is None


def test_enum_field_renders_type_and_enforces_values():
    class Mood(Model):
        mood = EnumField("happy", "sad")

    field = Mood._meta.get_field("mood")
    assert field.db_type is None
    assert field.sql_type(DuckDBDialect()) == "ENUM('happy', 'sad')"
    with pytest.raises(ValueError):
        Mood(mood="angry")


def test_non_nullable_field_rejects_none():
    class Profile(Model):
        email = StringField(nullable=False)

    profile = Profile(email="user@example.com")
    with pytest.raises(ValueError):
        profile.email = None


def test_custom_primary_key_prevents_auto_field():
    class Token(Model):
        token_id = StringField(primary_key=True)

    assert list(Token._meta.fields.keys()) == ["token_id"]
    assert Token._meta.primary_key.name == "token_id"


def test_id_without_primary_key_is_rejected():
    with pytest.raises(ModelConfigurationError):

        class Broken(Model):
            id = IntegerField()


def test_meta_table_and_schema():
    class Event(Model):
        happened_at = DateTimeField(db_column="happened")

        class Meta:
            table = "events"
            schema = "audit"

    assert str(Event._meta.table) == "audit.events"
    assert Event._meta.field_for_column("happened").name == "happened_at"
    assert Event._meta.field_for_column("happened_at").name == "happened_at"
    assert Event._meta.field_for_column("missing") is None


def test_database_values_do_not_mark_instance_dirty():
    user = User(name="Alice")
    user.set_from_database("id", 7)
    assert user.pk == 7
    assert not user.is_dirty()

    user.age = 31
    assert user.changed() == ["age"]


def test_datetime_field_parses_iso_text():
    field = DateTimeField()
    assert field.to_python("2024-05-01T10:30:00") == datetime(2024, 5, 1, 10, 30)


def test_enum_values_are_escaped_by_the_dialect():
    field = EnumField("it's", "plain")
    assert field.sql_type(DuckDBDialect()) == "ENUM('it''s', 'plain')"


def test_fields_parse_database_values():
    assert IntegerField().to_python("42") == 42
    assert BooleanField().to_python("f") is False
    assert BooleanField().to_python(1) is True
    assert DateField().to_python(datetime(2024, 5, 1, 10, 30)) == date(2024, 5, 1)
    assert DateField().to_python("2024-05-01") == date(2024, 5, 1)
    with pytest.raises(ValueError):
        BooleanField().to_python("maybe")
    with pytest.raises(ValueError):
        DateTimeField().to_python(3.5)
