import pytest

from duckshim.dialects import DuckDBDialect, DuckDBOptions, TableName
from duckshim.errors import UnsupportedOperationError


def test_duckdb_dialect_quotes_identifiers():
    dialect = DuckDBDialect()
    assert dialect.quote_identifier('table"name') == '"table""name"'
    assert dialect.format_table("foo.users") == '"foo"."users"'
    assert dialect.format_table(TableName("users")) == '"users"'


def test_duckdb_dialect_placeholder_and_schema():
    dialect = DuckDBDialect()
    assert dialect.parameter_placeholder() == "?"
    assert dialect.default_schema == "main"
    assert DuckDBDialect(DuckDBOptions(default_schema="analytics")).default_schema == "analytics"


def test_duckdb_dialect_has_no_key_constraints():
    capabilities = DuckDBDialect.capabilities
    assert capabilities.supports_sequences is True
    assert capabilities.supports_identity_columns is False
    assert capabilities.supports_key_constraints is False


def test_duckdb_dialect_sequence_names():
    dialect = DuckDBDialect()
    assert dialect.sequence_name("foo.users", "id") == "foo_users_id_seq"
    assert dialect.sequence_prefix(TableName("users", schema="foo")) == "foo_users_"


def test_connection_url_is_rejected():
    with pytest.raises(UnsupportedOperationError):
        DuckDBDialect().parse_connection_url("duckdb:///tmp/db.duckdb")


def test_table_name_parse_round_trip():
    name = TableName.parse("foo.users")
    assert name == TableName(table="users", schema="foo")
    assert str(name) == "foo.users"
    assert TableName.parse(name) is name
