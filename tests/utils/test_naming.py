import re

from duckshim.utils.naming import camel_to_snake, sequence_name, sequence_prefix


def test_camel_to_snake():
    assert camel_to_snake("BlogPost") == "blog_post"


def test_sequence_name_includes_schema_table_and_column():
    assert sequence_name("users", "id", schema="foo") == "foo_users_id_seq"
    assert sequence_name("images", "id") == "images_id_seq"


def test_sequence_name_is_deterministic_and_a_plain_identifier():
    first = sequence_name("t", "c", schema="s")
    assert first == sequence_name("t", "c", schema="s") == "s_t_c_seq"
    assert re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", first)


def test_sequence_name_strips_quotes_and_dots():
    assert sequence_name('"users"', "id", schema='"foo"') == "foo_users_id_seq"
    assert sequence_name("a.b", "id") == "a_b_id_seq"


def test_sequence_prefix_matches_every_column_sequence():
    prefix = sequence_prefix("users", schema="foo")
    assert prefix == "foo_users_"
    assert sequence_name("users", "id", schema="foo").startswith(prefix)
    assert sequence_name("users", "rank", schema="foo").startswith(prefix)
