from duckshim.utils.performance import SLOW_QUERY_ENV, resolve_slow_query_ms


def test_override_wins(monkeypatch):
    monkeypatch.setenv(SLOW_QUERY_ENV, "5")
    assert resolve_slow_query_ms(default=100, override=20) == 20


def test_environment_value_used(monkeypatch):
    monkeypatch.setenv(SLOW_QUERY_ENV, "250")
    assert resolve_slow_query_ms(default=100) == 250


def test_invalid_environment_value_falls_back(monkeypatch):
    monkeypatch.setenv(SLOW_QUERY_ENV, "fast")
    assert resolve_slow_query_ms(default=100) == 100
    monkeypatch.setenv(SLOW_QUERY_ENV, "-3")
    assert resolve_slow_query_ms(default=100) == 100


def test_default_when_unset(monkeypatch):
    monkeypatch.delenv(SLOW_QUERY_ENV, raising=False)
    assert resolve_slow_query_ms(default=75) == 75
