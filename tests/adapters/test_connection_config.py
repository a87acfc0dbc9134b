import pytest

from duckshim.adapters import AdapterConfigurationError, ConnectionConfig, UnsupportedOperationError


def test_defaults_to_in_memory_database():
    config = ConnectionConfig()
    assert config.database == ":memory:"
    assert config.in_memory
    assert config.autocommit is True


def test_from_env_reads_database_path(monkeypatch):
    monkeypatch.setenv("DUCKSHIM_DATABASE", "/data/app.duckdb")
    monkeypatch.setenv("DUCKSHIM_DATABASE_READ_ONLY", "yes")
    config = ConnectionConfig.from_env("DUCKSHIM_DATABASE")
    assert config.database == "/data/app.duckdb"
    assert config.read_only is True
    assert not config.in_memory
    assert config.descriptive_label() == "DUCKSHIM_DATABASE (/data/app.duckdb)"


def test_from_env_rejects_bad_boolean(monkeypatch):
    monkeypatch.setenv("DUCKSHIM_DATABASE", "/data/app.duckdb")
    monkeypatch.setenv("DUCKSHIM_DATABASE_READ_ONLY", "maybe")
    with pytest.raises(AdapterConfigurationError):
        ConnectionConfig.from_env("DUCKSHIM_DATABASE")


def test_from_env_missing_variable(monkeypatch):
    monkeypatch.delenv("DUCKSHIM_DATABASE", raising=False)
    with pytest.raises(AdapterConfigurationError):
        ConnectionConfig.from_env("DUCKSHIM_DATABASE")


def test_connection_urls_are_unsupported():
    with pytest.raises(UnsupportedOperationError):
        ConnectionConfig.from_url("duckdb:///tmp/app.duckdb")
