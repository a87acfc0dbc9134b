import pytest


class FakeDuckDBError(Exception):
    pass


class FakeConstraintException(FakeDuckDBError):
    pass


class FakeConnection:
    """
    Stand-in for a DuckDB connection. ``responses`` maps a SQL prefix to
    ``(columns, rows)`` or to an exception instance to raise.
    """

    def __init__(self, **options):
        self.options = options
        self.statements = []
        self.responses = {}
        self.description = None
        self._rows = []
        self.closed = False
        self.calls = []

    def execute(self, sql, params=None):
        self.statements.append((sql, params))
        self.description = None
        self._rows = []
        for prefix, response in self.responses.items():
            if sql.startswith(prefix):
                if isinstance(response, BaseException):
                    raise response
                columns, rows = response
                self.description = [(column, None) for column in columns]
                self._rows = [tuple(row) for row in rows]
                break
        return self

    def fetchall(self):
        return list(self._rows)

    def begin(self):
        self.calls.append("begin")

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.closed = True

    def sql_log(self):
        return [sql for sql, _ in self.statements]


class FakeDriver:
    Error = FakeDuckDBError
    ConstraintException = FakeConstraintException

    def __init__(self):
        self.connections = []

    def connect(self, **options):
        connection = FakeConnection(**options)
        self.connections.append(connection)
        return connection


@pytest.fixture
def fake_driver(monkeypatch):
    driver = FakeDriver()
    monkeypatch.setattr("duckshim.adapters.duckdb._load_driver", lambda: driver)
    return driver


@pytest.fixture
def fake_adapter(fake_driver):
    from duckshim.adapters import ConnectionConfig, DuckDBAdapter

    adapter = DuckDBAdapter()
    adapter.connect(ConnectionConfig())
    yield adapter
    adapter.close()


@pytest.fixture
def fake_connection(fake_adapter, fake_driver):
    return fake_driver.connections[-1]
