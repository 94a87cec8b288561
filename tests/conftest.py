"""
Pytest configuration and shared fixtures for sqlhub tests.
"""

import os
import tempfile

import pytest

from sqlhub.adapters.base import ConnectInfo, EngineType
from sqlhub.engine import ConnectionContext

from tests.fakes import FakeAdapter, FakeEmbeddedAdapter, FakeReconnectAdapter


@pytest.fixture
def connect_info():
    """Connection descriptor for the fake server engine."""
    return ConnectInfo(
        engine=EngineType.MYSQL, host="db.local", user="app", password="secret", database="sales"
    )


@pytest.fixture
def fake_adapter():
    return FakeAdapter()


@pytest.fixture
def fake_context(connect_info, fake_adapter):
    """Connection context backed by the fake driver (in-session switching)."""
    context = ConnectionContext(connect_info, adapter=fake_adapter)
    yield context
    context.close()


@pytest.fixture
def reconnect_adapter():
    return FakeReconnectAdapter()


@pytest.fixture
def reconnect_context(reconnect_adapter):
    info = ConnectInfo(
        engine=EngineType.POSTGRESQL, host="db.local", user="app", database="sales"
    )
    context = ConnectionContext(info, adapter=reconnect_adapter)
    yield context
    context.close()


@pytest.fixture
def embedded_adapter():
    return FakeEmbeddedAdapter()


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path (the engine creates the file)."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        temp_path = f.name
    os.unlink(temp_path)
    yield temp_path
    # Cleanup
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sqlite_context(temp_db_path):
    """SQLite-backed context with a small schema."""
    context = ConnectionContext(ConnectInfo(engine=EngineType.SQLITE, path=temp_db_path))
    connection = context.get_connection()
    connection.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            balance NUMERIC DEFAULT 0
        );
        CREATE UNIQUE INDEX ux_users_email ON users (email);
        CREATE INDEX ix_users_name_email ON users (name, email);
        CREATE VIEW active_users AS SELECT id, name FROM users WHERE balance > 0;
        INSERT INTO users (name, email, balance) VALUES
            ('alice', 'alice@example.com', 10),
            ('bob', 'bob@example.com', 0),
            ('carol', 'carol@example.com', 5);
        """
    )
    yield context
    context.close()


@pytest.fixture
def duckdb_context():
    """In-memory DuckDB context with a small schema."""
    pytest.importorskip("duckdb")
    context = ConnectionContext(ConnectInfo(engine=EngineType.DUCKDB, path=":memory:"))
    connection = context.get_connection()
    connection.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, customer VARCHAR NOT NULL, "
        "amount DECIMAL(10, 2), placed_at TIMESTAMP)"
    )
    connection.execute("CREATE INDEX ix_orders_customer ON orders (customer)")
    connection.execute("CREATE VIEW big_orders AS SELECT * FROM orders WHERE amount > 100")
    connection.execute(
        "INSERT INTO orders VALUES "
        "(1, 'acme', 250.00, TIMESTAMP '2024-01-05 10:00:00'), "
        "(2, 'globex', 80.50, TIMESTAMP '2024-01-06 11:30:00')"
    )
    yield context
    context.close()
