import sqlite3

import pytest

from dbdialect.settings import ServerSettings


@pytest.fixture
def settings():
    """Explicit server settings, independent of any DBDIALECT_* environment."""
    return ServerSettings(
        backend="mysql",
        host="db.example.com",
        port=3306,
        database="store",
        user="store",
        password="s3cret",
    )


@pytest.fixture
def sqlite_path(tmp_path):
    return str(tmp_path / "test.sqlite3")


@pytest.fixture
def sqlite_connection(sqlite_path):
    """A file SQLite database for each test."""
    connection = sqlite3.connect(sqlite_path)
    yield connection
    connection.close()


@pytest.fixture
def sleeps(monkeypatch):
    """Record fallback waits instead of sleeping."""
    recorded = []
    monkeypatch.setattr("dbdialect.flush.time.sleep", recorded.append)
    return recorded
