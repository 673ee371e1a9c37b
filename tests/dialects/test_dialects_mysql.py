"""Tests for dbdialect.dialects.mysql: capabilities, error codes, fragments, connect."""

import sys
from unittest.mock import MagicMock

import pytest

from dbdialect.capability import Capability
from dbdialect.dialects import MysqlDialect
from dbdialect.errors import ErrorKind, ServiceFailure


class FakeMySQLError(Exception):
    """Shaped like pymysql errors: args == (errno, message)."""


def test_mysql_limit_is_offset_then_count():
    d = MysqlDialect()
    assert d.f.limit(10, 5) == "LIMIT 10,5"
    assert d.f.limit(0, 0) == "LIMIT 0,0"


def test_mysql_concat_skips_nulls():
    d = MysqlDialect()
    assert d.f.concat("a", None, "b") == "CONCAT(a, b)"
    assert d.f.concat("name") == "CONCAT(name)"
    assert d.f.concat(None, None) == "CONCAT()"
    assert d.f.concat() == "CONCAT()"


def test_mysql_fragments():
    d = MysqlDialect()
    assert d.f.index_hint("i_folder_id_date") == "FORCE INDEX (i_folder_id_date)"
    assert d.f.null_coalesce("size", "0") == "IFNULL(size, 0)"
    assert d.f.bit_and("flags", "4") == "flags & 4"
    assert d.f.bit_and_not("flags", "4") == "flags & ~4"
    assert d.f.sign("delta") == "SIGN(delta)"
    assert d.f.lpad("id", 8, "0") == "LPAD(id, 8, '0')"


def test_mysql_lpad_escapes_quotes():
    d = MysqlDialect()
    assert d.f.lpad("id", 3, "'") == "LPAD(id, 3, '''')"


def test_mysql_capabilities():
    d = MysqlDialect()
    assert d.supports_capability(Capability.BITWISE_OPERATIONS)
    assert d.supports_capability(Capability.ON_DUPLICATE_KEY)
    assert not d.supports_capability(Capability.CASE_SENSITIVE_COMPARISON)
    assert not d.supports_capability(Capability.PARTITIONING)
    assert not d.supports_capability(Capability.MERGE_STATEMENT)


def test_mysql_classifies_pymysql_errors():
    d = MysqlDialect()
    duplicate = FakeMySQLError(1062, "Duplicate entry '1' for key 'PRIMARY'")
    assert d.classify_matches(duplicate, ErrorKind.DUPLICATE_ROW)
    assert not d.classify_matches(duplicate, ErrorKind.DEADLOCK_DETECTED)
    assert d.classify(FakeMySQLError(1213, "Deadlock found")) is ErrorKind.DEADLOCK_DETECTED
    assert d.classify(FakeMySQLError(1146, "Table 'x' doesn't exist")) is ErrorKind.NO_SUCH_TABLE


def test_mysql_unknown_code_matches_nothing():
    d = MysqlDialect()
    error = FakeMySQLError(2013, "Lost connection")
    assert not any(d.classify_matches(error, kind) for kind in ErrorKind)


def test_mysql_database_exists():
    d = MysqlDialect()
    connection = MagicMock()
    cursor = connection.cursor.return_value
    cursor.fetchone.return_value = (1,)
    assert d.database_exists(connection, "store") is True
    sql, params = cursor.execute.call_args[0]
    assert "INFORMATION_SCHEMA.SCHEMATA" in sql
    assert params == ("store",)
    cursor.close.assert_called_once()

    cursor.fetchone.return_value = (0,)
    assert d.database_exists(connection, "nosuch") is False


def test_mysql_database_exists_wraps_driver_errors():
    d = MysqlDialect()
    connection = MagicMock()
    cursor = connection.cursor.return_value
    cursor.execute.side_effect = FakeMySQLError(1049, "Unknown database")
    with pytest.raises(ServiceFailure) as info:
        d.database_exists(connection, "store")
    assert info.value.kind is ErrorKind.NO_SUCH_DATABASE
    assert isinstance(info.value.__cause__, FakeMySQLError)
    cursor.close.assert_called_once()


def test_mysql_connect(monkeypatch, settings):
    """connect() uses the pool config URL and properties; mock pymysql so no real DB is needed."""
    mock_pymysql = MagicMock()
    monkeypatch.setitem(sys.modules, "pymysql", mock_pymysql)
    d = MysqlDialect()
    config = d.build_pool_config(settings, {"mysql_connector_read_timeout": "30", "mysql_connector_maxActive": "20"})
    d.connect(config)
    mock_pymysql.connect.assert_called_once()
    call_kw = mock_pymysql.connect.call_args[1]
    assert call_kw["host"] == "db.example.com"
    assert call_kw["port"] == 3306
    assert call_kw["database"] == "store"
    assert call_kw["user"] == "store"
    assert call_kw["password"] == "s3cret"
    assert call_kw["read_timeout"] == 30
    assert call_kw["autocommit"] is False
    assert "maxActive" not in call_kw


def test_mysql_streaming_cursor(monkeypatch, settings):
    mock_pymysql = MagicMock()
    monkeypatch.setitem(sys.modules, "pymysql", mock_pymysql)
    monkeypatch.setitem(sys.modules, "pymysql.cursors", mock_pymysql.cursors)
    d = MysqlDialect()
    connection = MagicMock()
    d.streaming_cursor(connection, settings)
    connection.cursor.assert_called_once_with(mock_pymysql.cursors.SSCursor)

    connection = MagicMock()
    d.streaming_cursor(connection, settings.model_copy(update={"results_streaming_enabled": False}))
    connection.cursor.assert_called_once_with()


def test_mysql_str():
    assert str(MysqlDialect()) == "MySQL"
