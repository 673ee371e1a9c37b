"""Tests for dbdialect.versions."""

from dbdialect.versions import CURRENT_VERSIONS, VersionInfo, config_rows


def test_config_rows_order_and_values():
    rows = config_rows(VersionInfo(db_version="110", index_version="3", redolog_version="1.49"))
    assert rows == [
        ("db.version", "110", "db schema version"),
        ("index.version", "3", "index version"),
        ("redolog.version", "1.49", "redolog version"),
    ]


def test_config_rows_default_to_current_versions():
    names = [name for name, _, _ in config_rows()]
    assert names == ["db.version", "index.version", "redolog.version"]
    assert config_rows()[0][1] == CURRENT_VERSIONS.db_version
