"""Database dialects: one class per engine (MySQL, Oracle, SQLite)."""

from dbdialect.errors import UnsupportedDialectError

from .base import Dialect
from .mysql import MysqlDialect
from .oracle import OracleDialect
from .sqlite import SqliteDialect

_DIALECT_CLASSES: tuple[type[Dialect], ...] = (
    MysqlDialect,
    OracleDialect,
    SqliteDialect,
)


def get_dialect_for_scheme(scheme: str) -> Dialect:
    """Return a Dialect instance for a URL scheme (e.g. 'mysql', 'oracle+oracledb') or backend alias ('default')."""
    normalized = (scheme or "").split("+")[0].strip().lower()
    for dialect_cls in _DIALECT_CLASSES:
        if normalized in dialect_cls.SUPPORTED_SCHEMA or normalized in dialect_cls.ALIASES:
            return dialect_cls()
    raise UnsupportedDialectError(f"Unsupported database scheme: {scheme}")


__all__ = [
    "Dialect",
    "MysqlDialect",
    "OracleDialect",
    "SqliteDialect",
    "get_dialect_for_scheme",
]
