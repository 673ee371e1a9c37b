"""SQLite dialect, the embedded backend."""

import logging
import urllib.parse
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping

from dbdialect.capability import Capability
from dbdialect.errors import ErrorKind
from dbdialect.pool_config import CREDENTIAL_PROPERTIES, PoolConfig
from dbdialect.settings import ServerSettings

from .base import Dialect, check_count, check_pad, present, quote_literal, sign

logger = logging.getLogger(__name__)

SQLITE_CONSTRAINT_PRIMARYKEY = 1555
SQLITE_CONSTRAINT_UNIQUE = 2067


def _concat(*fields: str | None) -> str:
    parts = present(fields)
    if not parts:
        return "''"
    return "(" + " || ".join(parts) + ")"


def _lpad(field: str, width: int, pad: str) -> str:
    """LPAD emulation: repeat ``pad`` width times via HEX(ZEROBLOB()), then cut to size."""
    width = check_count("width", width)
    padding = f"REPLACE(HEX(ZEROBLOB({width})), '00', {quote_literal(check_pad(pad))})"
    return (
        f"(CASE WHEN LENGTH({field}) >= {width} THEN SUBSTR({field}, 1, {width}) "
        f"ELSE SUBSTR({padding}, 1, {width} - LENGTH({field})) || {field} END)"
    )


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite); the database name is the file path."""

    NAME: ClassVar[str] = "sqlite"
    DISPLAY_NAME: ClassVar[str] = "SQLite"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite",)
    ALIASES: ClassVar[tuple[str, ...]] = ("embedded",)

    CAPABILITIES: ClassVar[Mapping[Capability, bool]] = MappingProxyType({
        Capability.BITWISE_OPERATIONS: True,
        Capability.BOOLEAN_DATATYPE: False,
        Capability.CASE_SENSITIVE_COMPARISON: True,
        Capability.NON_BMP_CHARACTERS: True,
        Capability.UNIQUE_NAME_INDEX: True,
        Capability.DUMPSTER_TABLES: True,
        Capability.LIMIT_CLAUSE: True,
        Capability.REPLACE_INTO: True,
    })

    # Extended result codes. SQLITE_CONSTRAINT_FOREIGNKEY (787) is raised for
    # both a missing parent and a parent that still has children, so neither
    # foreign key kind is mapped.
    ERROR_CODES: ClassVar[Mapping[ErrorKind, int]] = MappingProxyType({
        ErrorKind.DEADLOCK_DETECTED: 262,  # SQLITE_LOCKED_SHAREDCACHE
        ErrorKind.DUPLICATE_ROW: SQLITE_CONSTRAINT_UNIQUE,
        ErrorKind.NO_SUCH_DATABASE: 14,  # SQLITE_CANTOPEN
        ErrorKind.TABLE_FULL: 13,  # SQLITE_FULL
    })

    F: ClassVar[dict[str, Callable[..., str]]] = {
        "index_hint": lambda index: f"INDEXED BY {index}",
        "null_coalesce": lambda expr1, expr2: f"IFNULL({expr1}, {expr2})",
        "bit_and": lambda expr1, expr2: f"{expr1} & {expr2}",
        "bit_and_not": lambda expr1, expr2: f"{expr1} & ~{expr2}",
        "concat": _concat,
        "sign": sign,
        "lpad": _lpad,
        "limit": lambda offset, count: f"LIMIT {check_count('offset', offset)},{check_count('count', count)}",
    }

    DRIVER: ClassVar[str] = "sqlite3"
    PROPERTY_PREFIX: ClassVar[str] = "sqlite_connector_"
    DEFAULT_PROPERTIES: ClassVar[Mapping[str, str]] = MappingProxyType({
        "timeout": "5",
        "check_same_thread": "false",
    })

    DATABASE_EXISTS_SQL: ClassVar[str] = "SELECT COUNT(*) FROM pragma_database_list WHERE name = ?"
    FLUSH_STATEMENTS: ClassVar[tuple[str, ...]] = ("PRAGMA wal_checkpoint(FULL)",)

    def native_code(self, error: Any) -> int | str | None:
        # a primary key is a unique constraint
        code = super().native_code(error)
        return SQLITE_CONSTRAINT_UNIQUE if code == SQLITE_CONSTRAINT_PRIMARYKEY else code

    def root_url(self, settings: ServerSettings) -> str:
        return "sqlite:///"

    def connect(self, config: PoolConfig):
        import sqlite3
        parsed = urllib.parse.urlparse(config.connection_url)
        path = (parsed.path or "")[1:] or parsed.hostname
        logger.debug("Connecting to SQLite database %s", path)
        options = {
            key: value
            for key, value in config.driver_kwargs().items()
            if key not in CREDENTIAL_PROPERTIES
        }
        conn = sqlite3.connect(path, **options)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn
