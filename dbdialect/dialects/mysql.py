"""MySQL dialect, the default backend."""

import logging
import urllib.parse
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping

from dbdialect.capability import Capability
from dbdialect.errors import ErrorKind
from dbdialect.pool_config import PoolConfig
from dbdialect.settings import ServerSettings

from .base import Dialect, check_count, lpad, present, sign

logger = logging.getLogger(__name__)


class MysqlDialect(Dialect):
    """Dialect for MySQL and MariaDB (scheme mysql), driven through PyMySQL."""

    NAME: ClassVar[str] = "mysql"
    DISPLAY_NAME: ClassVar[str] = "MySQL"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql", "mariadb")
    ALIASES: ClassVar[tuple[str, ...]] = ("default",)

    CAPABILITIES: ClassVar[Mapping[Capability, bool]] = MappingProxyType({
        Capability.BITWISE_OPERATIONS: True,
        Capability.BOOLEAN_DATATYPE: True,
        Capability.CASE_SENSITIVE_COMPARISON: False,
        Capability.CAST_AS_BIGINT: False,
        Capability.CLOB_COMPARISON: True,
        Capability.DISABLE_CONSTRAINT_CHECK: True,
        Capability.NON_BMP_CHARACTERS: False,
        Capability.ROW_LEVEL_LOCKING: True,
        Capability.UNIQUE_NAME_INDEX: True,
        Capability.DUMPSTER_TABLES: True,
        Capability.LIMIT_CLAUSE: True,
        Capability.ON_DUPLICATE_KEY: True,
        Capability.MULTITABLE_UPDATE: True,
        Capability.REPLACE_INTO: True,
        Capability.READ_COMMITTED_ISOLATION: True,
    })

    ERROR_CODES: ClassVar[Mapping[ErrorKind, int]] = MappingProxyType({
        ErrorKind.DEADLOCK_DETECTED: 1213,  # ER_LOCK_DEADLOCK
        ErrorKind.DUPLICATE_ROW: 1062,  # ER_DUP_ENTRY
        ErrorKind.FOREIGN_KEY_NO_PARENT: 1452,  # ER_NO_REFERENCED_ROW_2
        ErrorKind.FOREIGN_KEY_CHILD_EXISTS: 1451,  # ER_ROW_IS_REFERENCED_2
        ErrorKind.NO_SUCH_DATABASE: 1049,  # ER_BAD_DB_ERROR
        ErrorKind.NO_SUCH_TABLE: 1146,  # ER_NO_SUCH_TABLE
        ErrorKind.TABLE_FULL: 1114,  # ER_RECORD_FILE_FULL
    })

    F: ClassVar[dict[str, Callable[..., str]]] = {
        "index_hint": lambda index: f"FORCE INDEX ({index})",
        "null_coalesce": lambda expr1, expr2: f"IFNULL({expr1}, {expr2})",
        "bit_and": lambda expr1, expr2: f"{expr1} & {expr2}",
        "bit_and_not": lambda expr1, expr2: f"{expr1} & ~{expr2}",
        "concat": lambda *fields: "CONCAT(" + ", ".join(present(fields)) + ")",
        "sign": sign,
        "lpad": lpad,
        "limit": lambda offset, count: f"LIMIT {check_count('offset', offset)},{check_count('count', count)}",
    }

    DRIVER: ClassVar[str] = "pymysql"
    DEFAULT_PORT: ClassVar[int] = 3306
    SUPPORTS_STATS_CALLBACK: ClassVar[bool] = True
    PROPERTY_PREFIX: ClassVar[str] = "mysql_connector_"
    DEFAULT_PROPERTIES: ClassVar[Mapping[str, str]] = MappingProxyType({
        "charset": "utf8mb4",
        "use_unicode": "true",
        "autocommit": "false",
        "connect_timeout": "10",
    })

    DATABASE_EXISTS_SQL: ClassVar[str] = (
        "SELECT COUNT(*) FROM INFORMATION_SCHEMA.SCHEMATA "
        "WHERE SCHEMA_NAME = %s"
    )
    # InnoDB flushes its log buffer to disk while committing DDL.
    FLUSH_STATEMENTS: ClassVar[tuple[str, ...]] = (
        "CREATE TABLE IF NOT EXISTS flush_enforcer (dummy_column INTEGER) ENGINE = InnoDB",
        "DROP TABLE IF EXISTS flush_enforcer",
    )

    def connect(self, config: PoolConfig):
        import pymysql  # pylint: disable=import-outside-toplevel,import-error
        parsed = urllib.parse.urlparse(config.connection_url)
        logger.debug("Connecting to MySQL database %s on %s", parsed.path[1:], parsed.hostname)
        return pymysql.connect(
            host=parsed.hostname,
            port=parsed.port,
            database=(parsed.path or "")[1:] or None,
            **config.driver_kwargs(),
        )

    def streaming_cursor(self, connection: Any, settings: ServerSettings):
        if not settings.results_streaming_enabled:
            return connection.cursor()
        import pymysql.cursors  # pylint: disable=import-outside-toplevel,import-error
        return connection.cursor(pymysql.cursors.SSCursor)
