"""Oracle dialect, the enterprise backend (Oracle Database 19c, multitenant)."""

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

STREAMING_FETCH_SIZE = 1000


def _concat(*fields: str | None) -> str:
    parts = present(fields)
    if not parts:
        return "''"
    if len(parts) == 1:
        return parts[0]
    return "(" + " || ".join(parts) + ")"


class OracleDialect(Dialect):
    """Dialect for Oracle Database (scheme oracle), driven through python-oracledb.

    Schemas are users on Oracle, so the existence probe looks at DBA_USERS and
    the connection URL's path is the service name.
    """

    NAME: ClassVar[str] = "oracle"
    DISPLAY_NAME: ClassVar[str] = "Oracle Database 19c"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("oracle",)
    ALIASES: ClassVar[tuple[str, ...]] = ("enterprise",)

    CAPABILITIES: ClassVar[Mapping[Capability, bool]] = MappingProxyType({
        Capability.PARTITIONING: True,
        Capability.MULTITENANCY: True,
        Capability.CLUSTERING: False,
        Capability.ADVANCED_SECURITY: False,
        Capability.JSON_STORE: False,
        Capability.MERGE_STATEMENT: True,
        Capability.BITWISE_OPERATIONS: True,
        Capability.BOOLEAN_DATATYPE: False,
        Capability.CASE_SENSITIVE_COMPARISON: True,
        Capability.CAST_AS_BIGINT: True,
        Capability.CLOB_COMPARISON: True,
        Capability.DISABLE_CONSTRAINT_CHECK: True,
        Capability.NON_BMP_CHARACTERS: True,
        Capability.ROW_LEVEL_LOCKING: True,
        Capability.UNIQUE_NAME_INDEX: True,
        Capability.DUMPSTER_TABLES: True,
    })

    ERROR_CODES: ClassVar[Mapping[ErrorKind, int]] = MappingProxyType({
        ErrorKind.DEADLOCK_DETECTED: 60,  # ORA-00060
        ErrorKind.DUPLICATE_ROW: 1,  # ORA-00001
        ErrorKind.FOREIGN_KEY_NO_PARENT: 2291,  # ORA-02291
        ErrorKind.FOREIGN_KEY_CHILD_EXISTS: 2292,  # ORA-02292
        ErrorKind.NO_SUCH_DATABASE: 39165,  # ORA-39165
        ErrorKind.NO_SUCH_TABLE: 942,  # ORA-00942
        ErrorKind.TABLE_FULL: 1653,  # ORA-01653
    })

    F: ClassVar[dict[str, Callable[..., str]]] = {
        # the optimizer picks the access path
        "index_hint": lambda index: "",
        "null_coalesce": lambda expr1, expr2: f"NVL({expr1}, {expr2})",
        "bit_and": lambda expr1, expr2: f"BITAND({expr1}, {expr2})",
        "bit_and_not": lambda expr1, expr2: f"({expr1} - BITAND({expr1}, {expr2}))",
        "concat": _concat,
        "sign": sign,
        "lpad": lpad,
        "limit": lambda offset, count: (
            f"OFFSET {check_count('offset', offset)} ROWS FETCH NEXT {check_count('count', count)} ROWS ONLY"
        ),
    }

    DRIVER: ClassVar[str] = "oracledb"
    DEFAULT_PORT: ClassVar[int] = 1521
    SUPPORTS_STATS_CALLBACK: ClassVar[bool] = True
    PROPERTY_PREFIX: ClassVar[str] = "oracle_connector_"
    DEFAULT_PROPERTIES: ClassVar[Mapping[str, str]] = MappingProxyType({
        "stmtcachesize": "25",
        "tcp_connect_timeout": "10",
    })

    DATABASE_EXISTS_SQL: ClassVar[str] = "SELECT COUNT(*) FROM DBA_USERS WHERE USERNAME = :1"
    FLUSH_STATEMENTS: ClassVar[tuple[str, ...]] = ("ALTER SYSTEM CHECKPOINT",)

    def connect(self, config: PoolConfig):
        import oracledb  # pylint: disable=import-outside-toplevel,import-error
        parsed = urllib.parse.urlparse(config.connection_url)
        service = (parsed.path or "").lstrip("/")
        dsn = f"{parsed.hostname}:{parsed.port or self.DEFAULT_PORT}/{service}"
        logger.debug("Connecting to Oracle service %s", dsn)
        return oracledb.connect(dsn=dsn, **config.driver_kwargs())

    def streaming_cursor(self, connection: Any, settings: ServerSettings):
        cursor = connection.cursor()
        if settings.results_streaming_enabled:
            cursor.arraysize = STREAMING_FETCH_SIZE
            cursor.prefetchrows = STREAMING_FETCH_SIZE
        return cursor
