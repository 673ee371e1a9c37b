"""dbdialect: backend capabilities, error codes, SQL fragments and pool bootstrap behind one strategy object."""

from .capability import Capability
from .dialects import Dialect, MysqlDialect, OracleDialect, SqliteDialect, get_dialect_for_scheme
from .errors import DialectError, ErrorKind, ServiceFailure, UnsupportedDialectError, native_error_code
from .flush import DurabilityFlusher
from .pool_config import PoolConfig, build_pool_config
from .settings import ServerSettings
from .versions import CURRENT_VERSIONS, VersionInfo, config_rows
