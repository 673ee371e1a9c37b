"""Base Dialect type: subclasses declare their tables and implement connect() for each engine."""

from abc import ABC, abstractmethod
from contextlib import closing
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping

from pydantic import BaseModel

from dbdialect.capability import Capability
from dbdialect.errors import ErrorKind, ServiceFailure, native_error_code
from dbdialect.pool_config import PoolConfig, build_pool_config
from dbdialect.settings import ServerSettings

FRAGMENTS: tuple[str, ...] = (
    "index_hint",
    "null_coalesce",
    "bit_and",
    "bit_and_not",
    "concat",
    "sign",
    "lpad",
    "limit",
)
"""Fragment builders every dialect's F table must provide."""


def quote_literal(value: str) -> str:
    """Quote ``value`` as a SQL string literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


def check_count(name: str, value: int) -> int:
    """Return ``value`` if it is a non-negative int, else raise ValueError."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"`{name}` must be a non-negative integer, got {value!r}")
    return value


def check_pad(pad: str) -> str:
    if not isinstance(pad, str) or not pad:
        raise ValueError(f"pad must be a non-empty string, got {pad!r}")
    return pad


def present(fields: tuple[str | None, ...]) -> list[str]:
    """Drop None entries from a concat() argument list."""
    return [field for field in fields if field is not None]


def sign(field: str) -> str:
    return f"SIGN({field})"


def lpad(field: str, width: int, pad: str) -> str:
    return f"LPAD({field}, {check_count('width', width)}, {quote_literal(check_pad(pad))})"


class _DialectF:
    """Helper for dialect.f: __getattr__ returns the callable from the dialect's F config."""

    __slots__ = ("_dialect",)

    def __init__(self, dialect: "Dialect") -> None:
        self._dialect = dialect

    def __getattr__(self, name: str) -> Callable[..., str]:
        F = type(self._dialect).F  # pylint: disable=invalid-name
        if name in F:
            return F[name]
        raise AttributeError(name)


class Dialect(BaseModel, ABC):
    """Immutable strategy object routing every dialect-sensitive decision for one backend.

    Subclasses only fill in class-level tables (capabilities, error codes,
    fragment builders, pool defaults, maintenance SQL) and implement connect().
    """

    model_config = {"frozen": True}

    NAME: ClassVar[str] = ""
    DISPLAY_NAME: ClassVar[str] = ""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ()
    """URL schemes this dialect handles (e.g. ('mysql',))."""

    ALIASES: ClassVar[tuple[str, ...]] = ()
    """Logical backend names also resolving to this dialect (e.g. ('default',))."""

    CAPABILITIES: ClassVar[Mapping[Capability, bool]] = MappingProxyType({})
    """Supported features; anything missing is unsupported."""

    ERROR_CODES: ClassVar[Mapping[ErrorKind, int | str]] = MappingProxyType({})
    """Native error code per canonical error kind, at most one each."""

    F: ClassVar[dict[str, Callable[..., str]]] = {}
    """Dialect-specific SQL text builders. Access via dialect.f.concat(a, b, c)."""

    DRIVER: ClassVar[str] = ""
    DEFAULT_PORT: ClassVar[int | None] = None
    SUPPORTS_STATS_CALLBACK: ClassVar[bool] = False
    PROPERTY_PREFIX: ClassVar[str] = ""
    """Override keys starting with this prefix become driver properties."""
    DEFAULT_PROPERTIES: ClassVar[Mapping[str, str]] = MappingProxyType({})

    DATABASE_EXISTS_SQL: ClassVar[str] = ""
    FLUSH_STATEMENTS: ClassVar[tuple[str, ...]] = ()
    """Statements forcing the backend to flush its redo/transaction log."""

    def __str__(self) -> str:
        return self.DISPLAY_NAME or type(self).__name__

    @property
    def f(self) -> _DialectF:
        """Access dialect-specific fragment builders by name (e.g. self.f.limit(10, 5))."""
        return _DialectF(self)

    # capabilities

    def supports_capability(self, capability: Capability) -> bool:
        return self.CAPABILITIES.get(capability, False)

    # errors

    def native_code(self, error: Any) -> int | str | None:
        """The native code ERROR_CODES is keyed on; see native_error_code."""
        return native_error_code(error)

    def classify_matches(self, error: Any, kind: ErrorKind) -> bool:
        """True if ``error`` carries the native code registered for ``kind``."""
        code = self.ERROR_CODES.get(kind)
        return code is not None and self.native_code(error) == code

    def classify(self, error: Any) -> ErrorKind | None:
        """Return the canonical kind of ``error``, or None if its code is unmapped."""
        code = self.native_code(error)
        if code is None:
            return None
        for kind, registered in self.ERROR_CODES.items():
            if registered == code:
                return kind
        return None

    # pool configuration

    def root_url(self, settings: ServerSettings) -> str:
        port = settings.port or self.DEFAULT_PORT
        return f"{self.SUPPORTED_SCHEMA[0]}://{settings.host}:{port}/"

    def build_pool_config(self, settings: ServerSettings, overrides: Mapping[str, str] | None = None) -> PoolConfig:
        return build_pool_config(self, settings, overrides)

    @abstractmethod
    def connect(self, config: PoolConfig) -> Any:
        """Return a new raw driver connection for the given pool configuration.

        The return value is engine-specific (e.g. sqlite3.Connection, pymysql.Connection).
        """
        ...  # pylint: disable=unnecessary-ellipsis

    def streaming_cursor(self, connection: Any, settings: ServerSettings) -> Any:
        """Return a cursor suited to streaming large result sets, if enabled in settings."""
        return connection.cursor()

    # maintenance

    def database_exists(self, connection: Any, name: str) -> bool:
        """Whether the schema/database ``name`` exists on the server ``connection`` points at.

        Raises:
            ServiceFailure: if the catalog query itself fails.
        """
        try:
            with closing(connection.cursor()) as cursor:
                cursor.execute(self.DATABASE_EXISTS_SQL, (name,))
                row = cursor.fetchone()
        except Exception as error:
            raise ServiceFailure(
                "Unable to determine whether database exists",
                kind=self.classify(error),
            ) from error
        return bool(row) and row[0] > 0
