"""Canonical error kinds, native code extraction, and the package's exceptions."""

import enum
from typing import Any


class ErrorKind(enum.Enum):
    """Backend-independent classification of a failed statement."""

    DEADLOCK_DETECTED = "deadlock_detected"
    DUPLICATE_ROW = "duplicate_row"
    FOREIGN_KEY_NO_PARENT = "foreign_key_no_parent"
    FOREIGN_KEY_CHILD_EXISTS = "foreign_key_child_exists"
    NO_SUCH_DATABASE = "no_such_database"
    NO_SUCH_TABLE = "no_such_table"
    TABLE_FULL = "table_full"


class DialectError(Exception):
    """Base for errors raised by dbdialect."""
    pass


class UnsupportedDialectError(DialectError, ValueError):
    """Raised when no dialect handles the requested scheme."""
    pass


class ServiceFailure(DialectError):
    """A driver failure surfaced to the caller, tagged with its canonical kind (if any)."""

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.kind = kind


def native_error_code(error: Any) -> int | str | None:
    """Return the backend-native code carried by a driver exception.

    Bare ``int``/``str`` codes are returned as is. For exceptions, the first
    argument is checked for a ``code`` attribute (oracledb) or an integer value
    (PyMySQL), then ``errno`` (mysql-connector), ``sqlite_errorcode`` (sqlite3)
    and ``code``. Returns None when nothing usable is found, and for OS-level
    errors, whose ``errno`` is not a database code.
    """
    if isinstance(error, bool):
        return None
    if isinstance(error, (int, str)):
        return error
    if isinstance(error, OSError):
        return None
    args = getattr(error, "args", ())
    if args:
        first = args[0]
        code = getattr(first, "code", None)
        if isinstance(code, int) and not isinstance(code, bool):
            return code
        if isinstance(first, int) and not isinstance(first, bool):
            return first
    for attribute in ("errno", "sqlite_errorcode", "code"):
        code = getattr(error, attribute, None)
        if isinstance(code, (int, str)) and not isinstance(code, bool):
            return code
    return None
