"""Best-effort "flush the redo log to disk" over a dedicated maintenance connection."""

import logging
import math
import threading
import time
from contextlib import closing
from typing import Any, Callable, Mapping

from .dialects.base import Dialect
from .pool_config import build_pool_config
from .settings import ServerSettings

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_WAIT = 3.0

# one flush at a time per process, whatever the dialect or connection source
_flush_lock = threading.Lock()


class DurabilityFlusher:

    def __init__(
        self,
        dialect: Dialect,
        connection_factory: Callable[[], Any],
        fallback_wait: float = DEFAULT_FALLBACK_WAIT,
    ):
        """
        Initialize the flusher.

        Args:
            dialect: Dialect providing the flush statements
            connection_factory: A callable returning a new maintenance connection;
                the flusher closes it when done
            fallback_wait: Seconds to wait when the flush cannot be confirmed

        Raises:
            ValueError: if fallback_wait is not a finite non-negative number
        """
        if not math.isfinite(fallback_wait) or fallback_wait < 0:
            raise ValueError(f"fallback_wait must be a finite, non-negative number of seconds, got {fallback_wait!r}")
        self._dialect = dialect
        self._connection_factory = connection_factory
        self._fallback_wait = fallback_wait

    @classmethod
    def from_settings(cls, dialect: Dialect, settings: ServerSettings, overrides: Mapping[str, str] | None = None):
        """Flusher opening its own maintenance connections from the pool configuration."""
        config = build_pool_config(dialect, settings, overrides)
        return cls(dialect, lambda: dialect.connect(config), fallback_wait=settings.flush_fallback_wait)

    def flush_to_disk(self) -> None:
        """
        Ask the backend to write its buffered log to durable storage.

        Never raises. Returns once the flush statements ran and committed, or
        after ``fallback_wait`` seconds when they could not be confirmed; the
        backend flushes on its own cadence, so the wait gives it time to catch up.
        A normal return is not proof of durability.
        """
        with _flush_lock:
            confirmed = False
            try:
                self._flush()
                confirmed = True
            except Exception:  # pylint: disable=broad-except
                logger.warning("ignoring error while forcing %s to flush its log to disk", self._dialect, exc_info=True)
            if not confirmed:
                logger.info("waiting %.1fs for %s to flush its log on its own", self._fallback_wait, self._dialect)
                time.sleep(self._fallback_wait)
            else:
                logger.debug("%s flushed its log to disk", self._dialect)

    def _flush(self):
        connection = self._connection_factory()
        try:
            with closing(connection.cursor()) as cursor:
                for statement in self._dialect.FLUSH_STATEMENTS:
                    cursor.execute(statement)
        finally:
            try:
                connection.commit()
            finally:
                _quiet_close(connection)


def _quiet_close(connection: Any):
    try:
        connection.close()
    except Exception:  # pylint: disable=broad-except
        logger.debug("error closing maintenance connection", exc_info=True)
