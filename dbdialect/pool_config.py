"""Connection pool bootstrap descriptor and the builder that assembles it."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .settings import ServerSettings

if TYPE_CHECKING:
    from .dialects.base import Dialect

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 100
POOL_SIZE_PROPERTY = "maxActive"
RESERVED_PROPERTIES = frozenset({"logger"})
POOL_PROPERTIES = frozenset({POOL_SIZE_PROPERTY})
CREDENTIAL_PROPERTIES = frozenset({"user", "password"})


class PoolConfig(BaseModel):
    """Everything a pool needs to open connections to one database.

    Built once per pool bootstrap by ``build_pool_config`` and never changed:
    the model is frozen and ``properties`` is a read-only mapping.
    """

    model_config = ConfigDict(frozen=True)

    driver: str
    root_url: str
    connection_url: str
    logger_url: str | None = None
    supports_stats_callback: bool = False
    pool_size: int = DEFAULT_POOL_SIZE
    properties: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("properties", mode="after")
    @classmethod
    def _freeze_properties(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def driver_kwargs(self) -> dict[str, Any]:
        """Driver properties as connect() keyword arguments.

        Pool-level keys are left out. Apart from credentials, ``"true"``/``"false"``
        become booleans and integer strings become ints.
        """
        return {
            key: value if key in CREDENTIAL_PROPERTIES else _coerce(value)
            for key, value in self.properties.items()
            if key not in POOL_PROPERTIES
        }


def _coerce(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(value)
    except ValueError:
        return value


def connector_properties(dialect: Dialect, overrides: Mapping[str, str]) -> dict[str, str]:
    """Merge the dialect's default properties with its prefixed overrides.

    Keys carrying ``dialect.PROPERTY_PREFIX`` are stripped of it; empty names
    and reserved names (``logger``, any case) are ignored. Later keys win.
    """
    properties = dict(dialect.DEFAULT_PROPERTIES)
    prefix = dialect.PROPERTY_PREFIX
    for key, value in overrides.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):]
        if not name or name.lower() in RESERVED_PROPERTIES:
            continue
        properties[name] = value
        shown = "****" if name.lower() in CREDENTIAL_PROPERTIES else value
        logger.info("Setting %s connector property: %s=%s", dialect.NAME, name, shown)
    return properties


def resolve_pool_size(value: str | None, default: int = DEFAULT_POOL_SIZE) -> int:
    """Parse a pool size override; anything but a positive integer keeps ``default``."""
    if value is None:
        return default
    digits = value.strip() if isinstance(value, str) else ""
    if not (digits.isascii() and digits.isdigit()):
        logger.warning("unable to parse '%s' pref %r; defaulting pool size to %d", POOL_SIZE_PROPERTY, value, default)
        return default
    size = int(digits)
    if size <= 0:
        logger.warning("'%s' pref must be positive, got %d; defaulting pool size to %d", POOL_SIZE_PROPERTY, size, default)
        return default
    return size


def build_pool_config(
    dialect: Dialect,
    settings: ServerSettings,
    overrides: Mapping[str, str] | None = None,
) -> PoolConfig:
    """Assemble the pool bootstrap descriptor for ``dialect``.

    Credentials are set from ``settings`` after the override scan, so an
    override such as ``<prefix>password`` can never replace them. A malformed
    ``maxActive`` degrades to the default pool size with a warning.
    """
    properties = connector_properties(dialect, overrides or {})
    properties["user"] = settings.user
    properties["password"] = settings.password.get_secret_value()

    pool_size = resolve_pool_size(properties.get(POOL_SIZE_PROPERTY))
    logger.debug("Setting connection pool size to %d", pool_size)

    root_url = dialect.root_url(settings)
    return PoolConfig(
        driver=dialect.DRIVER,
        root_url=root_url,
        connection_url=root_url + settings.database,
        logger_url=None,
        supports_stats_callback=dialect.SUPPORTS_STATS_CALLBACK,
        pool_size=pool_size,
        properties=properties,
    )
