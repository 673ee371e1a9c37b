"""Trusted server settings, read from ``DBDIALECT_*`` environment variables."""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Where the database lives and who we connect as.

    Credentials only ever come from here; the prefixed driver-property
    overrides handled by ``build_pool_config`` cannot replace them.
    """

    model_config = SettingsConfigDict(env_prefix="DBDIALECT_", frozen=True)

    backend: str = "mysql"
    host: str = "localhost"
    port: int | None = Field(default=None, gt=0)
    """Falls back to the dialect's ``DEFAULT_PORT`` when unset."""
    database: str = "store"
    user: str = "store"
    password: SecretStr = SecretStr("")
    results_streaming_enabled: bool = True
    flush_fallback_wait: float = Field(default=3.0, ge=0, allow_inf_nan=False)
