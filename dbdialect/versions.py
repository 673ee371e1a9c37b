"""Version strings handed to the tooling that writes the bootstrap config rows."""

from pydantic import BaseModel, ConfigDict


class VersionInfo(BaseModel):
    """Schema, index and redo log versions recorded in the ``config`` table."""

    model_config = ConfigDict(frozen=True)

    db_version: str
    index_version: str
    redolog_version: str


CURRENT_VERSIONS = VersionInfo(db_version="111", index_version="2", redolog_version="1.50")


def config_rows(versions: VersionInfo = CURRENT_VERSIONS) -> list[tuple[str, str, str]]:
    """Return ``(name, value, description)`` rows, in insertion order."""
    return [
        ("db.version", versions.db_version, "db schema version"),
        ("index.version", versions.index_version, "index version"),
        ("redolog.version", versions.redolog_version, "redolog version"),
    ]
