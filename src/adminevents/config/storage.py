"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "adminevents"
DEFAULT_DB_FILENAME: Final[str] = "adminevents.db"

# Reads spanning several queries must share one snapshot.
SNAPSHOT_ISOLATION_LEVELS: Final[frozenset[str]] = frozenset(
    {"REPEATABLE READ", "SERIALIZABLE", "SNAPSHOT"}
)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    isolation_level: str | None = None

    def __post_init__(self) -> None:
        if self.isolation_level is None:
            return
        if self.isolation_level not in SNAPSHOT_ISOLATION_LEVELS:
            supported = ", ".join(sorted(SNAPSHOT_ISOLATION_LEVELS))
            raise ConfigurationError(
                f"Unsupported isolation level {self.isolation_level!r} (expected one of: "
                f"{supported})"
            )

    @property
    def is_sqlite(self) -> bool:
        return self.uri.startswith("sqlite")


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("ADMINEVENTS_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    raw_level = os.getenv("DATABASE_ISOLATION_LEVEL")
    isolation_level = raw_level.strip().upper() if raw_level and raw_level.strip() else None
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri, isolation_level=isolation_level)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri(), isolation_level=isolation_level)
