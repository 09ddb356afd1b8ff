"""
Configuration helpers for the registry.

Repositories read the store location from here instead of touching
os.environ directly, so tests can point them at a throwaway database.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    sqlite_db_path: str
    sql_echo: bool
    log_level: str
    log_file: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        sqlite_db_path=(os.getenv("SQLITE_DB_PATH") or "").strip(),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=(os.getenv("LOG_FILE") or "").strip(),
    )
