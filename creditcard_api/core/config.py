"""
Configuration helpers for the credit card API.

Settings are read from environment variables once and cached, so routers,
repositories and scripts never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    log_level: str
    sql_echo: bool
    auto_create_tables: bool
    cors_origins: tuple[str, ...]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(item.strip().rstrip("/") for item in value.split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./creditcards.db").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
    )
