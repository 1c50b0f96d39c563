"""
Environment-driven settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote


DEFAULT_PORT = 3001
DEFAULT_DB_PORT = 5432


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    url = _env_str("DATABASE_URL")
    if url:
        return url

    # Fall back to discrete DB_* variables.
    host = _env_str("DB_HOST")
    name = _env_str("DB_NAME")
    if not host or not name:
        raise RuntimeError("DATABASE_URL is not set (or DB_HOST and DB_NAME).")

    user = quote(_env_str("DB_USER"), safe="")
    password = quote(_env_str("DB_PASSWORD"), safe="")
    port = _env_int("DB_PORT", DEFAULT_DB_PORT)
    auth = f"{user}:{password}@" if password else (f"{user}@" if user else "")
    return f"postgresql://{auth}{host}:{port}/{name}"


def _csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_command_timeout: int = 30

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def load_settings() -> Settings:
    return Settings(
        environment=_env_str("APP_ENV", "development"),
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        cors_origins=_csv(_env_str("CORS_ORIGINS", "*")) or ("*",),
        db_pool_min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        db_command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
    )
