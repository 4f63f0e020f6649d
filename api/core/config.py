"""
Environment-driven settings.

Every accessor returns a development-friendly default so the API starts with
no configuration at all (SQLite file in the working directory).
"""

from __future__ import annotations

import logging
import os

SQLITE = "sqlite"
POSTGRES = "postgres"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def app_env() -> str:
    return _env_str("APP_ENV", "development").lower()


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def db_backend() -> str:
    explicit = os.environ.get("DB_BACKEND", "").strip().lower()
    if explicit in {SQLITE, POSTGRES}:
        return explicit
    if database_url().startswith(("postgres://", "postgresql://")):
        return POSTGRES
    return SQLITE


def sqlite_path() -> str:
    return _env_str("SQLITE_PATH", "app.db")


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def command_timeout() -> int:
    return max(1, _env_int("DB_COMMAND_TIMEOUT", 30))


def bcrypt_rounds() -> int:
    # bcrypt rejects cost factors outside 4..31.
    return min(31, max(4, _env_int("BCRYPT_ROUNDS", 10)))


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
