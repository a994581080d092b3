"""
Configuration helpers for the jsonboard server.

Settings are read once from environment variables so that routers/services
never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_file: Path
    create_db_if_missing: bool
    static_dir: Path
    cors_origins: tuple
    host: str
    port: int
    log_level: str


def _int(value: str | None, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _origins(value: str | None) -> tuple:
    raw = value if value is not None else "*"
    return tuple(origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip())


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_file=Path(os.getenv("JSONBOARD_DB_FILE") or PROJECT_ROOT / "db.json"),
        create_db_if_missing=_bool(os.getenv("JSONBOARD_CREATE_DB"), True),
        static_dir=Path(os.getenv("JSONBOARD_STATIC_DIR") or PROJECT_ROOT / "public"),
        cors_origins=_origins(os.getenv("JSONBOARD_CORS_ORIGINS")),
        host=os.getenv("JSONBOARD_HOST", "127.0.0.1"),
        port=_int(os.getenv("JSONBOARD_PORT", "3000"), 3000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
