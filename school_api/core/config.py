"""
Configuration helpers for the school records backend.

Routers/services should read settings through ``get_settings()`` instead of
fetching os.environ directly. Tests reset the cache with
``get_settings.cache_clear()`` after changing environment variables.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    data_dir: Path
    log_level: str
    cors_origins: tuple[str, ...]
    hash_user_passwords: bool
    api_title: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _origins(value: str | None) -> tuple[str, ...]:
        raw = value if value is not None else "*"
        return tuple(origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip())

    data_dir = (os.getenv("DATA_DIR") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_origins(os.getenv("CORS_ORIGINS")),
        hash_user_passwords=_bool(os.getenv("HASH_USER_PASSWORDS"), False),
        api_title=os.getenv("API_TITLE", "Projeto 01 - Implementação de API"),
    )
