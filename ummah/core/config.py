"""
Configuration helpers for the Ummah storage layer.

Exposes a Settings object read from environment variables (data directory,
demo seeding, log level) so repositories/routers do not fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    seed_demo_data: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    data_dir = (os.getenv("DATA_DIR") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=Path(data_dir) if data_dir else Path.cwd() / "data",
        seed_demo_data=_bool(os.getenv("SEED_DEMO_DATA"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
