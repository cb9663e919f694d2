"""Application settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from a local .env file when present."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_name: str = "RoomSense Layout Copilot"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    default_quiet_vs_access: int = 65
    default_avoid_elevator: bool = True
    default_premium_tolerance: int = 6
    default_floor_number: int = 3
    default_mode: str = "guest"

    recommendation_top_n: int = 3
    hallway_min_slots: int = 8


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        app_name=os.getenv("ROOMSENSE_APP_NAME", "RoomSense Layout Copilot"),
        app_version=os.getenv("ROOMSENSE_APP_VERSION", "0.1.0"),
        log_level=os.getenv("ROOMSENSE_LOG_LEVEL", "INFO"),
        default_quiet_vs_access=_env_int("ROOMSENSE_DEFAULT_QUIET_VS_ACCESS", 65),
        default_avoid_elevator=_env_bool("ROOMSENSE_DEFAULT_AVOID_ELEVATOR", True),
        default_premium_tolerance=_env_int("ROOMSENSE_DEFAULT_PREMIUM_TOLERANCE", 6),
        default_floor_number=_env_int("ROOMSENSE_DEFAULT_FLOOR", 3),
        default_mode=os.getenv("ROOMSENSE_DEFAULT_MODE", "guest"),
        recommendation_top_n=_env_int("ROOMSENSE_RECOMMENDATION_TOP_N", 3),
        hallway_min_slots=_env_int("ROOMSENSE_HALLWAY_MIN_SLOTS", 8),
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance for the process."""
    return _build_settings()
