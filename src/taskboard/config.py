# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Every value has a sensible local default, so `taskboard` runs out of the box.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool
    http_enabled: bool

    # ---- HTTP API ----
    http_host: str
    http_port: int
    cors_origins: List[str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    log_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        http_enabled = _env_bool(_k("HTTP_ENABLED"), True)

        http_host = _env(_k("HTTP_HOST"), "127.0.0.1").strip() or "127.0.0.1"
        http_port = _env_int(_k("HTTP_PORT"), 5000)
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["*"])

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))
        log_dir = _env_path(_k("LOG_DIR"), data_dir / "logs")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            http_enabled=http_enabled,
            http_host=http_host,
            http_port=http_port,
            cors_origins=cors_origins,
            data_dir=data_dir,
            log_dir=log_dir,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env for everything; use config_local.py only for quick connector toggles.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "HTTP_ENABLED"):
        object.__setattr__(SETTINGS, "http_enabled", bool(_config_local.HTTP_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "HTTP_PORT"):
        object.__setattr__(SETTINGS, "http_port", int(_config_local.HTTP_PORT))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS
