# src/tasktrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Paths default to a local, gitignored data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTRACK"

DEFAULT_HISTORY_LIMIT = 10


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

    # ---- Storage ----
    persist: bool
    data_dir: Path
    save_path: Path

    # ---- Tuning ----
    history_limit: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktrack")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        persist = _env_bool(_k("PERSIST"), True)
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktrack"))
        save_path = _env_path(_k("SAVE_PATH"), data_dir / "tasks.csv")

        history_limit = _env_int(_k("HISTORY_LIMIT"), DEFAULT_HISTORY_LIMIT)
        if history_limit < 1:
            history_limit = DEFAULT_HISTORY_LIMIT

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            persist=persist,
            data_dir=data_dir,
            save_path=save_path,
            history_limit=history_limit,
        )


load_dotenv(override=False)

SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
