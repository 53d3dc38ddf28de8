# src/taskpad/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a usable default; bad values fall back to the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKPAD"

STORE_BACKENDS = ("sqlite", "json")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


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

    # ---- Storage (local, ignored by git) ----
    data_dir: Path
    store_backend: str
    prefs_db_path: Path
    prefs_json_path: Path

    # ---- Console front-end ----
    confirm_delete: bool
    color_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Task Manager").strip() or "Task Manager"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpad"))
        store_backend = _env_choice(_k("STORE_BACKEND"), STORE_BACKENDS, "sqlite")
        prefs_db_path = _env_path(_k("PREFS_DB_PATH"), data_dir / "prefs.sqlite3")
        prefs_json_path = _env_path(_k("PREFS_JSON_PATH"), data_dir / "prefs.json")

        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)
        # NO_COLOR is the cross-tool convention; honor it even without our prefix.
        color_enabled = _env_bool(_k("COLOR"), os.getenv("NO_COLOR") is None)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_backend=store_backend,
            prefs_db_path=prefs_db_path,
            prefs_json_path=prefs_json_path,
            confirm_delete=confirm_delete,
            color_enabled=color_enabled,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
