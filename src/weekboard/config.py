# src/weekboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a safe local default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "WEEKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
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

    # ---- Storage ----
    data_dir: Path
    storage_path: Path
    storage_key: str

    # ---- Weekly reset ----
    reset_check_interval_seconds: float
    catch_up_reset: bool

    # ---- Console ----
    celebrate: bool
    console_color: bool

    @staticmethod
    def from_env() -> "Settings":
        _load_dotenv_if_available()

        app_name = _env(_k("APP_NAME"), "weekboard") or "weekboard"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/weekboard"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.json")
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        reset_check_interval_seconds = max(1.0, _env_float(_k("RESET_CHECK_INTERVAL"), 60.0))
        catch_up_reset = _env_bool(_k("CATCH_UP_RESET"), False)

        celebrate = _env_bool(_k("CELEBRATE"), True)
        # NO_COLOR (https://no-color.org) wins over our own flag.
        console_color = _env_bool(_k("COLOR"), True) and os.getenv("NO_COLOR") is None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            reset_check_interval_seconds=reset_check_interval_seconds,
            catch_up_reset=catch_up_reset,
            celebrate=celebrate,
            console_color=console_color,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
