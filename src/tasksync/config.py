# src/tasksync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- Built lazily on first get_settings() call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKSYNC"

DEFAULT_API_BASE_URL = "http://10.0.2.2:3000/api"


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


def _env_float(name: str, default: float | None) -> float | None:
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
    data_dir: Path

    # ---- Remote task service ----
    api_base_url: str
    tasks_path: str
    request_timeout: float | None
    api_token: str | None

    # ---- Behaviour ----
    fetch_on_start: bool

    def request_headers(self) -> dict[str, str]:
        if not self.api_token:
            return {}
        return {"Authorization": f"Bearer {self.api_token}"}

    @classmethod
    def from_env(cls) -> Settings:
        app_name = _env(_k("APP_NAME"), "tasksync")
        log_level = _env(_k("LOG_LEVEL"), "INFO").upper()
        data_dir = _env_path(_k("DATA_DIR"), Path(".local") / "tasksync")

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL
        tasks_path = _env(_k("TASKS_PATH"), "/tasks").strip() or "/tasks"

        # 0 or unset: no client-side timeout.
        request_timeout = _env_float(_k("REQUEST_TIMEOUT_SECONDS"), None)
        if request_timeout is not None and request_timeout <= 0:
            request_timeout = None

        api_token = _env(_k("API_TOKEN")).strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url,
            tasks_path=tasks_path,
            request_timeout=request_timeout,
            api_token=api_token,
            fetch_on_start=_env_bool(_k("FETCH_ON_START"), True),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
