# src/motion_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the API key is checked when the client is built).
- The workspace override is an explicit, opt-in setting, never a silent constant.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .api.client import BASE_URL as DEFAULT_BASE_URL
from .api.models import Preferences

ENV_PREFIX = "MOTION"

DEFAULT_LABEL_PRESETS = [
    "House",
    "Personal",
    "St Faith's",
    "Westside",
    "Goals",
    "BAU",
    "ACA",
    "Job hunt",
    "Boys",
    "Board",
]


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: List[str], sep: str = ",") -> List[str]:
    # Label names may contain spaces ("Job hunt"), so only `sep` splits.
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(sep) if p.strip()]


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

    # ---- Motion API ----
    api_key: Optional[str]
    base_url: str

    # ---- Workspace ----
    workspace_id: str
    workspace_override: bool
    workspace_override_id: Optional[str]

    # ---- Forms ----
    label_presets: List[str]

    def preferences(self) -> Preferences:
        """The user-facing preference pair handed to the API client."""
        return Preferences(api_key=self.api_key or "", workspace_id=self.workspace_id)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "motion-tasks") or "motion-tasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/motion"))

        api_key = _first_env(_k("API_KEY"), default=None)
        base_url = _env(_k("BASE_URL"), DEFAULT_BASE_URL).rstrip("/")

        workspace_id = (_env(_k("WORKSPACE_ID"), "")).strip()
        workspace_override = _env_bool(_k("WORKSPACE_OVERRIDE"), False)
        workspace_override_id = (_first_env(_k("WORKSPACE_OVERRIDE_ID"), default="") or "").strip() or None

        label_presets = _env_list(_k("LABEL_PRESETS"), DEFAULT_LABEL_PRESETS)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_key=api_key,
            base_url=base_url,
            workspace_id=workspace_id,
            workspace_override=workspace_override,
            workspace_override_id=workspace_override_id,
            label_presets=label_presets,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
