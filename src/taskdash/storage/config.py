"""User settings persisted as JSON next to the session file."""

from __future__ import annotations

import json
import os
from typing import Any

from loguru import logger

from .paths import SETTINGS_FILE, atomic_write

API_URL_ENV = "TASKDASH_API_URL"

DEFAULTS: dict[str, Any] = {
    "api_url": "http://localhost:8080/api/v1",
    "page_limit": 10,
    "timeout_seconds": 30.0,
    "banner_timeout_seconds": 7.0,
    "debug": False,
}


class AppSettings:
    """Read and write the settings file.

    Unknown or missing keys fall back to :data:`DEFAULTS`; a corrupt file
    is treated as empty.  ``TASKDASH_API_URL`` overrides ``api_url``.
    """

    @staticmethod
    def load() -> dict[str, Any]:
        settings = dict(DEFAULTS)
        if SETTINGS_FILE.exists():
            try:
                stored = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
                if isinstance(stored, dict):
                    settings.update(stored)
            except (OSError, ValueError) as exc:
                logger.warning(f"Failed to read settings from {SETTINGS_FILE}: {exc}")
        env_url = os.getenv(API_URL_ENV, "").strip()
        if env_url:
            settings["api_url"] = env_url
        return settings

    @staticmethod
    def get(key: str, default: Any = None) -> Any:
        settings = AppSettings.load()
        if key in settings:
            return settings[key]
        return default

    @staticmethod
    def set(key: str, value: Any) -> None:
        stored: dict[str, Any] = {}
        if SETTINGS_FILE.exists():
            try:
                loaded = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
                stored = loaded if isinstance(loaded, dict) else {}
            except (OSError, ValueError):
                stored = {}
        stored[key] = value
        atomic_write(SETTINGS_FILE, json.dumps(stored, indent=2))
