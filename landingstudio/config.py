"""Application settings stored as JSON in the per-user data directory."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

APP_NAME = "LandingStudio"
DATA_DIR_ENV = "LANDINGSTUDIO_DATA_DIR"
LOG_LEVEL_ENV = "LANDINGSTUDIO_LOG_LEVEL"

DEFAULT_SETTINGS: Dict[str, str] = {
    "preview_viewport": "desktop",
    "last_export_dir": "",
    "default_font": "Inter",
    "default_layout": "centered",
    "live_preview": "0",
}


def app_data_dir() -> Path:
    """Return the platform-specific application data directory."""
    override = os.getenv(DATA_DIR_ENV)
    if override:
        target = Path(override)
    elif os.name == "nt":
        target = Path(os.getenv("LOCALAPPDATA", Path.home())) / APP_NAME
    else:
        target = Path.home() / ".local" / "share" / APP_NAME
    target.mkdir(parents=True, exist_ok=True)
    return target


def settings_path() -> Path:
    return app_data_dir() / "settings.json"


def log_level(default: str = "INFO") -> str:
    return os.getenv(LOG_LEVEL_ENV, default).upper()


class SettingsManager:
    """Very small settings helper storing JSON data."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else settings_path()
        self._settings: Dict[str, str] = {}
        self.load()

    def load(self) -> None:
        data: Dict[str, str] = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.warning("Ignoring unreadable settings file %s", self.path)
            else:
                if isinstance(loaded, dict):
                    data = {str(k): str(v) for k, v in loaded.items()}
        self._settings = {**DEFAULT_SETTINGS, **data}

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._settings, indent=2), encoding="utf-8")

    def get(self, key: str, default: str = "") -> str:
        return self._settings.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._settings[key] = value
        self.save()
