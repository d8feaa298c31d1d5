from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from landingstudio import config
from landingstudio.config import DEFAULT_SETTINGS, SettingsManager


def test_missing_file_loads_defaults(tmp_path: Path) -> None:
    sm = SettingsManager(tmp_path / "settings.json")
    for key, value in DEFAULT_SETTINGS.items():
        assert sm.get(key) == value


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    sm = SettingsManager(path)
    assert sm.get("preview_viewport") == "desktop"


def test_set_persists_values(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    SettingsManager(path).set("last_export_dir", "/tmp/out")
    assert SettingsManager(path).get("last_export_dir") == "/tmp/out"


def test_data_dir_can_be_overridden(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "appdata"
    monkeypatch.setenv(config.DATA_DIR_ENV, str(target))
    assert config.app_data_dir() == target
    assert target.is_dir()
    assert config.settings_path() == target / "settings.json"


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
    assert config.log_level() == "DEBUG"
    monkeypatch.delenv(config.LOG_LEVEL_ENV)
    assert config.log_level() == "INFO"
