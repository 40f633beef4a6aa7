# -*- coding: utf-8 -*-

from __future__ import annotations

import json

from infra.paths import logs_dir, projects_dir, user_data_dir
from infra.settings import load_settings, settings_file, update_settings


def test_user_dirs_follow_home_override(user_home):
    assert user_data_dir() == user_home
    assert projects_dir().is_dir()
    assert logs_dir().is_dir()


def test_first_load_writes_defaults(user_home):
    s = load_settings()
    assert s["default_square_footage"] == 1500
    assert settings_file().exists()


def test_update_keeps_unknown_keys(user_home):
    settings_file().parent.mkdir(parents=True, exist_ok=True)
    settings_file().write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    s = update_settings(log_level="DEBUG")
    assert s["theme"] == "dark"
    assert load_settings()["log_level"] == "DEBUG"


def test_corrupt_settings_restore_defaults(user_home):
    settings_file().parent.mkdir(parents=True, exist_ok=True)
    settings_file().write_text("not json", encoding="utf-8")
    assert load_settings()["log_level"] == "INFO"
    assert json.loads(settings_file().read_text(encoding="utf-8"))["log_level"] == "INFO"
