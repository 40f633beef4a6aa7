# -*- coding: utf-8 -*-
"""
User settings stored in the per-user writable folder (JSON).

Unknown keys are preserved; missing keys fall back to defaults on read.
A corrupt file is replaced by the defaults.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from infra.paths import projects_dir, user_data_dir

SETTINGS_FILENAME = "loadcalc_settings.json"
log = logging.getLogger(__name__)


def settings_file() -> Path:
    return user_data_dir() / SETTINGS_FILENAME


def _defaults() -> Dict[str, Any]:
    return {
        "projects_dir": str(projects_dir()),
        "default_square_footage": 1500,
        "log_level": "INFO",
    }


def load_settings() -> Dict[str, Any]:
    defaults = _defaults()
    path = settings_file()
    if not path.exists():
        save_settings(defaults.copy())
        return defaults.copy()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        # Recover from corruption gracefully
        log.warning("Settings file unreadable, restoring defaults: %s", path, exc_info=True)
        save_settings(defaults.copy())
        return defaults.copy()

    merged = defaults.copy()
    if isinstance(data, dict):
        merged.update({k: v for k, v in data.items() if v is not None})
    return merged


def save_settings(data: Dict[str, Any]) -> None:
    path = settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def update_settings(**changes: Any) -> Dict[str, Any]:
    s = load_settings()
    s.update(changes)
    save_settings(s)
    return s
