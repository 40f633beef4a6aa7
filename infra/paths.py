# -*- coding: utf-8 -*-
"""
Centralized path resolver for per-user writable data (no admin required).

``LOADCALC_HOME`` overrides the base directory (used by tests and scripts).
"""
from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "LoadCalc"
HOME_ENV = "LOADCALC_HOME"


def user_data_dir() -> Path:
    """
    Per-user writable directory. Prefer LOCALAPPDATA (non-roaming) on Windows,
    XDG_DATA_HOME elsewhere, then the home folder.
    """
    override = os.getenv(HOME_ENV)
    if override:
        return ensure_dir(Path(override))
    base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or os.getenv("XDG_DATA_HOME") or str(Path.home())
    return ensure_dir(Path(base) / APP_NAME)


def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def logs_dir() -> Path:
    return ensure_dir(user_data_dir() / "logs")


def projects_dir() -> Path:
    return ensure_dir(user_data_dir() / "projects")
