# -*- coding: utf-8 -*-
"""storage/project_paths.py

Project file naming helpers (no I/O).
"""

from __future__ import annotations

import os
import re
from datetime import date
from typing import Any, Dict, Optional

from core.keys import ProjectKeys as K


PROJECT_EXT = ".json"
DEFAULT_BASENAME = "electrical-load-calc"


def norm_project_path(folder: str, filename: str, ext: str = PROJECT_EXT) -> str:
    """Build a normalized project path.

    - ``filename`` may come with or without the extension.
    """
    folder = (folder or "").strip()
    filename = (filename or "").strip()
    if not folder or not filename:
        return ""

    ext = ext if ext.startswith(".") else f".{ext}"
    base, fext = os.path.splitext(filename)
    if fext.lower() == ext.lower():
        filename = base
    return os.path.join(folder, f"{filename}{ext}")


def _safe_name(name: str) -> str:
    return re.sub(r'[\\/:*?"<>|]+', "_", name).strip()


def default_export_filename(data: Dict[str, Any], today: Optional[date] = None, ext: str = PROJECT_EXT) -> str:
    """``{projectName or electrical-load-calc}_{YYYY-MM-DD}.json``"""
    meta = data.get(K.METADATA) if isinstance(data.get(K.METADATA), dict) else {}
    name = _safe_name(str(meta.get(K.PROJECT_NAME) or "")) or DEFAULT_BASENAME
    today = today or date.today()
    return f"{name}_{today.isoformat()}{ext}"
