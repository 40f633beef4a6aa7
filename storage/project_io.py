# -*- coding: utf-8 -*-
"""Project JSON I/O helpers.

These functions implement the actual read/write of project files. The
snapshot is written as-is (UI bookkeeping keys included); only
``_meta.version`` and ``metadata.updatedAt`` are stamped on save.
"""
from __future__ import annotations

import json
import logging
import time
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.keys import ProjectKeys as K
from storage.migrations import upgrade_project_dict
from storage.schema import PROJECT_VERSION

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def stamp_for_save(data: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    d = deepcopy(data)
    meta = d.get(K.META) if isinstance(d.get(K.META), dict) else {}
    meta["version"] = PROJECT_VERSION
    d[K.META] = meta
    md = d.get(K.METADATA) if isinstance(d.get(K.METADATA), dict) else {}
    md[K.UPDATED_AT] = (now or datetime.now(timezone.utc)).isoformat().replace("+00:00", "Z")
    d[K.METADATA] = md
    return d


def dumps_project(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def loads_project(text: str) -> Dict[str, Any]:
    """Parse and upgrade a project payload. Raises ValueError on bad input."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("project file must contain a JSON object")
    return upgrade_project_dict(data, to_version=PROJECT_VERSION)


def save_project(data: Dict[str, Any], file_path: PathLike, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Write the snapshot; returns the stamped copy that was written."""
    if not file_path:
        raise ValueError("File path is not defined.")
    try:
        t0 = time.perf_counter()
        stamped = stamp_for_save(data, now)
        payload = dumps_project(stamped)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        log.debug("Project serialize: %.1f ms, %d bytes", elapsed_ms, len(payload.encode("utf-8")))
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
        log.info("Project saved: %s (%d loads)", path, len(stamped.get(K.LOADS) or []))
        return stamped
    except (OSError, TypeError, ValueError) as e:
        raise IOError(f"Failed to save project: {e}") from e


def load_project(file_path: PathLike) -> Dict[str, Any]:
    try:
        text = Path(file_path).read_text(encoding="utf-8")
        data = loads_project(text)
    except (OSError, ValueError) as e:
        raise IOError(f"Failed to load project: {e}") from e
    log.info("Project loaded: %s", file_path)
    return data
