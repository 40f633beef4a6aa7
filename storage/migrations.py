# -*- coding: utf-8 -*-
"""storage/migrations.py

Project snapshot migrations between file versions.

Rules:
- PURE functions: take a dict, return a new dict (no I/O).
- No engineering calculations; data compatibility only.

Notes:
- Migrations must be idempotent: applying one twice changes nothing.
- Files without ``_meta.version`` are version 1 (the first release format).
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict

from core.keys import ProjectKeys as K
from domain.parse import to_float
from storage.project_schema import normalize_project
from storage.schema import PROJECT_VERSION

log = logging.getLogger(__name__)


def _ensure_dict(x: Any) -> Dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _set_version(d: Dict[str, Any], version: int) -> None:
    meta = _ensure_dict(d.get(K.META))
    meta["version"] = int(version)
    d[K.META] = meta


def _derive_backup_mode(sec: Dict[str, Any]) -> None:
    if sec.get(K.BACKUP_MODE):
        return
    days = to_float(sec.get(K.BACKUP_DAYS), 1.0) or 1.0
    if days in (1.0, 2.0):
        sec[K.BACKUP_MODE] = str(int(days))
    else:
        sec[K.BACKUP_MODE] = "custom"
        sec[K.CUSTOM_DAYS] = days


def migrate_v1_to_v2(data: Dict[str, Any]) -> Dict[str, Any]:
    """v1 -> v2

    - backupDays only -> backupMode ("1" | "2" | "custom") + customDays
    - fills tandemSlotsUsed, tandemPolicy, ev.chargerCount, partialHome.selections
    """
    d = deepcopy(data)
    battery = _ensure_dict(d.get(K.BATTERY))
    for which in (K.WHOLE_HOME, K.PARTIAL_HOME):
        sec = _ensure_dict(battery.get(which))
        _derive_backup_mode(sec)
        battery[which] = sec
    d[K.BATTERY] = battery

    d = normalize_project(d)
    _set_version(d, 2)
    return d


_MIGRATIONS = {
    1: migrate_v1_to_v2,
}


def migrate_project_dict(data: Dict[str, Any], *, from_version: int, to_version: int) -> Dict[str, Any]:
    """Migrate a project from from_version up to to_version."""
    d = deepcopy(data)
    v = int(from_version or 1)
    target = int(to_version)
    while v < target:
        fn = _MIGRATIONS.get(v)
        if fn is None:
            log.warning("no migration from v%d; stamping v%d", v, target)
            break
        d = fn(d)
        v += 1
    _set_version(d, target)
    return d


def project_version(data: Any) -> int:
    meta = _ensure_dict(_ensure_dict(data).get(K.META))
    try:
        return int(meta.get("version", 1) or 1)
    except (TypeError, ValueError):
        return 1


def upgrade_project_dict(data: Any, *, to_version: int = PROJECT_VERSION) -> Dict[str, Any]:
    """Upgrade any loaded payload to ``to_version``.

    Payloads newer than ``to_version`` are returned unchanged (copied).
    """
    if not isinstance(data, dict):
        data = {}
    from_ver = project_version(data)
    if from_ver >= int(to_version):
        return deepcopy(data)
    return migrate_project_dict(data, from_version=from_ver, to_version=int(to_version))
