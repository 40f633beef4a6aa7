# -*- coding: utf-8 -*-
"""storage/project_schema.py

Pure functions that build and normalize the project snapshot shape.

Goals:
- Keep the "shape" of the JSON in one place for I/O, migrations and tests.
- No I/O here.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.keys import ProjectKeys as K
from domain.parse import to_float, to_int
from storage.schema import PROJECT_VERSION


def _iso(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat().replace("+00:00", "Z")


def default_battery_section(partial: bool = False) -> Dict[str, Any]:
    sec: Dict[str, Any] = {
        K.BACKUP_DAYS: 1,
        K.BACKUP_MODE: "1",
        K.CUSTOM_DAYS: 1,
        K.SOLAR_OFFSET_PERCENT: 0,
        K.SOLAR_OFFSET_ENABLED: False,
    }
    if partial:
        sec[K.ENABLED] = False
        sec[K.SELECTIONS] = {}
    else:
        sec[K.INCLUDE_EV] = False
    return sec


def create_initial_project(now: Optional[datetime] = None) -> Dict[str, Any]:
    """A new, empty project snapshot with the standard defaults."""
    stamp = _iso(now)
    return {
        K.META: {"version": PROJECT_VERSION},
        K.METADATA: {
            K.PROJECT_NAME: "",
            K.ADDRESS: "",
            K.SQUARE_FOOTAGE: "",
            K.CREATED_AT: stamp,
            K.UPDATED_AT: stamp,
        },
        K.SERVICE: {K.SERVICE_VOLTAGE: 240, K.MAIN_BREAKER_AMPS: 200, K.BUS_RATING_AMPS: 200},
        K.PANEL: {
            K.TOTAL_SLOTS: 40,
            K.USED_SLOTS: 20,
            K.TANDEM_SLOTS_USED: 0,
            K.TANDEMS_ALLOWED: "Unknown",
            K.TANDEM_POLICY: {K.ALLOWED_POSITIONS: "All slots", K.CUSTOM_MAX_TANDEM_SLOTS: None},
        },
        K.LOAD_ENTRY_PATH: None,
        K.GUIDED_COMPLETE: False,
        K.LOADS: [],
        K.EV: {
            K.EV_INCLUDE_IN_BACKUP_DEFAULT: False,
            K.EV_CHARGER_OPTION: None,
            K.EV_CUSTOM_CONTINUOUS_AMPS: "",
            K.EV_CHARGER_COUNT: 1,
        },
        K.BATTERY: {
            K.WHOLE_HOME: default_battery_section(),
            K.PARTIAL_HOME: default_battery_section(partial=True),
        },
    }


def _fill(target: Dict[str, Any], defaults: Dict[str, Any]) -> None:
    for key, value in defaults.items():
        if key not in target:
            target[key] = deepcopy(value)
        elif isinstance(value, dict) and isinstance(target[key], dict):
            _fill(target[key], value)


_INT_FIELDS = {
    K.SERVICE: (K.SERVICE_VOLTAGE, K.MAIN_BREAKER_AMPS, K.BUS_RATING_AMPS),
    K.PANEL: (K.TOTAL_SLOTS, K.USED_SLOTS, K.TANDEM_SLOTS_USED),
}


def normalize_project(data: Any) -> Dict[str, Any]:
    """Copy of ``data`` with missing sections filled and numeric fields coerced.

    Unknown keys (including UI bookkeeping such as ``_necEdited``) are kept.
    """
    d = deepcopy(data) if isinstance(data, dict) else {}
    defaults = create_initial_project()
    defaults[K.METADATA].pop(K.CREATED_AT)
    defaults[K.METADATA].pop(K.UPDATED_AT)
    for key, value in defaults.items():
        if key == K.META:
            continue
        if not isinstance(d.get(key), type(value)) and value is not None:
            d[key] = deepcopy(value)
        elif isinstance(value, dict):
            _fill(d[key], value)

    for section, fields in _INT_FIELDS.items():
        sec = d[section]
        for f in fields:
            n = to_int(sec.get(f))
            if n is not None:
                sec[f] = n

    ev = d[K.EV]
    ev[K.EV_CHARGER_COUNT] = max(1, min(4, to_int(ev.get(K.EV_CHARGER_COUNT), 1) or 1))

    for which in (K.WHOLE_HOME, K.PARTIAL_HOME):
        sec = d[K.BATTERY][which]
        for f in (K.BACKUP_DAYS, K.CUSTOM_DAYS, K.SOLAR_OFFSET_PERCENT):
            v = to_float(sec.get(f))
            if v is not None:
                sec[f] = v

    d[K.LOADS] = [ld for ld in d[K.LOADS] if isinstance(ld, dict)]
    return d
