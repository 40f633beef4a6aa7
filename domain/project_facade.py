# -*- coding: utf-8 -*-
"""ProjectFacade: typed-ish access over the project snapshot dict.

Goals
- Concentrate snapshot defaults in one place.
- Hide raw dict keys from services and reports.
- Translate form-level choices (backup mode, solar toggle, EV include) into
  the plain numbers the engine takes.

Notes
- Getters never mutate the snapshot; ``ensure_*`` and ``set_*`` do.
- Keep methods small and explicit; prefer adding a new method over leaking raw keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.calculations.ev_feasibility import build_ev_loads
from core.keys import ProjectKeys as K
from core.models.ev import ChargerRequest
from core.models.load import Load
from core.models.panel import Panel, Service
from domain.catalog import MAX_EV_CHARGERS
from domain.parse import clamp, to_bool, to_float, to_int

BACKUP_MODE_CUSTOM = "custom"


@dataclass
class ProjectFacade:
    data: Dict[str, Any]

    # ---------- generic ----------
    def _get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def _section(self, key: str) -> Dict[str, Any]:
        v = self.data.get(key)
        return v if isinstance(v, dict) else {}

    def ensure_dict(self, key: str) -> Dict[str, Any]:
        v = self.data.get(key)
        if not isinstance(v, dict):
            v = {}
            self.data[key] = v
        return v

    def ensure_list(self, key: str) -> List[Any]:
        v = self.data.get(key)
        if not isinstance(v, list):
            v = []
            self.data[key] = v
        return v

    # ---------- metadata ----------
    def project_name(self) -> str:
        return str(self._section(K.METADATA).get(K.PROJECT_NAME) or "")

    def address(self) -> str:
        return str(self._section(K.METADATA).get(K.ADDRESS) or "")

    def square_footage(self) -> Optional[float]:
        sqft = to_float(self._section(K.METADATA).get(K.SQUARE_FOOTAGE))
        return sqft if sqft and sqft > 0 else None

    # ---------- service / panel / loads ----------
    def service(self) -> Service:
        return Service.from_dict(self._section(K.SERVICE))

    def panel(self) -> Panel:
        return Panel.from_dict(self._section(K.PANEL))

    def load_dicts(self) -> List[Dict[str, Any]]:
        return [ld for ld in (self._get(K.LOADS) or []) if isinstance(ld, dict)]

    def loads(self) -> List[Load]:
        return [Load.from_dict(ld) for ld in self.load_dicts()]

    def set_load_dicts(self, loads: List[Dict[str, Any]]) -> None:
        self.data[K.LOADS] = list(loads)

    def load_by_id(self, load_id: str) -> Optional[Dict[str, Any]]:
        for ld in self.load_dicts():
            if ld.get(K.LOAD_ID) == load_id:
                return ld
        return None

    # ---------- EV ----------
    def charger_count(self) -> int:
        n = to_int(self._section(K.EV).get(K.EV_CHARGER_COUNT), 1) or 1
        return int(clamp(n, 1, MAX_EV_CHARGERS))

    def set_charger_count(self, n: Any) -> None:
        self.ensure_dict(K.EV)[K.EV_CHARGER_COUNT] = int(clamp(to_int(n, 1) or 1, 1, MAX_EV_CHARGERS))

    def charger_request(self) -> Optional[ChargerRequest]:
        """The selected charger, or None when no option is chosen."""
        ev = self._section(K.EV)
        opt = ev.get(K.EV_CHARGER_OPTION)
        if not isinstance(opt, dict):
            return None
        is_custom = to_bool(opt.get("isCustom"))
        if is_custom:
            amps = to_float(ev.get(K.EV_CUSTOM_CONTINUOUS_AMPS), 0.0) or 0.0
        else:
            amps = to_float(opt.get("continuousAmps"), 0.0) or 0.0
        return ChargerRequest(
            label=str(opt.get("label") or ("Custom" if is_custom else "EV Charger")),
            continuous_amps=max(0.0, amps),
            recommended_breaker_amps=to_int(opt.get("recommendedBreakerAmps"), 0) or 0,
            is_custom=is_custom,
            count=self.charger_count(),
        )

    # ---------- battery ----------
    def battery_section(self, which: str) -> Dict[str, Any]:
        v = self._section(K.BATTERY).get(which)
        return v if isinstance(v, dict) else {}

    def effective_backup_days(self, which: str = K.WHOLE_HOME) -> float:
        sec = self.battery_section(which)
        mode = str(sec.get(K.BACKUP_MODE) or "").strip().lower()
        if mode == BACKUP_MODE_CUSTOM:
            return to_float(sec.get(K.CUSTOM_DAYS), 1.0) or 1.0
        days = to_float(mode)
        if days is None:
            days = to_float(sec.get(K.BACKUP_DAYS), 1.0)
        return days or 1.0

    def solar_offset_percent(self, which: str = K.WHOLE_HOME) -> float:
        """Whole-home honours the offset only in custom mode; partial-home whenever enabled."""
        sec = self.battery_section(which)
        if not to_bool(sec.get(K.SOLAR_OFFSET_ENABLED)):
            return 0.0
        if which == K.WHOLE_HOME and str(sec.get(K.BACKUP_MODE) or "").lower() != BACKUP_MODE_CUSTOM:
            return 0.0
        return clamp(to_float(sec.get(K.SOLAR_OFFSET_PERCENT), 0.0) or 0.0, 0.0, 100.0)

    def proposed_ev_loads(self) -> List[Load]:
        """Synthetic EV loads for whole-home sizing when the EV is included."""
        if not to_bool(self.battery_section(K.WHOLE_HOME).get(K.INCLUDE_EV)):
            return []
        charger = self.charger_request()
        if charger is None:
            return []
        return build_ev_loads(charger, self.service())

    def partial_enabled(self) -> bool:
        return to_bool(self.battery_section(K.PARTIAL_HOME).get(K.ENABLED))

    def partial_selections(self) -> Dict[str, Dict[str, Any]]:
        sel = self.battery_section(K.PARTIAL_HOME).get(K.SELECTIONS)
        if not isinstance(sel, dict):
            return {}
        return {str(k): v for k, v in sel.items() if isinstance(v, dict)}

    def partial_included_ids(self) -> List[str]:
        return [lid for lid, sel in self.partial_selections().items() if to_bool(sel.get("include"))]

    def set_partial_selection(self, load_id: str, include: bool, hours_per_day: Optional[float] = None) -> None:
        battery = self.ensure_dict(K.BATTERY)
        partial = battery.get(K.PARTIAL_HOME)
        if not isinstance(partial, dict):
            partial = {}
            battery[K.PARTIAL_HOME] = partial
        sel = partial.get(K.SELECTIONS)
        if not isinstance(sel, dict):
            sel = {}
            partial[K.SELECTIONS] = sel
        entry = {"include": bool(include)}
        if hours_per_day is not None:
            entry["hoursPerDay"] = clamp(float(hours_per_day), 0.0, 24.0)
        sel[str(load_id)] = entry
