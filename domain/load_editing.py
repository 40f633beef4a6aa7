# -*- coding: utf-8 -*-
"""
domain/load_editing.py

Edit rules for load entries, the way the load table applies them:
- dotted-field edits (``breaker.amps``, ``usage.hoursPerDay``, ``tandemB.assumedWatts``...)
- category change re-applies library defaults
- breaker edits re-estimate watts unless the user typed watts
- tandem / 2-pole exclusivity
- NEC baseline reconciliation and protected removal

Every function returns new objects; inputs are left untouched.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from core.keys import ProjectKeys as K
from core.models.categories import LoadCategory, resolve_category
from core.models.load import Load
from core.types import Issue, Severity
from domain.catalog import library_entry
from domain.ids import IdGenerator
from domain.load_factory import NEC_BASELINE_COUNT, create_nec_baseline_loads, library_fields, load_from_library
from domain.parse import clamp, to_bool, to_float, to_int

log = logging.getLogger(__name__)

DEFAULT_UTILIZATION_FACTOR = 0.5

_AUTO_WATTS_FIELDS = {"amps", "poles", "voltageOverride"}


def default_tandem_circuit() -> Dict[str, Any]:
    return {
        "description": "Tandem Circuit B",
        "category": LoadCategory.OTHER.value,
        "amps": 15,
        "assumedWatts": 500,
        "hoursPerDay": 4,
        "isMotor": False,
        "lra": None,
    }


def breaker_watts(volts: float, amps: float, utilization_factor: float = DEFAULT_UTILIZATION_FACTOR) -> int:
    """Estimated running watts for a breaker: volts x amps x utilization."""
    return int(round(float(volts) * float(amps) * float(utilization_factor)))


def apply_category_defaults(load: Mapping[str, Any], category: Any) -> Dict[str, Any]:
    """Re-seed a load from the library; unknown categories leave it unchanged."""
    out = deepcopy(dict(load))
    cat, known = resolve_category(category)
    if not known:
        log.debug("unknown category %r; load %s unchanged", category, out.get(K.LOAD_ID))
        return out
    fields = library_fields(cat)
    out[K.CATEGORY] = fields[K.CATEGORY]
    for section in (K.BREAKER, K.USAGE, K.MOTOR):
        cur = out.get(section) if isinstance(out.get(section), dict) else {}
        out[section] = {**cur, **fields[section]}
    if out[K.BREAKER].get("poles") == 2:
        out[K.TANDEM_CIRCUIT_B] = None
    out[K.SOURCE_TAG] = "Assumed"
    out[K.WATTS_MANUALLY_SET] = False
    return out


def _coerce(section: str, key: str, value: Any) -> Any:
    if section == K.BREAKER:
        if key == "poles":
            return 2 if to_int(value, 1) == 2 else 1
        if key == "amps":
            return max(0, to_int(value, 0) or 0)
        if key == "voltageOverride":
            v = to_int(value)
            return v if v and v > 0 else None
        if key == "type":
            return "Tandem" if str(value).strip().lower() == "tandem" else "Standard"
    if section == K.USAGE:
        if key == "assumedWatts":
            return max(0.0, to_float(value, 0.0) or 0.0)
        if key == "hoursPerDay":
            return clamp(to_float(value, 0.0) or 0.0, 0.0, 24.0)
        return to_bool(value)
    if section == K.MOTOR:
        if key == "lra":
            v = to_float(value)
            return max(0.0, v) if v is not None else None
        if key in ("isMotor", "nameplateKnown"):
            return to_bool(value)
    return value


def _recompute_watts(load: Dict[str, Any], service_voltage: float) -> None:
    if load.get(K.WATTS_MANUALLY_SET):
        return
    model = Load.from_dict(load)
    util = library_entry(model.category).utilization_factor
    load[K.USAGE]["assumedWatts"] = breaker_watts(model.voltage(service_voltage), model.breaker.amps, util)


def update_load(
    load: Mapping[str, Any],
    field: str,
    value: Any,
    service_voltage: float = 240.0,
) -> Dict[str, Any]:
    """Apply one edit and the rules it triggers; returns a new entry."""
    out = deepcopy(dict(load))
    section, _, key = field.partition(".")

    if not key:
        if field == K.CATEGORY:
            return apply_category_defaults(out, value)
        out[field] = value
        return out

    if section == "tandemB":
        tb = out.get(K.TANDEM_CIRCUIT_B)
        if isinstance(tb, dict):
            tb[key] = value
        return out

    block = out.get(section) if isinstance(out.get(section), dict) else {}
    out[section] = block
    block[key] = _coerce(section, key, value)

    if out.get(K.IS_NEC_BASELINE) and (section == K.USAGE or (section == K.BREAKER and key == "amps")):
        out[K.NEC_EDITED] = True

    if section == K.BREAKER:
        out[K.SOURCE_TAG] = "User-entered"
        if key == "type":
            if block["type"] == "Tandem" and to_int(block.get("poles"), 1) == 1:
                if not isinstance(out.get(K.TANDEM_CIRCUIT_B), dict):
                    out[K.TANDEM_CIRCUIT_B] = default_tandem_circuit()
            else:
                block["type"] = "Standard"
                out[K.TANDEM_CIRCUIT_B] = None
        if key == "poles" and block["poles"] == 2:
            block["type"] = "Standard"
            out[K.TANDEM_CIRCUIT_B] = None
        if key in _AUTO_WATTS_FIELDS:
            out.setdefault(K.USAGE, {})
            _recompute_watts(out, service_voltage)

    elif section == K.USAGE:
        if key == "assumedWatts":
            out[K.WATTS_MANUALLY_SET] = True
        if key in ("assumedWatts", "hoursPerDay"):
            out[K.SOURCE_TAG] = "User-entered"

    elif section == K.MOTOR:
        if key == "lra" and block["lra"] is not None:
            out[K.SOURCE_TAG] = "Nameplate" if block.get("nameplateKnown") else "User-entered"

    return out


# ---------- list operations ----------

def add_load(
    loads: Sequence[Mapping[str, Any]],
    category: Any,
    id_gen: IdGenerator,
) -> List[Dict[str, Any]]:
    return [deepcopy(dict(ld)) for ld in loads] + [load_from_library(category, id_gen)]


def remove_load(
    loads: Sequence[Mapping[str, Any]],
    load_id: str,
) -> Tuple[List[Dict[str, Any]], Optional[Issue]]:
    """Remove a load by id. NEC baseline loads are protected."""
    out = [deepcopy(dict(ld)) for ld in loads]
    for i, ld in enumerate(out):
        if ld.get(K.LOAD_ID) != load_id:
            continue
        if ld.get(K.IS_NEC_BASELINE):
            return out, Issue(
                code="LOAD_BASELINE_PROTECTED",
                message="NEC baseline loads cannot be removed; edit them instead.",
                severity=Severity.INFO,
                context=load_id,
            )
        del out[i]
        return out, None
    return out, Issue(code="LOAD_NOT_FOUND", message=f"No load with id {load_id!r}.", severity=Severity.INFO, context=load_id)


def reconcile_nec_baselines(
    loads: Sequence[Mapping[str, Any]],
    square_footage: Optional[float],
    id_gen: IdGenerator,
) -> List[Dict[str, Any]]:
    """Keep exactly the required baselines when they are missing or duplicated.

    - none present: regenerate all four, placed first
    - more than four: drop duplicates by description (category when blank), keep the first four
    - one to four: left as is (partial edits are intentional)
    """
    out = [deepcopy(dict(ld)) for ld in loads]
    baselines = [ld for ld in out if ld.get(K.IS_NEC_BASELINE)]

    if not baselines:
        return create_nec_baseline_loads(square_footage, id_gen) + out

    if len(baselines) <= NEC_BASELINE_COUNT:
        return out

    seen = set()
    kept = 0
    result = []
    for ld in out:
        if ld.get(K.IS_NEC_BASELINE):
            key = str(ld.get(K.DESCRIPTION) or "").strip() or str(ld.get(K.CATEGORY) or "")
            if key in seen or kept >= NEC_BASELINE_COUNT:
                continue
            seen.add(key)
            kept += 1
        result.append(ld)
    return result
