# -*- coding: utf-8 -*-
"""
domain/load_factory.py

Creation of load entries (snapshot-shaped dicts):
- blank entries and library-default entries
- the four NEC baseline loads
- guided questionnaire bulk generation and replace/merge into existing loads

All functions return new objects; ids come from the injected IdGenerator.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from core.keys import ProjectKeys as K
from core.models.categories import LoadCategory, resolve_category
from domain.catalog import library_entry
from domain.ids import IdGenerator

DEFAULT_SQUARE_FOOTAGE = 1500
NEC_BASELINE_COUNT = 4
NEC_BASELINE_PREFIX = "NEC Baseline: "

GUIDED_MODE_REPLACE = "replace"
GUIDED_MODE_MERGE = "merge"


def create_load_entry(id_gen: IdGenerator, **overrides: Any) -> Dict[str, Any]:
    """Blank load entry with generic defaults.

    ``overrides`` replace top-level keys; nested dicts are merged.
    """
    entry: Dict[str, Any] = {
        K.LOAD_ID: id_gen.next_id(),
        K.CIRCUIT_NUMBER: "",
        K.DESCRIPTION: "",
        K.CATEGORY: LoadCategory.OTHER.value,
        K.IS_NEC_BASELINE: False,
        K.BREAKER: {"poles": 1, "amps": 15, "type": "Standard", "voltageOverride": None},
        K.TANDEM_CIRCUIT_B: None,
        K.USAGE: {
            "assumedWatts": 500,
            "hoursPerDay": 4,
            "includeInServiceCalc": True,
            "includeInBatteryCalc": True,
        },
        K.MOTOR: {"isMotor": False, "nameplateKnown": False, "lra": None, "notes": ""},
        K.SOURCE_TAG: "Assumed",
        K.WATTS_MANUALLY_SET: False,
    }
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(entry.get(key), dict):
            entry[key] = {**entry[key], **value}
        else:
            entry[key] = value
    return entry


def library_fields(category: LoadCategory) -> Dict[str, Any]:
    lib = library_entry(category)
    return {
        K.CATEGORY: category.value,
        K.BREAKER: {"poles": lib.poles, "amps": lib.amps, "type": "Standard"},
        K.USAGE: {"assumedWatts": lib.watts, "hoursPerDay": lib.hours_per_day},
        K.MOTOR: {"isMotor": lib.is_motor, "lra": lib.default_lra},
    }


def load_from_library(
    category: Union[LoadCategory, str],
    id_gen: IdGenerator,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    cat, _known = resolve_category(category)
    fields = library_fields(cat)
    entry = create_load_entry(id_gen, description=description or library_entry(cat).description, **fields)
    if cat == LoadCategory.EV_CHARGER:
        entry[K.USAGE]["includeInBatteryCalc"] = False
    return entry


def create_nec_baseline_loads(square_footage: Optional[float], id_gen: IdGenerator) -> List[Dict[str, Any]]:
    sqft = square_footage if square_footage and square_footage > 0 else DEFAULT_SQUARE_FOOTAGE
    specs = (
        ("General Lighting", LoadCategory.GENERAL_LIGHTING, 15, round(sqft * 3), 8),
        ("Small Appliance Circuit #1", LoadCategory.OTHER, 20, 1500, 2),
        ("Small Appliance Circuit #2", LoadCategory.OTHER, 20, 1500, 2),
        ("Laundry Circuit", LoadCategory.OTHER, 20, 1500, 1),
    )
    return [
        create_load_entry(
            id_gen,
            description=NEC_BASELINE_PREFIX + name,
            category=cat.value,
            isNECBaseline=True,
            breaker={"amps": amps},
            usage={"assumedWatts": watts, "hoursPerDay": hours},
        )
        for name, cat, amps, watts, hours in specs
    ]


# ---------- guided questionnaire ----------

GuidedAnswers = Union[Mapping[Any, int], Iterable[Any]]


def _answer_counts(answers: GuidedAnswers) -> List[tuple]:
    if isinstance(answers, Mapping):
        items = list(answers.items())
    else:
        items = [(a, 1) for a in answers]
    out = []
    for raw, count in items:
        cat, known = resolve_category(raw)
        n = int(count or 0)
        if known and n > 0:
            out.append((cat, n))
    return out


def build_guided_loads(
    answers: GuidedAnswers,
    square_footage: Optional[float],
    id_gen: IdGenerator,
) -> List[Dict[str, Any]]:
    """NEC baselines plus one library load per answered appliance.

    ``answers`` is either an iterable of categories or a mapping
    category -> quantity. Unknown categories are skipped.
    """
    loads = create_nec_baseline_loads(square_footage, id_gen)
    for cat, n in _answer_counts(answers):
        base = library_entry(cat).description
        for i in range(n):
            desc = base if n == 1 else f"{base} #{i + 1}"
            loads.append(load_from_library(cat, id_gen, description=desc))
    return loads


def has_existing_work(loads: Iterable[Mapping[str, Any]]) -> bool:
    """True when applying guided loads would discard user edits."""
    for ld in loads or []:
        if not ld.get(K.IS_NEC_BASELINE):
            return True
        if ld.get(K.NEC_EDITED):
            return True
    return False


def apply_guided_loads(
    existing: Iterable[Mapping[str, Any]],
    generated: Iterable[Mapping[str, Any]],
    mode: str = GUIDED_MODE_REPLACE,
) -> List[Dict[str, Any]]:
    """Replace all loads, or merge: keep existing non-baseline loads, swap baselines."""
    generated = [deepcopy(dict(ld)) for ld in generated]
    if mode == GUIDED_MODE_MERGE:
        kept = [deepcopy(dict(ld)) for ld in existing if not ld.get(K.IS_NEC_BASELINE)]
        baselines = [ld for ld in generated if ld.get(K.IS_NEC_BASELINE)]
        extras = [ld for ld in generated if not ld.get(K.IS_NEC_BASELINE)]
        return baselines + kept + extras
    if mode != GUIDED_MODE_REPLACE:
        raise ValueError(f"unknown guided mode: {mode!r}")
    return generated
