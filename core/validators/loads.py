# -*- coding: utf-8 -*-
"""Validations for the load list."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List

from core.keys import ProjectKeys as K
from core.models.categories import resolve_category
from core.types import Issue, Severity
from domain.catalog import BREAKER_AMP_OPTIONS
from domain.load_factory import NEC_BASELINE_COUNT
from domain.parse import to_float, to_int


def validate_loads(data: Dict[str, Any]) -> List[Issue]:
    loads = [ld for ld in ((data or {}).get(K.LOADS) or []) if isinstance(ld, dict)]
    issues: List[Issue] = []

    ids = Counter(str(ld.get(K.LOAD_ID) or "") for ld in loads)
    for lid, n in ids.items():
        if not lid:
            issues.append(Issue(code="LOAD_MISSING_ID", message="A load has no id.", severity=Severity.ERROR, context="loads"))
        elif n > 1:
            issues.append(Issue(code="LOAD_DUPLICATE_ID", message=f"Load id {lid!r} is used {n} times.", severity=Severity.ERROR, context=lid))

    n_base = sum(1 for ld in loads if ld.get(K.IS_NEC_BASELINE))
    if loads and n_base != NEC_BASELINE_COUNT:
        issues.append(Issue(
            code="LOAD_BASELINE_COUNT",
            message=f"{n_base} NEC baseline load(s) present; {NEC_BASELINE_COUNT} expected.",
            severity=Severity.INFO,
            context="loads",
        ))

    for ld in loads:
        lid = str(ld.get(K.LOAD_ID) or "")
        label = str(ld.get(K.DESCRIPTION) or lid)
        _cat, known = resolve_category(ld.get(K.CATEGORY))
        if not known:
            issues.append(Issue(
                code="LOAD_UNKNOWN_CATEGORY",
                message=f"'{label}': unknown category {ld.get(K.CATEGORY)!r}; treated as Other.",
                context=lid,
            ))

        breaker = ld.get(K.BREAKER) if isinstance(ld.get(K.BREAKER), dict) else {}
        amps = to_int(breaker.get("amps"))
        if amps is not None and amps not in BREAKER_AMP_OPTIONS:
            issues.append(Issue(
                code="LOAD_BREAKER_NONSTANDARD",
                message=f"'{label}': {amps} A is not a standard breaker size.",
                severity=Severity.INFO,
                context=lid,
            ))
        if to_int(breaker.get("poles"), 1) == 2 and str(breaker.get("type")) == "Tandem":
            issues.append(Issue(
                code="LOAD_TANDEM_TWO_POLE",
                message=f"'{label}': 2-pole breakers cannot be tandem; counted as standard.",
                context=lid,
            ))

        usage = ld.get(K.USAGE) if isinstance(ld.get(K.USAGE), dict) else {}
        watts = to_float(usage.get("assumedWatts"))
        if watts is None or watts < 0:
            issues.append(Issue(
                code="LOAD_WATTS_INVALID",
                message=f"'{label}': watts missing or negative; category default used.",
                context=lid,
            ))
        hours = to_float(usage.get("hoursPerDay"))
        if hours is not None and not 0 <= hours <= 24:
            issues.append(Issue(
                code="LOAD_HOURS_RANGE",
                message=f"'{label}': hours per day must be between 0 and 24.",
                context=lid,
            ))

        motor = ld.get(K.MOTOR) if isinstance(ld.get(K.MOTOR), dict) else {}
        if motor.get("isMotor") and not to_float(motor.get("lra")):
            issues.append(Issue(
                code="LOAD_MOTOR_LRA_UNKNOWN",
                message=f"'{label}': motor load without LRA; a typical value is assumed for battery sizing.",
                severity=Severity.INFO,
                context=lid,
            ))
    return issues
