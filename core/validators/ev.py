# -*- coding: utf-8 -*-
"""Validations for the EV charger request."""

from __future__ import annotations

from typing import Any, Dict, List

from core.keys import ProjectKeys as K
from core.types import Issue, Severity
from domain.catalog import MAX_EV_CHARGERS
from domain.parse import to_bool, to_float, to_int


def validate_ev(data: Dict[str, Any]) -> List[Issue]:
    ev = (data or {}).get(K.EV)
    if not isinstance(ev, dict):
        return []
    issues: List[Issue] = []
    opt = ev.get(K.EV_CHARGER_OPTION)
    if isinstance(opt, dict) and to_bool(opt.get("isCustom")):
        amps = to_float(ev.get(K.EV_CUSTOM_CONTINUOUS_AMPS))
        if amps is None or amps <= 0:
            issues.append(Issue(
                code="EV_CUSTOM_AMPS_MISSING",
                message="Custom EV charger selected without a continuous amp rating.",
                severity=Severity.ERROR,
                context="ev.customContinuousAmps",
            ))
    count = to_int(ev.get(K.EV_CHARGER_COUNT), 1) or 0
    if not 1 <= count <= MAX_EV_CHARGERS:
        issues.append(Issue(
            code="EV_COUNT_RANGE",
            message=f"Charger count must be between 1 and {MAX_EV_CHARGERS}; value is clamped.",
            context="ev.chargerCount",
        ))
    return issues
