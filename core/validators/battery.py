# -*- coding: utf-8 -*-
"""Validations for battery backup inputs."""

from __future__ import annotations

from typing import Any, Dict, List

from core.calculations.battery_sizing import MIN_BACKUP_DAYS
from core.keys import ProjectKeys as K
from core.types import Issue, Severity
from domain.project_facade import ProjectFacade
from domain.parse import to_float


def validate_battery(data: Dict[str, Any]) -> List[Issue]:
    f = ProjectFacade(data or {})
    issues: List[Issue] = []

    for which in (K.WHOLE_HOME, K.PARTIAL_HOME):
        if which == K.PARTIAL_HOME and not f.partial_enabled():
            continue
        days = f.effective_backup_days(which)
        if days < MIN_BACKUP_DAYS:
            issues.append(Issue(
                code="BATTERY_DAYS_BELOW_MIN",
                message=f"Backup duration below {MIN_BACKUP_DAYS} day; the minimum is used.",
                context=f"battery.{which}",
            ))
        raw = to_float(f.battery_section(which).get(K.SOLAR_OFFSET_PERCENT))
        if raw is not None and not 0 <= raw <= 100:
            issues.append(Issue(
                code="BATTERY_SOLAR_RANGE",
                message="Solar offset must be between 0 and 100 %; value is clamped.",
                context=f"battery.{which}.solarOffsetPercent",
            ))

    if f.partial_enabled():
        known = {ld.get(K.LOAD_ID) for ld in f.load_dicts()}
        included = f.partial_included_ids()
        if not included:
            issues.append(Issue(
                code="BATTERY_PARTIAL_EMPTY",
                message="Partial-home backup is enabled but no loads are selected.",
                severity=Severity.INFO,
                context="battery.partialHome.selections",
            ))
        stale = [lid for lid in included if lid not in known]
        if stale:
            issues.append(Issue(
                code="BATTERY_PARTIAL_STALE",
                message=f"{len(stale)} partial-home selection(s) refer to removed loads.",
                severity=Severity.INFO,
                context="battery.partialHome.selections",
            ))
    return issues
