# -*- coding: utf-8 -*-
"""Validations for panel slot inputs."""

from __future__ import annotations

from typing import Any, Dict, List

from core.calculations.panel_slots import panel_slot_report
from core.keys import ProjectKeys as K
from core.models.load import Load
from core.models.panel import Panel
from core.types import Issue, Severity
from domain.parse import to_int


def validate_panel(data: Dict[str, Any]) -> List[Issue]:
    data = data or {}
    raw = data.get(K.PANEL) if isinstance(data.get(K.PANEL), dict) else {}
    issues: List[Issue] = []

    total = to_int(raw.get(K.TOTAL_SLOTS))
    if total is None or total <= 0:
        issues.append(Issue(
            code="PANEL_TOTAL_INVALID",
            message="Panel total slots must be a positive number.",
            severity=Severity.ERROR,
            context="panel.totalSlots",
        ))

    loads = [Load.from_dict(ld) for ld in (data.get(K.LOADS) or []) if isinstance(ld, dict)]
    rep = panel_slot_report(Panel.from_dict(raw), loads)
    issues.extend(rep.issues)
    return issues
