# -*- coding: utf-8 -*-
"""Pure panel slot accounting.

Two views of slot usage coexist: what the user declared on the panel
(``usedSlots``/``tandemSlotsUsed``) and what the load list implies. The
difference is reported as ``delta``; nothing here reconciles them.

NOTE: This module must not depend on I/O or the project dict layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from core.models.load import Load
from core.models.panel import Panel, TandemPositions, TandemsAllowed
from core.types import Issue, Severity


@dataclass(frozen=True)
class PanelSlotReport:
    total_slots: int
    declared_used_slots: int
    declared_tandem_slots_used: int
    available_slots: int
    tandem_capable_slots: int
    can_free_slots_with_tandems: bool
    modeled_slots: int
    delta: int
    issues: Tuple[Issue, ...] = field(default_factory=tuple)


def tandem_capable_slots(panel: Panel) -> int:
    if panel.tandems_allowed != TandemsAllowed.ALLOWED:
        return 0
    total = max(0, int(panel.total_slots))
    if panel.allowed_positions == TandemPositions.BOTTOM_HALF:
        return total // 2
    if panel.allowed_positions == TandemPositions.CUSTOM:
        return max(0, int(panel.custom_max_tandem_slots or 0))
    return total


def available_slots(panel: Panel) -> int:
    """Open slots per the user's declaration, never negative."""
    return max(0, int(panel.total_slots) - (int(panel.used_slots) + int(panel.tandem_slots_used)))


def modeled_slots_consumed(loads: Iterable[Load]) -> int:
    return sum(ld.slots_consumed for ld in (loads or []))


def panel_slot_warnings(panel: Panel) -> List[Issue]:
    issues: List[Issue] = []
    total = int(panel.total_slots)
    used = int(panel.used_slots)
    tandem_used = int(panel.tandem_slots_used)

    if used > total:
        issues.append(Issue(
            code="PANEL_USED_EXCEEDS_TOTAL",
            message=f"Used slots ({used}) exceed total slots ({total}).",
            context="panel.usedSlots",
        ))

    if tandem_used > 0 and panel.tandems_allowed != TandemsAllowed.ALLOWED:
        issues.append(Issue(
            code="PANEL_TANDEMS_NOT_ALLOWED",
            message=(
                f"{tandem_used} tandem slot(s) in use but tandems are "
                f"'{panel.tandems_allowed.value}' for this panel."
            ),
            context="panel.tandemSlotsUsed",
        ))
    elif tandem_used > tandem_capable_slots(panel):
        issues.append(Issue(
            code="PANEL_TANDEMS_EXCEED_POLICY",
            message=(
                f"Tandem slots used ({tandem_used}) exceed tandem-capable slots "
                f"({tandem_capable_slots(panel)})."
            ),
            context="panel.tandemSlotsUsed",
        ))

    if used + tandem_used > total:
        issues.append(Issue(
            code="PANEL_AVAILABLE_CLAMPED",
            message="Available slots clamped to 0; declared usage exceeds panel size.",
            severity=Severity.INFO,
            context="panel",
        ))
    return issues


def panel_slot_report(panel: Panel, loads: Iterable[Load]) -> PanelSlotReport:
    modeled = modeled_slots_consumed(loads)
    capable = tandem_capable_slots(panel)
    issues = panel_slot_warnings(panel)
    declared = int(panel.used_slots)
    delta = modeled - declared
    if delta != 0:
        issues.append(Issue(
            code="PANEL_MODELED_DELTA",
            message=(
                f"Load list models {modeled} slot(s) but panel declares {declared} "
                f"({delta:+d})."
            ),
            severity=Severity.INFO,
            context="panel.usedSlots",
        ))
    return PanelSlotReport(
        total_slots=int(panel.total_slots),
        declared_used_slots=declared,
        declared_tandem_slots_used=int(panel.tandem_slots_used),
        available_slots=available_slots(panel),
        tandem_capable_slots=capable,
        can_free_slots_with_tandems=panel.tandems_allowed == TandemsAllowed.ALLOWED and capable > 0,
        modeled_slots=modeled,
        delta=delta,
        issues=tuple(issues),
    )
