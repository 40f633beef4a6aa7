# -*- coding: utf-8 -*-
"""Panel slot accounting (pure)."""

from __future__ import annotations

import pytest

from conftest import make_load
from core.calculations.panel_slots import (
    available_slots,
    modeled_slots_consumed,
    panel_slot_report,
    panel_slot_warnings,
    tandem_capable_slots,
)
from core.models.load import Load
from core.models.panel import Panel, TandemPositions, TandemsAllowed
from core.types import has_errors


def _panel(**kw):
    base = dict(total_slots=40, used_slots=20, tandem_slots_used=0)
    base.update(kw)
    return Panel(**base)


@pytest.mark.parametrize(
    "allowed,positions,custom,expected",
    [
        (TandemsAllowed.NOT_ALLOWED, TandemPositions.ALL_SLOTS, None, 0),
        (TandemsAllowed.UNKNOWN, TandemPositions.ALL_SLOTS, None, 0),
        (TandemsAllowed.ALLOWED, TandemPositions.ALL_SLOTS, None, 40),
        (TandemsAllowed.ALLOWED, TandemPositions.BOTTOM_HALF, None, 20),
        (TandemsAllowed.ALLOWED, TandemPositions.CUSTOM, 6, 6),
        (TandemsAllowed.ALLOWED, TandemPositions.CUSTOM, None, 0),
    ],
)
def test_tandem_capable_slots(allowed, positions, custom, expected):
    p = _panel(tandems_allowed=allowed, allowed_positions=positions, custom_max_tandem_slots=custom)
    assert tandem_capable_slots(p) == expected


def test_bottom_half_floors_odd_totals():
    p = _panel(total_slots=41, tandems_allowed=TandemsAllowed.ALLOWED, allowed_positions=TandemPositions.BOTTOM_HALF)
    assert tandem_capable_slots(p) == 20


def test_available_slots_counts_tandems():
    assert available_slots(_panel(used_slots=30, tandem_slots_used=4)) == 6


def test_overfull_panel_clamps_to_zero_and_warns():
    p = _panel(total_slots=40, used_slots=45)
    assert available_slots(p) == 0
    codes = {it.code for it in panel_slot_warnings(p)}
    assert "PANEL_USED_EXCEEDS_TOTAL" in codes
    assert "PANEL_AVAILABLE_CLAMPED" in codes


@pytest.mark.parametrize("total,used,tandem", [(0, 0, 0), (10, 99, 3), (-5, 2, 0), (20, -4, 0)])
def test_available_slots_never_negative(total, used, tandem):
    assert available_slots(Panel(total_slots=total, used_slots=used, tandem_slots_used=tandem)) >= 0


def test_tandem_usage_when_not_allowed_is_flagged():
    p = _panel(tandem_slots_used=2, tandems_allowed=TandemsAllowed.UNKNOWN)
    codes = [it.code for it in panel_slot_warnings(p)]
    assert codes == ["PANEL_TANDEMS_NOT_ALLOWED"]


def test_tandem_usage_above_policy_is_flagged():
    p = _panel(
        tandem_slots_used=5,
        tandems_allowed=TandemsAllowed.ALLOWED,
        allowed_positions=TandemPositions.CUSTOM,
        custom_max_tandem_slots=4,
    )
    codes = [it.code for it in panel_slot_warnings(p)]
    assert codes == ["PANEL_TANDEMS_EXCEED_POLICY"]


def test_consistent_panel_has_no_warnings():
    assert panel_slot_warnings(_panel()) == []


def test_modeled_slots_and_delta_are_reported_not_fixed():
    loads = [
        Load.from_dict(make_load("a", poles=2)),
        Load.from_dict(make_load("b", poles=1, type="Tandem")),
        Load.from_dict(make_load("c", poles=1)),
    ]
    assert modeled_slots_consumed(loads) == 4

    p = _panel(used_slots=10)
    rep = panel_slot_report(p, loads)
    assert rep.modeled_slots == 4
    assert rep.declared_used_slots == 10
    assert rep.delta == -6
    assert rep.available_slots == 30
    assert "PANEL_MODELED_DELTA" in {it.code for it in rep.issues}


def test_panel_from_dict_accepts_spec_spellings():
    p = Panel.from_dict({
        "totalSlots": "30",
        "usedSlots": 12,
        "tandemsAllowed": "NotAllowed",
        "tandemPolicy": {"allowedPositions": "BottomHalfOnly"},
    })
    assert p.total_slots == 30
    assert p.tandems_allowed == TandemsAllowed.NOT_ALLOWED
    assert p.allowed_positions == TandemPositions.BOTTOM_HALF


def test_slot_warnings_are_advisory():
    p = _panel(total_slots=10, used_slots=12, tandem_slots_used=3)
    issues = panel_slot_warnings(p)
    assert issues
    assert not has_errors(issues)
