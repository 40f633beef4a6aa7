# -*- coding: utf-8 -*-
"""EV charger feasibility (pure)."""

from __future__ import annotations

import pytest

from conftest import make_load
from core.calculations.ev_feasibility import (
    build_ev_loads,
    charger_breaker_amps,
    evaluate_ev_feasibility,
    recommend,
    required_breaker_amps,
)
from core.models.demand import ServiceStatus
from core.models.ev import ChargerRequest, EVRecommendation
from core.models.load import Load
from core.models.panel import Panel, Service, TandemsAllowed

SERVICE = Service(service_voltage=240, main_breaker_amps=200, bus_rating_amps=200)
CHARGER_48 = ChargerRequest(label="48A (60A breaker)", continuous_amps=48, recommended_breaker_amps=60)


def _loads(*entries):
    return [Load.from_dict(e) for e in entries]


@pytest.mark.parametrize("amps,expected", [(16, 20), (24, 30), (30, 40), (32, 40), (40, 50), (48, 60), (0, 0)])
def test_required_breaker_amps(amps, expected):
    assert required_breaker_amps(amps) == expected


def test_custom_charger_breaker_is_derived():
    custom = ChargerRequest(label="Custom", continuous_amps=30, recommended_breaker_amps=60, is_custom=True)
    assert charger_breaker_amps(custom) == 40
    assert charger_breaker_amps(CHARGER_48) == 60


def test_build_ev_loads():
    charger = ChargerRequest(label="40A", continuous_amps=40, recommended_breaker_amps=50, count=2)
    evs = build_ev_loads(charger, Service(service_voltage=208))
    assert [ld.id for ld in evs] == ["_proposedEV_0", "_proposedEV_1"]
    assert all(ld.breaker.poles == 2 and ld.breaker.amps == 50 for ld in evs)
    assert evs[0].watts == 40 * 208


def test_no_charger_returns_none():
    assert evaluate_ev_feasibility(SERVICE, Panel(), [], None) is None


def test_empty_load_list_uses_declared_slots():
    panel = Panel(total_slots=40, used_slots=20)
    res = evaluate_ev_feasibility(SERVICE, panel, [], CHARGER_48)
    assert res.modeled_used_slots == 20
    assert res.available_slots == 20
    assert res.slots_needed == 2
    assert res.has_space
    assert res.ev_watts_each == 11520
    assert round(res.nec_without_ev.total_demand_va, 3) == 9000.0
    assert round(res.nec_with_ev.total_demand_va, 3) == 20520.0
    assert res.recommendation == EVRecommendation.ADD_AS_IS


def test_undersized_wins_even_with_space():
    loads = _loads(make_load("hp", category="Heat Pump", watts=6000, poles=2))
    small = Service(service_voltage=240, main_breaker_amps=100, bus_rating_amps=100)
    res = evaluate_ev_feasibility(small, Panel(total_slots=40, used_slots=2), loads, CHARGER_48)
    assert res.has_space
    assert res.nec_with_ev.status == ServiceStatus.UNDERSIZED
    assert res.recommendation == EVRecommendation.SERVICE_UPGRADE


def test_full_panel_without_tandems_needs_subpanel():
    loads = _loads(make_load("a", poles=2), make_load("b", poles=2))
    panel = Panel(total_slots=4, used_slots=4, tandems_allowed=TandemsAllowed.NOT_ALLOWED)
    res = evaluate_ev_feasibility(SERVICE, panel, loads, CHARGER_48)
    assert res.available_slots == 0
    assert not res.has_space
    assert res.recommendation == EVRecommendation.SUBPANEL


def test_full_panel_with_tandems():
    loads = _loads(make_load("a", poles=2), make_load("b", poles=2))
    panel = Panel(total_slots=4, used_slots=4, tandems_allowed=TandemsAllowed.ALLOWED)
    res = evaluate_ev_feasibility(SERVICE, panel, loads, CHARGER_48)
    assert res.can_use_tandems
    assert res.recommendation == EVRecommendation.REQUIRES_TANDEMS


def test_borderline_capacity():
    loads = _loads(make_load("big", watts=20000, poles=2))
    res = evaluate_ev_feasibility(SERVICE, Panel(total_slots=40, used_slots=2), loads, CHARGER_48)
    assert res.nec_with_ev.status == ServiceStatus.BORDERLINE
    assert res.recommendation == EVRecommendation.BORDERLINE


def test_charger_count_is_clamped_and_scales_slots():
    charger = ChargerRequest(label="32A", continuous_amps=32, recommended_breaker_amps=40, count=9)
    res = evaluate_ev_feasibility(SERVICE, Panel(total_slots=40, used_slots=10), [], charger)
    assert res.charger_count == 4
    assert res.slots_needed == 8
    assert res.ev_watts_total == 4 * 32 * 240


def test_recommend_order():
    assert recommend(ServiceStatus.UNDERSIZED, False, False) == EVRecommendation.SERVICE_UPGRADE
    assert recommend(ServiceStatus.BORDERLINE, False, False) == EVRecommendation.SUBPANEL
    assert recommend(ServiceStatus.BORDERLINE, False, True) == EVRecommendation.REQUIRES_TANDEMS
    assert recommend(ServiceStatus.BORDERLINE, True, False) == EVRecommendation.BORDERLINE
    assert recommend(ServiceStatus.OK, True, False) == EVRecommendation.ADD_AS_IS
