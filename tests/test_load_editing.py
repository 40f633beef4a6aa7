# -*- coding: utf-8 -*-
"""Load edit rules (pure dict-in, dict-out)."""

from __future__ import annotations

import copy

from domain.load_editing import (
    add_load,
    apply_category_defaults,
    breaker_watts,
    remove_load,
    reconcile_nec_baselines,
    update_load,
)
from domain.load_factory import create_load_entry, create_nec_baseline_loads, load_from_library


def test_breaker_watts():
    assert breaker_watts(120, 20) == 1200
    assert breaker_watts(240, 30, 0.7) == 5040


def test_amps_edit_reestimates_watts_and_tags_user_entered(id_gen):
    ld = create_load_entry(id_gen)
    out = update_load(ld, "breaker.amps", 20)
    assert out["breaker"]["amps"] == 20
    assert out["usage"]["assumedWatts"] == 1200
    assert out["sourceTag"] == "User-entered"
    assert ld["breaker"]["amps"] == 15


def test_manual_watts_survive_breaker_edits(id_gen):
    ld = update_load(create_load_entry(id_gen), "usage.assumedWatts", "900")
    assert ld["_wattsManuallySet"] is True
    assert ld["sourceTag"] == "User-entered"
    out = update_load(ld, "breaker.amps", 30)
    assert out["usage"]["assumedWatts"] == 900


def test_voltage_override_uses_category_utilization(id_gen):
    wh = load_from_library("Water Heater (Electric)", id_gen)
    out = update_load(wh, "breaker.voltageOverride", 208)
    assert out["breaker"]["voltageOverride"] == 208
    assert out["usage"]["assumedWatts"] == 4992


def test_tandem_and_two_pole_are_exclusive(id_gen):
    ld = update_load(create_load_entry(id_gen), "breaker.type", "Tandem")
    assert ld["breaker"]["type"] == "Tandem"
    assert ld["tandemCircuitB"]["description"] == "Tandem Circuit B"

    two = update_load(ld, "breaker.poles", 2)
    assert two["breaker"]["type"] == "Standard"
    assert two["tandemCircuitB"] is None

    again = update_load(two, "breaker.type", "Tandem")
    assert again["breaker"]["type"] == "Standard"
    assert again["tandemCircuitB"] is None


def test_tandem_b_fields(id_gen):
    ld = update_load(create_load_entry(id_gen), "breaker.type", "Tandem")
    out = update_load(ld, "tandemB.assumedWatts", 300)
    assert out["tandemCircuitB"]["assumedWatts"] == 300
    assert out["usage"]["assumedWatts"] == ld["usage"]["assumedWatts"]


def test_baseline_edits_are_marked(id_gen):
    lighting = create_nec_baseline_loads(1500, id_gen)[0]
    assert update_load(lighting, "usage.hoursPerDay", 6)["_necEdited"] is True
    assert update_load(lighting, "breaker.amps", 20)["_necEdited"] is True
    assert "_necEdited" not in update_load(lighting, "description", "Lights")


def test_hours_are_clamped(id_gen):
    out = update_load(create_load_entry(id_gen), "usage.hoursPerDay", 30)
    assert out["usage"]["hoursPerDay"] == 24.0


def test_category_change_reapplies_defaults(id_gen):
    ld = update_load(create_load_entry(id_gen), "usage.assumedWatts", 900)
    out = update_load(ld, "category", "Electric Dryer")
    assert out["category"] == "Electric Dryer"
    assert out["breaker"]["poles"] == 2
    assert out["usage"]["assumedWatts"] == 5000
    assert out["_wattsManuallySet"] is False
    assert out["sourceTag"] == "Assumed"

    same = update_load(ld, "category", "Sauna")
    assert same == ld


def test_lra_edit_tags_source(id_gen):
    ac = load_from_library("AC Condenser", id_gen)
    assert update_load(ac, "motor.lra", 95)["sourceTag"] == "User-entered"
    ac["motor"]["nameplateKnown"] = True
    out = update_load(ac, "motor.lra", "95")
    assert out["motor"]["lra"] == 95.0
    assert out["sourceTag"] == "Nameplate"


def test_add_and_remove(id_gen):
    loads = create_nec_baseline_loads(1500, id_gen)
    loads = add_load(loads, "Microwave", id_gen)
    assert len(loads) == 5
    new_id = loads[-1]["id"]

    kept, issue = remove_load(loads, loads[0]["id"])
    assert issue.code == "LOAD_BASELINE_PROTECTED"
    assert len(kept) == 5

    removed, issue = remove_load(loads, new_id)
    assert issue is None
    assert len(removed) == 4

    _same, issue = remove_load(loads, "nope")
    assert issue.code == "LOAD_NOT_FOUND"


def test_reconcile_regenerates_missing_baselines(id_gen):
    user = [load_from_library("Freezer", id_gen)]
    out = reconcile_nec_baselines(user, 1000, id_gen)
    assert len(out) == 5
    assert all(ld["isNECBaseline"] for ld in out[:4])
    assert out[0]["usage"]["assumedWatts"] == 3000
    assert out[4]["description"] == "Freezer"


def test_reconcile_drops_duplicate_baselines(id_gen):
    baselines = create_nec_baseline_loads(1500, id_gen)
    loads = baselines + copy.deepcopy(baselines[:2])
    before = copy.deepcopy(loads)
    out = reconcile_nec_baselines(loads, 1500, id_gen)
    assert len(out) == 4
    assert loads == before


def test_reconcile_leaves_partial_sets_alone(id_gen):
    baselines = create_nec_baseline_loads(1500, id_gen)[:2]
    assert reconcile_nec_baselines(baselines, 1500, id_gen) == baselines


def test_category_change_reseeds_from_library(id_gen):
    ld = create_load_entry(
        id_gen,
        breaker={"poles": 1, "amps": 20, "type": "Tandem"},
        tandemCircuitB={"description": "Bath fan"},
        sourceTag="Nameplate",
        _wattsManuallySet=True,
    )
    out = apply_category_defaults(ld, "Electric Dryer")
    assert out["category"] == "Electric Dryer"
    assert out["breaker"]["poles"] == 2
    assert out["breaker"]["amps"] == 30
    assert out["breaker"]["type"] == "Standard"
    assert out["usage"]["assumedWatts"] == 5000
    assert out["tandemCircuitB"] is None
    assert out["sourceTag"] == "Assumed"
    assert out["_wattsManuallySet"] is False
    assert ld["breaker"]["type"] == "Tandem"


def test_unknown_category_leaves_load_alone(id_gen):
    ld = create_load_entry(id_gen, category="Other")
    assert apply_category_defaults(ld, "Garage Kiln") == ld
