# -*- coding: utf-8 -*-
"""CalcService smoke + consistency (no I/O)."""

from __future__ import annotations

import copy
import json

from core.keys import ProjectKeys as K
from domain.load_factory import build_guided_loads
from services.calc_service import CalcService
from storage.project_schema import create_initial_project


def _project(id_gen):
    proj = create_initial_project()
    proj[K.METADATA][K.PROJECT_NAME] = "Birch Ln"
    proj[K.METADATA][K.SQUARE_FOOTAGE] = 2000
    proj[K.LOADS] = build_guided_loads(["Range/Oven", "Electric Dryer", "AC Condenser", "Refrigerator"], 2000, id_gen)
    proj[K.EV][K.EV_CHARGER_OPTION] = {"label": "48A (60A breaker)", "continuousAmps": 48, "recommendedBreakerAmps": 60}
    return proj


def test_compute_returns_bundle_and_serializable_summary(id_gen):
    bundle, summary = CalcService().compute(_project(id_gen))
    json.dumps(summary)

    assert summary["panel"]["modeledSlots"] == bundle.panel.modeled_slots
    assert summary["nec"]["status"] == bundle.nec.status.value
    assert summary["ev"]["breakerAmps"] == 60
    assert summary["battery"]["partialHome"] is None
    assert set(summary["battery"]["wholeHome"]) == {
        "summary", "enphase5P", "enphase10C", "enphaseMixed", "teslaPW3Only", "teslaPW3WithExpansions",
    }


def test_lighting_comes_from_the_baseline_load(id_gen):
    bundle, _ = CalcService().compute(_project(id_gen))
    assert bundle.nec.general_lighting_va == 6000


def test_ev_charger_is_not_in_battery_unless_included(id_gen):
    proj = _project(id_gen)
    without, _ = CalcService().compute(proj)

    proj[K.BATTERY][K.WHOLE_HOME][K.INCLUDE_EV] = True
    with_ev, _ = CalcService().compute(proj)
    assert with_ev.whole_home.load_count == without.whole_home.load_count + 1
    assert round(with_ev.whole_home.requirement.peak_kw - without.whole_home.requirement.peak_kw, 3) == 11.52


def test_partial_home_uses_selected_loads_and_hours(id_gen):
    proj = _project(id_gen)
    fridge = [ld for ld in proj[K.LOADS] if ld["category"] == "Refrigerator"][0]
    partial = proj[K.BATTERY][K.PARTIAL_HOME]
    partial[K.ENABLED] = True
    partial[K.SELECTIONS] = {fridge["id"]: {"include": True, "hoursPerDay": 12}}

    bundle, summary = CalcService().compute(proj)
    assert bundle.partial_home is not None
    assert bundle.partial_home.load_count == 1
    assert round(bundle.partial_home.daily_kwh, 3) == round(fridge["usage"]["assumedWatts"] * 12 / 1000, 3)
    assert summary["battery"]["partialHome"]["summary"]["loadCount"] == 1


def test_compute_does_not_mutate_snapshot(id_gen):
    proj = _project(id_gen)
    before = copy.deepcopy(proj)
    CalcService().compute(proj)
    assert proj == before


def test_empty_snapshot_is_tolerated():
    bundle, summary = CalcService().compute({})
    assert bundle.ev is None
    assert summary["practical"]["loadCount"] == 0
    assert summary["nec"]["totalDemandVA"] == 9000
