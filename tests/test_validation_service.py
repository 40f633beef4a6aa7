# -*- coding: utf-8 -*-

from __future__ import annotations

from core.keys import ProjectKeys as K
from core.sections import Section
from domain.load_factory import build_guided_loads
from services.validation_service import ValidationService
from storage.project_schema import create_initial_project


def _codes(items):
    return {it["code"] for it in items}


def test_clean_project_has_no_errors(id_gen):
    proj = create_initial_project()
    proj[K.LOADS] = build_guided_loads([], 1500, id_gen)
    proj[K.PANEL][K.USED_SLOTS] = 4
    by_section, flat = ValidationService().validate(proj)
    assert set(by_section) == {s.value for s in Section}
    assert not [it for it in flat if it["level"] == "error"]


def test_issues_are_grouped_by_section(id_gen):
    proj = create_initial_project()
    proj[K.SERVICE][K.SERVICE_VOLTAGE] = "abc"
    proj[K.PANEL][K.USED_SLOTS] = 50
    proj[K.LOADS] = build_guided_loads([], 1500, id_gen) + [
        {"id": "x", "category": "Sauna", "breaker": {"poles": 2, "amps": 33, "type": "Tandem"},
         "usage": {"assumedWatts": -5, "hoursPerDay": 30}, "motor": {"isMotor": True}},
    ]
    proj[K.EV][K.EV_CHARGER_OPTION] = {"label": "Custom", "isCustom": True}
    proj[K.BATTERY][K.PARTIAL_HOME][K.ENABLED] = True
    proj[K.BATTERY][K.PARTIAL_HOME][K.SELECTIONS] = {"gone": {"include": True}}

    by_section, flat = ValidationService().validate(proj)
    assert "SERVICE_VOLTAGE_INVALID" in _codes(by_section["service"])
    assert {"PANEL_USED_EXCEEDS_TOTAL", "PANEL_AVAILABLE_CLAMPED"} <= _codes(by_section["panel"])
    assert {
        "LOAD_UNKNOWN_CATEGORY",
        "LOAD_BREAKER_NONSTANDARD",
        "LOAD_TANDEM_TWO_POLE",
        "LOAD_WATTS_INVALID",
        "LOAD_HOURS_RANGE",
        "LOAD_MOTOR_LRA_UNKNOWN",
    } <= _codes(by_section["loads"])
    assert "EV_CUSTOM_AMPS_MISSING" in _codes(by_section["ev"])
    assert "BATTERY_PARTIAL_STALE" in _codes(by_section["battery"])
    assert any(it["level"] == "error" for it in flat)


def test_duplicate_ids_are_errors():
    proj = {K.LOADS: [{"id": "a"}, {"id": "a"}]}
    by_section, _ = ValidationService().validate(proj, sections=[Section.LOADS])
    assert list(by_section) == ["loads"]
    assert "LOAD_DUPLICATE_ID" in _codes(by_section["loads"])


def test_crashing_validator_is_reported():
    def boom(_data):
        raise RuntimeError("boom")

    by_section, flat = ValidationService({Section.EV: boom}).validate({}, sections=["ev"])
    assert by_section["ev"][0]["code"] == "VALIDATOR_CRASH"
    assert flat[0]["level"] == "warn"
