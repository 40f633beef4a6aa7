# -*- coding: utf-8 -*-
"""Load model parsing and derived quantities (pure)."""

from __future__ import annotations

import pytest

from conftest import make_load
from core.models.categories import LoadCategory, NecBucket, resolve_category
from core.models.load import BreakerType, Load, SourceTag


@pytest.mark.parametrize(
    "poles,btype,expected",
    [(1, "Standard", 1), (2, "Standard", 2), (1, "Tandem", 1), (2, "Tandem", 2)],
)
def test_slots_consumed(poles, btype, expected):
    ld = Load.from_dict(make_load("a", poles=poles, type=btype))
    assert ld.slots_consumed == expected


def test_two_pole_tandem_is_read_as_standard():
    ld = Load.from_dict(make_load("a", poles=2, type="Tandem"))
    assert ld.breaker.type == BreakerType.STANDARD
    assert not ld.is_tandem


def test_voltage_rules():
    one = Load.from_dict(make_load("a", poles=1))
    two = Load.from_dict(make_load("b", poles=2))
    assert one.voltage(240) == 120.0
    assert two.voltage(208) == 208.0

    d = make_load("c", poles=2)
    d["breaker"]["voltageOverride"] = 277
    assert Load.from_dict(d).voltage(240) == 277.0


def test_daily_wh_and_bucket():
    ld = Load.from_dict(make_load("a", category="Electric Dryer", watts=5000, hours=1.5))
    assert ld.daily_wh == 7500.0
    assert ld.bucket == NecBucket.DRYER


def test_tolerant_numbers_and_clamps():
    d = make_load("a", category="Dishwasher", watts="1,200", hours=30)
    ld = Load.from_dict(d)
    assert ld.watts == 1200.0
    assert ld.usage.hours_per_day == 24.0

    d = make_load("b", watts=-50, lra=-3, isMotor=True)
    ld = Load.from_dict(d)
    assert ld.watts == 0.0
    assert ld.motor.lra == 0.0


def test_blank_watts_fall_back_to_category_default():
    d = make_load("a", category="Microwave", watts="")
    assert Load.from_dict(d).watts == 1200.0


def test_unknown_category_resolves_to_other():
    ld = Load.from_dict(make_load("a", category="Sauna Heater", watts=""))
    assert ld.category == LoadCategory.OTHER
    assert ld.category_known is False
    assert ld.watts == 500.0


def test_resolve_category_accepts_names_and_spacing():
    assert resolve_category("  ev   charger ") == (LoadCategory.EV_CHARGER, True)
    assert resolve_category("WATER_HEATER") == (LoadCategory.WATER_HEATER, True)
    assert resolve_category(None) == (LoadCategory.OTHER, False)


def test_source_tag_is_informational():
    d = make_load("a", watts=800)
    d["sourceTag"] = "Nameplate"
    tagged = Load.from_dict(d)
    d["sourceTag"] = "bogus"
    untagged = Load.from_dict(d)
    assert tagged.source_tag == SourceTag.NAMEPLATE
    assert untagged.source_tag == SourceTag.ASSUMED
    assert tagged.watts == untagged.watts


def test_with_hours_returns_new_load():
    ld = Load.from_dict(make_load("a", hours=4))
    ld2 = ld.with_hours(30)
    assert ld.usage.hours_per_day == 4.0
    assert ld2.usage.hours_per_day == 24.0
