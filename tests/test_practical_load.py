# -*- coding: utf-8 -*-

from __future__ import annotations

from conftest import make_load
from core.calculations.practical_load import compute_practical_load
from core.models.load import Load


def _loads():
    return [
        Load.from_dict(make_load("a", watts=1000, hours=2)),
        Load.from_dict(make_load("b", category="AC Condenser", watts=3500, hours=8, poles=2, isMotor=True, lra=80)),
        Load.from_dict(make_load("c", category="Sump Pump", watts=800, hours=1, isMotor=True)),
    ]


def test_sums_every_load_without_factors():
    s = compute_practical_load(_loads())
    assert s.total_running_watts == 5300
    assert s.total_daily_wh == 2000 + 28000 + 800
    assert round(s.total_daily_kwh, 3) == 30.8
    assert s.load_count == 3


def test_motor_statistics():
    s = compute_practical_load(_loads())
    assert s.motor_load_count == 2
    assert s.largest_motor_watts == 3500
    assert s.largest_motor_lra == 80


def test_include_ids_filter():
    s = compute_practical_load(_loads(), include_load_ids={"a", "c"})
    assert s.total_running_watts == 1800
    assert s.load_count == 2
    assert s.largest_motor_lra == 0


def test_empty():
    s = compute_practical_load([])
    assert s.total_running_watts == 0
    assert s.motor_load_count == 0
