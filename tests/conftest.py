# -*- coding: utf-8 -*-

"""Pytest configuration.

The repository uses a flat layout of top-level packages. For local testing
we add the repository root to sys.path so that imports like `from core...`
work without installing.
"""

from __future__ import annotations

import os
import sys

import pytest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def id_gen():
    from domain.ids import SequentialIdGenerator

    return SequentialIdGenerator()


@pytest.fixture
def user_home(tmp_path, monkeypatch):
    """Point per-user data (settings, logs, library) at a temp dir."""
    home = tmp_path / "home"
    monkeypatch.setenv("LOADCALC_HOME", str(home))
    return home


def make_load(id, category="Other", watts=500, hours=4, poles=1, amps=15, **extra):
    """Snapshot-shaped load entry for tests."""
    d = {
        "id": id,
        "description": extra.pop("description", id),
        "category": category,
        "isNECBaseline": extra.pop("isNECBaseline", False),
        "breaker": {"poles": poles, "amps": amps, "type": extra.pop("type", "Standard"), "voltageOverride": None},
        "usage": {
            "assumedWatts": watts,
            "hoursPerDay": hours,
            "includeInServiceCalc": True,
            "includeInBatteryCalc": extra.pop("battery", True),
        },
        "motor": {"isMotor": extra.pop("isMotor", False), "lra": extra.pop("lra", None)},
        "sourceTag": "Assumed",
    }
    d.update(extra)
    return d
