# -*- coding: utf-8 -*-
"""Tests for storage.migrations.upgrade_project_dict.

These tests should remain I/O-free and validate that:
- legacy payloads can be upgraded to the current schema version
- upgrades are idempotent (running twice does not keep changing data)
"""

from __future__ import annotations

from copy import deepcopy

from core.keys import ProjectKeys as K
from storage.migrations import migrate_v1_to_v2, project_version, upgrade_project_dict
from storage.schema import PROJECT_VERSION


def _legacy_v1():
    return {
        "metadata": {"projectName": "Maple St", "squareFootage": "2,000"},
        "service": {"serviceVoltage": "240", "mainBreakerAmps": 100},
        "panel": {"totalSlots": "30", "usedSlots": 22, "tandemsAllowed": "Allowed"},
        "loads": [
            {
                "id": "load_1",
                "description": "NEC Baseline: Small Appliance Circuit #1",
                "category": "Other",
                "isNECBaseline": True,
                "usage": {"assumedWatts": 1500, "hoursPerDay": 2},
                "_necEdited": True,
            },
            {
                "id": "load_2",
                "description": "NEC Baseline: Laundry Circuit",
                "category": "Other",
                "isNECBaseline": True,
            },
            {"id": "load_3", "description": "Small appliance shelf", "category": "Other"},
            "garbage",
        ],
        "battery": {
            "wholeHome": {"backupDays": 3, "includeEV": True},
            "partialHome": {"backupDays": 2, "enabled": True},
        },
    }


def test_upgrade_from_v1_produces_current_and_is_idempotent():
    upgraded_1 = upgrade_project_dict(deepcopy(_legacy_v1()), to_version=PROJECT_VERSION)
    assert upgraded_1[K.META]["version"] == PROJECT_VERSION
    assert project_version(upgraded_1) == PROJECT_VERSION

    # numbers coerced, missing sections filled
    assert upgraded_1["service"]["serviceVoltage"] == 240
    assert upgraded_1["service"]["busRatingAmps"] == 200
    assert upgraded_1["panel"]["totalSlots"] == 30
    assert upgraded_1["panel"]["tandemSlotsUsed"] == 0
    assert upgraded_1["panel"]["tandemPolicy"]["allowedPositions"] == "All slots"
    assert upgraded_1["ev"]["chargerCount"] == 1

    # backupDays -> backupMode
    whole = upgraded_1["battery"]["wholeHome"]
    partial = upgraded_1["battery"]["partialHome"]
    assert whole["backupMode"] == "custom"
    assert whole["customDays"] == 3
    assert whole["includeEV"] is True
    assert partial["backupMode"] == "2"
    assert partial["selections"] == {}

    # categories are carried over as stored
    cats = [ld["category"] for ld in upgraded_1["loads"]]
    assert cats == ["Other", "Other", "Other"]
    assert upgraded_1["loads"][0]["_necEdited"] is True

    upgraded_2 = upgrade_project_dict(deepcopy(upgraded_1), to_version=PROJECT_VERSION)
    assert upgraded_2 == upgraded_1


def test_upgrade_does_not_mutate_input():
    legacy = _legacy_v1()
    before = deepcopy(legacy)
    upgrade_project_dict(legacy)
    assert legacy == before


def test_v1_to_v2_is_idempotent():
    once = migrate_v1_to_v2(_legacy_v1())
    assert migrate_v1_to_v2(once) == once
    assert once[K.META]["version"] == 2


def test_newer_payload_is_returned_as_copy():
    future = {"_meta": {"version": PROJECT_VERSION + 1}, "loads": "kept as is"}
    out = upgrade_project_dict(future)
    assert out == future
    assert out is not future


def test_non_dict_payload_becomes_empty_project():
    out = upgrade_project_dict(["nope"])
    assert out[K.META]["version"] == PROJECT_VERSION
    assert out["loads"] == []


def test_normalize_project_fills_sections_and_coerces_numbers():
    from storage.project_schema import normalize_project

    raw = {
        K.SERVICE: {K.MAIN_BREAKER_AMPS: "200"},
        K.PANEL: {K.TOTAL_SLOTS: "40", K.USED_SLOTS: 12.0},
        K.EV: {K.EV_CHARGER_COUNT: 9},
        K.LOADS: [{"id": "a"}, "junk", None],
        "_necEdited": True,
    }
    out = normalize_project(raw)
    assert out[K.SERVICE][K.MAIN_BREAKER_AMPS] == 200
    assert out[K.PANEL][K.TOTAL_SLOTS] == 40
    assert out[K.PANEL][K.USED_SLOTS] == 12
    assert out[K.EV][K.EV_CHARGER_COUNT] == 4
    assert out[K.LOADS] == [{"id": "a"}]
    assert out["_necEdited"] is True
    assert K.BATTERY in out and K.METADATA in out
    assert raw[K.EV][K.EV_CHARGER_COUNT] == 9
