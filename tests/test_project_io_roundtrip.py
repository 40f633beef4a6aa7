# -*- coding: utf-8 -*-
"""Project file save/load round trip (tmp_path only)."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest

from core.keys import ProjectKeys as K
from domain.load_factory import build_guided_loads
from domain.load_editing import update_load
from storage.project_io import load_project, loads_project, save_project
from storage.project_paths import default_export_filename, norm_project_path
from storage.project_schema import create_initial_project
from storage.schema import PROJECT_VERSION


def _project(id_gen):
    proj = create_initial_project()
    proj[K.METADATA][K.PROJECT_NAME] = "Oak Ave"
    loads = build_guided_loads(["Electric Dryer"], 1800, id_gen)
    loads[0] = update_load(loads[0], "usage.assumedWatts", 5000)
    proj[K.LOADS] = loads
    return proj


def test_roundtrip_keeps_bookkeeping_flags(tmp_path, id_gen):
    proj = _project(id_gen)
    path = tmp_path / "sub" / "oak.json"
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    stamped = save_project(proj, path, now=now)

    assert stamped[K.METADATA][K.UPDATED_AT] == "2026-03-01T12:00:00Z"
    loaded = load_project(path)
    assert loaded == stamped
    assert loaded[K.LOADS][0]["_wattsManuallySet"] is True
    assert loaded[K.LOADS][0]["_necEdited"] is True
    assert loaded[K.META]["version"] == PROJECT_VERSION


def test_save_does_not_modify_input(tmp_path, id_gen):
    proj = _project(id_gen)
    before = json.dumps(proj, sort_keys=True)
    save_project(proj, tmp_path / "p.json")
    assert json.dumps(proj, sort_keys=True) == before


def test_loading_a_legacy_file_upgrades_it(tmp_path):
    path = tmp_path / "old.json"
    path.write_text(json.dumps({"loads": [], "battery": {"wholeHome": {"backupDays": 2}}}), encoding="utf-8")
    loaded = load_project(path)
    assert loaded[K.META]["version"] == PROJECT_VERSION
    assert loaded[K.BATTERY][K.WHOLE_HOME][K.BACKUP_MODE] == "2"


def test_load_errors_are_reported_as_ioerror(tmp_path):
    with pytest.raises(IOError):
        load_project(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(IOError, match="Failed to load project"):
        load_project(bad)

    with pytest.raises(ValueError):
        loads_project("[1, 2]")


def test_paths():
    assert norm_project_path("/tmp", "demo.json").endswith("demo.json")
    assert norm_project_path("/tmp", "demo").endswith("demo.json")
    assert norm_project_path("", "demo") == ""

    proj = create_initial_project()
    assert default_export_filename(proj, date(2026, 1, 5)) == "electrical-load-calc_2026-01-05.json"
    proj[K.METADATA][K.PROJECT_NAME] = "12/B Elm"
    assert default_export_filename(proj, date(2026, 1, 5)) == "12_B Elm_2026-01-05.json"
