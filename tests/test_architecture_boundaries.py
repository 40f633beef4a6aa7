# -*- coding: utf-8 -*-
"""Layer boundaries: engines stay free of I/O, reporting and app wiring."""

from __future__ import annotations

from tools.check_architecture import find_violations


def test_no_layer_violations():
    assert find_violations() == []
