# -*- coding: utf-8 -*-
"""Section keys (single source of truth).

Keep these constants stable. They are used by:
- validation pipelines (by section)
- the ``validate`` command line output
"""

from __future__ import annotations

from enum import Enum


class Section(str, Enum):
    SERVICE = "service"
    PANEL = "panel"
    LOADS = "loads"
    EV = "ev"
    BATTERY = "battery"


ALL_SECTIONS = (Section.SERVICE, Section.PANEL, Section.LOADS, Section.EV, Section.BATTERY)
