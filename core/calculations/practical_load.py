# -*- coding: utf-8 -*-
"""Practical load: raw running watts and daily energy, no demand factors."""

from __future__ import annotations

from typing import Collection, Iterable, Optional

from core.models.demand import PracticalLoadSummary
from core.models.load import Load


def compute_practical_load(
    loads: Iterable[Load],
    include_load_ids: Optional[Collection[str]] = None,
) -> PracticalLoadSummary:
    selected = [ld for ld in (loads or []) if include_load_ids is None or ld.id in include_load_ids]

    total_w = 0.0
    total_wh = 0.0
    motors = 0
    largest_w = 0.0
    largest_lra = 0.0
    for ld in selected:
        total_w += ld.watts
        total_wh += ld.daily_wh
        if ld.motor.is_motor:
            motors += 1
            largest_w = max(largest_w, ld.watts)
            largest_lra = max(largest_lra, float(ld.motor.lra or 0.0))

    return PracticalLoadSummary(
        total_running_watts=total_w,
        total_daily_wh=total_wh,
        motor_load_count=motors,
        largest_motor_watts=largest_w,
        largest_motor_lra=largest_lra,
        load_count=len(selected),
    )
