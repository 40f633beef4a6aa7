# -*- coding: utf-8 -*-
"""Models for EV charger addition feasibility."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.models.demand import NecDemandResult


class EVRecommendation(str, Enum):
    SERVICE_UPGRADE = "Service upgrade recommended"
    SUBPANEL = "Subpanel recommended"
    REQUIRES_TANDEMS = "Requires tandems to free space"
    BORDERLINE = "Feasible but borderline capacity"
    ADD_AS_IS = "Add as-is"


@dataclass(frozen=True)
class ChargerRequest:
    """A selected charger option (catalog or custom) and how many to add."""

    label: str
    continuous_amps: float
    recommended_breaker_amps: int = 0
    is_custom: bool = False
    count: int = 1


@dataclass(frozen=True)
class EVFeasibilityResult:
    charger_label: str
    continuous_amps: float
    breaker_amps: int
    ev_watts_each: float
    ev_watts_total: float
    charger_count: int
    modeled_used_slots: int
    available_slots: int
    slots_needed: int
    has_space: bool
    can_use_tandems: bool
    nec_without_ev: NecDemandResult
    nec_with_ev: NecDemandResult
    recommendation: EVRecommendation
