# -*- coding: utf-8 -*-
"""EV charger addition feasibility.

Combines a capacity check (NEC demand with and without the chargers) and a
space check (slots implied by the load list versus 2 per charger) into one
recommendation tier. Tiers are evaluated in order; the first match wins.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from core.calculations.nec_demand import compute_nec_demand
from core.calculations.panel_slots import modeled_slots_consumed, tandem_capable_slots
from core.models.categories import LoadCategory
from core.models.demand import ServiceStatus
from core.models.ev import ChargerRequest, EVFeasibilityResult, EVRecommendation
from core.models.load import Breaker, Load, Usage
from core.models.panel import Panel, Service, TandemsAllowed
from domain.catalog import MAX_EV_CHARGERS

CONTINUOUS_LOAD_FACTOR = 1.25
BREAKER_STEP_A = 5
EV_BACKUP_HOURS_PER_DAY = 4.0


def required_breaker_amps(continuous_amps: float) -> int:
    """125 % of continuous current, rounded up to the next 5 A step."""
    if continuous_amps <= 0:
        return 0
    return int(math.ceil(round(continuous_amps * CONTINUOUS_LOAD_FACTOR / BREAKER_STEP_A, 9)) * BREAKER_STEP_A)


def charger_breaker_amps(charger: ChargerRequest) -> int:
    if charger.is_custom or not charger.recommended_breaker_amps:
        return required_breaker_amps(charger.continuous_amps)
    return int(charger.recommended_breaker_amps)


def charger_count(charger: ChargerRequest) -> int:
    return max(1, min(MAX_EV_CHARGERS, int(charger.count or 1)))


def build_ev_loads(
    charger: ChargerRequest,
    service: Service,
    *,
    id_prefix: str = "_proposedEV_",
    hours_per_day: float = EV_BACKUP_HOURS_PER_DAY,
) -> List[Load]:
    """One synthetic 2-pole EV charger load per charger."""
    watts = float(charger.continuous_amps) * float(service.service_voltage)
    breaker = Breaker(poles=2, amps=charger_breaker_amps(charger))
    return [
        Load(
            id=f"{id_prefix}{i}",
            category=LoadCategory.EV_CHARGER,
            description=f"Proposed EV Charger {i + 1}",
            breaker=breaker,
            usage=Usage(assumed_watts=watts, hours_per_day=hours_per_day),
        )
        for i in range(charger_count(charger))
    ]


def recommend(
    with_ev_status: ServiceStatus,
    has_space: bool,
    can_use_tandems: bool,
) -> EVRecommendation:
    if with_ev_status == ServiceStatus.UNDERSIZED:
        return EVRecommendation.SERVICE_UPGRADE
    if not has_space and not can_use_tandems:
        return EVRecommendation.SUBPANEL
    if not has_space:
        return EVRecommendation.REQUIRES_TANDEMS
    if with_ev_status == ServiceStatus.BORDERLINE:
        return EVRecommendation.BORDERLINE
    return EVRecommendation.ADD_AS_IS


def evaluate_ev_feasibility(
    service: Service,
    panel: Panel,
    loads: Iterable[Load],
    charger: Optional[ChargerRequest],
    square_footage: Optional[float] = None,
) -> Optional[EVFeasibilityResult]:
    """Return None when no charger is selected."""
    if charger is None:
        return None
    loads = list(loads or [])
    count = charger_count(charger)
    ev_loads = build_ev_loads(charger, service)

    nec_without = compute_nec_demand(loads, service, square_footage)
    nec_with = compute_nec_demand(loads + ev_loads, service, square_footage)

    modeled = modeled_slots_consumed(loads) if loads else int(panel.used_slots)
    available = max(0, int(panel.total_slots) - modeled)
    needed = 2 * count
    has_space = available >= needed
    can_use_tandems = panel.tandems_allowed == TandemsAllowed.ALLOWED and tandem_capable_slots(panel) > 0

    each = float(charger.continuous_amps) * float(service.service_voltage)
    return EVFeasibilityResult(
        charger_label=charger.label,
        continuous_amps=float(charger.continuous_amps),
        breaker_amps=charger_breaker_amps(charger),
        ev_watts_each=each,
        ev_watts_total=each * count,
        charger_count=count,
        modeled_used_slots=modeled,
        available_slots=available,
        slots_needed=needed,
        has_space=has_space,
        can_use_tandems=can_use_tandems,
        nec_without_ev=nec_without,
        nec_with_ev=nec_with,
        recommendation=recommend(nec_with.status, has_space, can_use_tandems),
    )
