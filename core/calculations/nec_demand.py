# -*- coding: utf-8 -*-
"""NEC Optional-Method-style service demand (planning estimate).

Fixed pipeline:
  1. general lighting: sqft x 3 VA, else lighting-category loads, else 4500 VA
  2. + 3000 VA small-appliance and 1500 VA laundry allowances -> general total
  3. general total: first 10 kVA at 100 %, remainder at 40 %
  4. fixed appliances: 75 % only when four or more are present
  5. cooking: single appliance <= 12 kW -> flat 8 kVA, else 65 % of the sum
  6. dryer: max(5 kVA, sum)
  7. HVAC: larger of cooling and heating (non-coincident)
  8. other loads and 9. EV chargers at 100 %

The 8 kVA cooking and 75 % fixed-appliance rules are hard cliffs.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from core.models.categories import NecBucket
from core.models.demand import NecBreakdown, NecDemandResult, ServiceStatus
from core.models.load import Load
from core.models.panel import Service

VA_PER_SQFT = 3.0
LIGHTING_FALLBACK_VA = 4500.0
SMALL_APPLIANCE_ALLOWANCE_VA = 3000.0
LAUNDRY_ALLOWANCE_VA = 1500.0
GENERAL_FULL_DEMAND_VA = 10000.0
GENERAL_REMAINDER_FACTOR = 0.40
FIXED_APPLIANCE_FACTOR = 0.75
FIXED_APPLIANCE_MIN_COUNT = 4
SINGLE_COOKING_MAX_W = 12000.0
SINGLE_COOKING_DEMAND_VA = 8000.0
COOKING_FACTOR = 0.65
DRYER_MIN_VA = 5000.0
BORDERLINE_RATIO = 0.8


def general_demand(general_total_va: float) -> float:
    if general_total_va <= GENERAL_FULL_DEMAND_VA:
        return general_total_va
    return GENERAL_FULL_DEMAND_VA + GENERAL_REMAINDER_FACTOR * (general_total_va - GENERAL_FULL_DEMAND_VA)


def service_status(ratio: float) -> ServiceStatus:
    if ratio > 1.0:
        return ServiceStatus.UNDERSIZED
    if ratio > BORDERLINE_RATIO:
        return ServiceStatus.BORDERLINE
    return ServiceStatus.OK


def _watts(loads: List[Load], bucket: NecBucket) -> List[float]:
    return [ld.watts for ld in loads if ld.bucket == bucket]


def compute_nec_demand(
    loads: Iterable[Load],
    service: Service,
    square_footage: Optional[float] = None,
) -> NecDemandResult:
    loads = list(loads or [])

    if square_footage is not None and square_footage > 0:
        lighting = float(square_footage) * VA_PER_SQFT
    else:
        lighting = sum(_watts(loads, NecBucket.LIGHTING))
        if lighting <= 0:
            lighting = LIGHTING_FALLBACK_VA

    general_total = lighting + SMALL_APPLIANCE_ALLOWANCE_VA + LAUNDRY_ALLOWANCE_VA
    demand_general = general_demand(general_total)

    fixed = _watts(loads, NecBucket.FIXED_APPLIANCE)
    demand_fixed = sum(fixed)
    if len(fixed) >= FIXED_APPLIANCE_MIN_COUNT:
        demand_fixed *= FIXED_APPLIANCE_FACTOR

    cooking = _watts(loads, NecBucket.COOKING)
    if len(cooking) == 1 and cooking[0] <= SINGLE_COOKING_MAX_W:
        demand_cooking = SINGLE_COOKING_DEMAND_VA
    else:
        demand_cooking = COOKING_FACTOR * sum(cooking)

    dryers = _watts(loads, NecBucket.DRYER)
    demand_dryer = max(DRYER_MIN_VA, sum(dryers)) if dryers else 0.0

    demand_hvac = max(sum(_watts(loads, NecBucket.COOLING)), sum(_watts(loads, NecBucket.HEATING)))
    demand_other = sum(_watts(loads, NecBucket.OTHER))
    demand_ev = sum(_watts(loads, NecBucket.EV))

    total = demand_general + demand_fixed + demand_cooking + demand_dryer + demand_hvac + demand_other + demand_ev
    amps = total / float(service.service_voltage)
    ratio = amps / float(service.main_breaker_amps)

    return NecDemandResult(
        general_lighting_va=lighting,
        general_total_va=general_total,
        total_demand_va=total,
        service_amps=amps,
        ratio=ratio,
        status=service_status(ratio),
        breakdown=NecBreakdown(
            general_and_small_appliance=demand_general,
            fixed_appliances=demand_fixed,
            cooking=demand_cooking,
            dryer=demand_dryer,
            hvac=demand_hvac,
            other_large=demand_other,
            ev=demand_ev,
        ),
    )
