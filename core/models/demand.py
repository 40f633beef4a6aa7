# -*- coding: utf-8 -*-
"""Models for NEC demand and practical (sum-everything) load figures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ServiceStatus(str, Enum):
    OK = "OK"
    BORDERLINE = "Borderline"
    UNDERSIZED = "Undersized"


@dataclass(frozen=True)
class NecBreakdown:
    """Demand VA per bucket, after demand factors."""

    general_and_small_appliance: float
    fixed_appliances: float
    cooking: float
    dryer: float
    hvac: float
    other_large: float
    ev: float

    def as_rounded_dict(self) -> dict:
        return {
            "generalAndSmallAppliance": round(self.general_and_small_appliance),
            "fixedAppliances": round(self.fixed_appliances),
            "cooking": round(self.cooking),
            "dryer": round(self.dryer),
            "hvac": round(self.hvac),
            "otherLarge": round(self.other_large),
            "ev": round(self.ev),
        }


@dataclass(frozen=True)
class NecDemandResult:
    general_lighting_va: float
    general_total_va: float
    total_demand_va: float
    service_amps: float
    ratio: float
    status: ServiceStatus
    breakdown: NecBreakdown

    @property
    def total_demand_kva(self) -> float:
        return self.total_demand_va / 1000.0

    @property
    def service_amps_rounded(self) -> float:
        return round(self.service_amps, 1)

    @property
    def ratio_pct(self) -> int:
        return int(round(self.ratio * 100))


@dataclass(frozen=True)
class PracticalLoadSummary:
    total_running_watts: float
    total_daily_wh: float
    motor_load_count: int
    largest_motor_watts: float
    largest_motor_lra: float
    load_count: int

    @property
    def total_running_kw(self) -> float:
        return self.total_running_watts / 1000.0

    @property
    def total_daily_kwh(self) -> float:
        return self.total_daily_wh / 1000.0
