# -*- coding: utf-8 -*-
"""Models for battery backup sizing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from core.types import Issue


class BatteryConfig(str, Enum):
    ENPHASE_5P = "enphase5P"
    ENPHASE_10C = "enphase10C"
    ENPHASE_MIXED = "enphaseMixed"
    TESLA_PW3 = "teslaPW3Only"
    TESLA_PW3_EXPANSIONS = "teslaPW3WithExpansions"


class BindingConstraint(str, Enum):
    ENERGY = "Energy"
    POWER = "Power"
    MOTOR_START = "Motor Start"


@dataclass(frozen=True)
class BatterySpec:
    """Static product data (not user editable).

    ``motor_start_lra`` is None for products without a motor-start rating.
    Leader products use ``max_units`` as the max leader count; energy-only
    expansions set ``max_per_leader`` instead.
    """

    key: str
    label: str
    short_label: str
    usable_kwh: float
    continuous_kw: float = 0.0
    motor_start_lra: Optional[float] = None
    max_units: Optional[int] = None
    max_per_leader: Optional[int] = None


@dataclass(frozen=True)
class SizingRequirement:
    """What the selected loads demand from any battery configuration."""

    energy_kwh: float
    peak_kw: float
    largest_lra: float
    has_unknown_motor_lra: bool


@dataclass(frozen=True)
class SingleProductSizing:
    config: BatteryConfig
    label: str
    count: int
    for_energy: int
    for_power: int
    for_motor_start: int
    binding: BindingConstraint
    max_units: int
    total_kwh: float
    total_kw: float
    feasible: bool
    reason: Optional[str] = None
    motor_start_warning: Optional[str] = None

    @property
    def not_feasible(self) -> bool:
        return not self.feasible


@dataclass(frozen=True)
class MixedSizing:
    config: BatteryConfig
    label: str
    count_10c: int
    count_5p: int
    total_units: int
    max_units: int
    total_kwh: float
    total_kw: float
    feasible: bool
    reason: Optional[str] = None
    motor_start_warning: Optional[str] = None

    @property
    def not_feasible(self) -> bool:
        return not self.feasible


@dataclass(frozen=True)
class LeaderExpansionSizing:
    config: BatteryConfig
    label: str
    leaders: int
    leaders_required: int
    expansions: int
    expansions_required: int
    max_expansions: int
    total_kwh: float
    total_kw: float
    feasible: bool
    reason: Optional[str] = None
    motor_start_warning: Optional[str] = None

    @property
    def total_units(self) -> int:
        return self.leaders + self.expansions

    @property
    def not_feasible(self) -> bool:
        return not self.feasible


@dataclass(frozen=True)
class BatterySizingReport:
    """Five independent sizings plus the requirement summary they share."""

    requirement: SizingRequirement
    backup_days: float
    solar_offset_percent: float
    load_count: int
    daily_kwh: float
    enphase_5p: SingleProductSizing
    enphase_10c: SingleProductSizing
    enphase_mixed: MixedSizing
    tesla_pw3: SingleProductSizing
    tesla_pw3_expansions: LeaderExpansionSizing
    issues: Tuple[Issue, ...] = field(default_factory=tuple)

    @property
    def total_energy_needed_kwh(self) -> float:
        return round(self.requirement.energy_kwh, 1)

    @property
    def peak_power_kw(self) -> float:
        return round(self.requirement.peak_kw, 1)

    def configurations(self):
        return (
            self.enphase_5p,
            self.enphase_10c,
            self.enphase_mixed,
            self.tesla_pw3,
            self.tesla_pw3_expansions,
        )
