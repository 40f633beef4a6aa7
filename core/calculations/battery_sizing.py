# -*- coding: utf-8 -*-
"""Battery backup sizing across five product configurations.

Each configuration is sized independently from one shared requirement:
  - energy  = daily kWh x backup days x (1 - solar offset), floored at 0
  - power   = total running kW of the selected loads (no diversity)
  - motor   = largest LRA among motor loads in the selection

Sizing is greedy and closed-form. A configuration whose requirement exceeds
the product maximum is still returned, flagged ``feasible=False`` with the
required counts kept and totals computed on the capped counts.

NOTE: pure functions; inputs are never mutated.
"""

from __future__ import annotations

import math
from typing import Collection, Dict, Iterable, List, Mapping, Optional, Tuple

from core.calculations.practical_load import compute_practical_load
from core.models.battery import (
    BatteryConfig,
    BatterySizingReport,
    BatterySpec,
    BindingConstraint,
    LeaderExpansionSizing,
    MixedSizing,
    SingleProductSizing,
    SizingRequirement,
)
from core.models.load import Load
from core.types import Issue, Severity
from domain.catalog import BATTERY_SPECS, CONFIG_LABELS, library_entry
from domain.parse import clamp, to_float

MIN_BACKUP_DAYS = 0.25

UNKNOWN_LRA_WARNING = "Some motor loads have unknown LRA. Conservative estimates applied."
NOT_RATED_WARNING = "Motor start capability not rated for {label}. Verify with the manufacturer."


def _ceil_div(value: float, per_unit: float) -> int:
    if per_unit <= 0 or value <= 0:
        return 0
    # round() absorbs float noise such as 24.000000000000004 / 5
    return int(math.ceil(round(value / per_unit, 9)))


def _binding(for_energy: int, for_power: int, for_motor: int) -> BindingConstraint:
    top = max(for_energy, for_power, for_motor)
    if for_energy == top:
        return BindingConstraint.ENERGY
    if for_power == top:
        return BindingConstraint.POWER
    return BindingConstraint.MOTOR_START


# ---------- selection ----------

def select_battery_loads(
    loads: Iterable[Load],
    *,
    include_load_ids: Optional[Collection[str]] = None,
    partial_selections: Optional[Mapping[str, Mapping]] = None,
    proposed_ev_loads: Optional[Iterable[Load]] = None,
) -> List[Load]:
    """Loads that feed battery sizing, with per-load hour overrides applied."""
    loads = list(loads or [])
    if include_load_ids is not None:
        ids = set(include_load_ids)
        selected = [ld for ld in loads if ld.id in ids]
    else:
        selected = [ld for ld in loads if ld.usage.include_in_battery_calc]
    selected.extend(proposed_ev_loads or [])

    if partial_selections:
        out = []
        for ld in selected:
            sel = partial_selections.get(ld.id)
            hours = to_float(sel.get("hoursPerDay")) if isinstance(sel, Mapping) else None
            out.append(ld.with_hours(hours) if hours is not None else ld)
        selected = out
    return selected


def _effective_lra(ld: Load) -> float:
    if ld.motor.lra:
        return float(ld.motor.lra)
    # Unknown LRA: assume the category's typical locked-rotor current.
    return float(library_entry(ld.category).default_lra or 0.0)


def build_requirement(
    loads: List[Load],
    backup_days: float,
    solar_offset_percent: float = 0.0,
) -> Tuple[SizingRequirement, float]:
    practical = compute_practical_load(loads)
    daily_kwh = practical.total_daily_kwh
    energy = daily_kwh * backup_days
    if solar_offset_percent > 0:
        energy *= 1.0 - solar_offset_percent / 100.0
    energy = max(0.0, energy)

    motors = [ld for ld in loads if ld.motor.is_motor]
    largest_lra = max((_effective_lra(ld) for ld in motors), default=0.0)
    req = SizingRequirement(
        energy_kwh=energy,
        peak_kw=practical.total_running_kw,
        largest_lra=largest_lra,
        has_unknown_motor_lra=any(ld.has_unknown_lra for ld in motors),
    )
    return req, daily_kwh


# ---------- per configuration ----------

def _motor_warning(spec: Optional[BatterySpec], req: SizingRequirement) -> Optional[str]:
    if not req.has_unknown_motor_lra:
        return None
    if spec is not None and spec.motor_start_lra is None:
        return NOT_RATED_WARNING.format(label=spec.short_label)
    return UNKNOWN_LRA_WARNING


def _for_motor(spec: BatterySpec, req: SizingRequirement) -> int:
    if not spec.motor_start_lra or req.largest_lra <= 0:
        return 0
    return _ceil_div(req.largest_lra, spec.motor_start_lra)


def size_single_product(config: BatteryConfig, spec: BatterySpec, req: SizingRequirement) -> SingleProductSizing:
    for_energy = _ceil_div(req.energy_kwh, spec.usable_kwh)
    for_power = _ceil_div(req.peak_kw, spec.continuous_kw)
    for_motor = _for_motor(spec, req)
    count = max(for_energy, for_power, for_motor, 1)

    max_units = int(spec.max_units or count)
    feasible = count <= max_units
    capped = min(count, max_units)
    return SingleProductSizing(
        config=config,
        label=CONFIG_LABELS[config],
        count=count,
        for_energy=for_energy,
        for_power=for_power,
        for_motor_start=for_motor,
        binding=_binding(for_energy, for_power, for_motor),
        max_units=max_units,
        total_kwh=capped * spec.usable_kwh,
        total_kw=capped * spec.continuous_kw,
        feasible=feasible,
        reason=None if feasible else f"Exceeds maximum configuration ({max_units} {spec.short_label} max)",
        motor_start_warning=_motor_warning(spec, req),
    )


def size_enphase_mixed(spec_10c: BatterySpec, spec_5p: BatterySpec, req: SizingRequirement) -> MixedSizing:
    """10C units cover power and motor start; 5P units top up the remaining energy."""
    count_10c = max(_ceil_div(req.peak_kw, spec_10c.continuous_kw), _for_motor(spec_10c, req), 1)
    remaining = max(0.0, req.energy_kwh - count_10c * spec_10c.usable_kwh)
    count_5p = _ceil_div(remaining, spec_5p.usable_kwh)

    total = count_10c + count_5p
    max_units = int(spec_10c.max_units or 0) + int(spec_5p.max_units or 0)
    feasible = total <= max_units
    return MixedSizing(
        config=BatteryConfig.ENPHASE_MIXED,
        label=CONFIG_LABELS[BatteryConfig.ENPHASE_MIXED],
        count_10c=count_10c,
        count_5p=count_5p,
        total_units=total,
        max_units=max_units,
        total_kwh=count_10c * spec_10c.usable_kwh + count_5p * spec_5p.usable_kwh,
        total_kw=count_10c * spec_10c.continuous_kw + count_5p * spec_5p.continuous_kw,
        feasible=feasible,
        reason=None if feasible else f"Exceeds maximum combined unit count ({max_units} units max)",
        motor_start_warning=_motor_warning(None, req),
    )


def size_leader_expansion(leader: BatterySpec, expansion: BatterySpec, req: SizingRequirement) -> LeaderExpansionSizing:
    """Leaders carry power and motor start; expansions add energy only."""
    leaders_required = max(_ceil_div(req.peak_kw, leader.continuous_kw), _for_motor(leader, req), 1)
    max_leaders = int(leader.max_units or leaders_required)
    leaders = min(leaders_required, max_leaders)

    remaining = max(0.0, req.energy_kwh - leaders * leader.usable_kwh)
    expansions_required = _ceil_div(remaining, expansion.usable_kwh)
    per_leader = int(expansion.max_per_leader or 0)
    max_expansions = leaders * per_leader
    expansions = min(expansions_required, max_expansions)

    reasons = []
    if leaders_required > max_leaders:
        reasons.append(
            f"Needs {leaders_required} {leader.short_label} leaders for power/motor start but max is {max_leaders}"
        )
    if expansions_required > max_expansions:
        shortfall = remaining - max_expansions * expansion.usable_kwh
        reasons.append(
            f"Needs {expansions_required} expansions but max is {max_expansions} "
            f"({per_leader} per leader); {shortfall:.1f} kWh short"
        )
    return LeaderExpansionSizing(
        config=BatteryConfig.TESLA_PW3_EXPANSIONS,
        label=CONFIG_LABELS[BatteryConfig.TESLA_PW3_EXPANSIONS],
        leaders=leaders,
        leaders_required=leaders_required,
        expansions=expansions,
        expansions_required=expansions_required,
        max_expansions=max_expansions,
        total_kwh=leaders * leader.usable_kwh + expansions * expansion.usable_kwh,
        total_kw=leaders * leader.continuous_kw,
        feasible=not reasons,
        reason="; ".join(reasons) or None,
        motor_start_warning=_motor_warning(leader, req),
    )


# ---------- entry point ----------

def size_batteries(
    loads: Iterable[Load],
    backup_days: float,
    *,
    include_load_ids: Optional[Collection[str]] = None,
    partial_selections: Optional[Mapping[str, Mapping]] = None,
    solar_offset_percent: float = 0.0,
    proposed_ev_loads: Optional[Iterable[Load]] = None,
    specs: Optional[Dict[str, BatterySpec]] = None,
) -> BatterySizingReport:
    specs = specs or BATTERY_SPECS
    issues: List[Issue] = []

    days = to_float(backup_days, MIN_BACKUP_DAYS) or 0.0
    if days < MIN_BACKUP_DAYS:
        issues.append(Issue(
            code="BATTERY_BACKUP_DAYS_CLAMPED",
            message=f"Backup duration raised to the {MIN_BACKUP_DAYS} day minimum.",
            severity=Severity.INFO,
            context="backupDays",
        ))
        days = MIN_BACKUP_DAYS

    offset = clamp(to_float(solar_offset_percent, 0.0) or 0.0, 0.0, 100.0)

    selected = select_battery_loads(
        loads,
        include_load_ids=include_load_ids,
        partial_selections=partial_selections,
        proposed_ev_loads=proposed_ev_loads,
    )
    req, daily_kwh = build_requirement(selected, days, offset)
    if req.has_unknown_motor_lra:
        issues.append(Issue(
            code="BATTERY_UNKNOWN_MOTOR_LRA",
            message=UNKNOWN_LRA_WARNING,
            context="motor.lra",
        ))

    report = BatterySizingReport(
        requirement=req,
        backup_days=days,
        solar_offset_percent=offset,
        load_count=len(selected),
        daily_kwh=daily_kwh,
        enphase_5p=size_single_product(BatteryConfig.ENPHASE_5P, specs["enphase5P"], req),
        enphase_10c=size_single_product(BatteryConfig.ENPHASE_10C, specs["enphase10C"], req),
        enphase_mixed=size_enphase_mixed(specs["enphase10C"], specs["enphase5P"], req),
        tesla_pw3=size_single_product(BatteryConfig.TESLA_PW3, specs["teslaPW3"], req),
        tesla_pw3_expansions=size_leader_expansion(specs["teslaPW3"], specs["teslaPW3Expansion"], req),
        issues=tuple(issues),
    )
    return report

