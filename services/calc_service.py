# -*- coding: utf-8 -*-
"""Calculation orchestration service.

Derives every result from one project snapshot:
  panel slots, NEC demand, practical load, EV feasibility,
  whole-home and partial-home battery sizing.

Returns:
  - the full runtime bundle (dataclasses, not JSON-serializable)
  - a compact serializable summary dict (camelCase, like the snapshot)

The snapshot is never modified; callers recompute on every change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.calculations.battery_sizing import size_batteries
from core.calculations.ev_feasibility import evaluate_ev_feasibility
from core.calculations.nec_demand import compute_nec_demand
from core.calculations.panel_slots import PanelSlotReport, panel_slot_report
from core.calculations.practical_load import compute_practical_load
from core.keys import ProjectKeys as K
from core.models.battery import (
    BatterySizingReport,
    LeaderExpansionSizing,
    MixedSizing,
    SingleProductSizing,
)
from core.models.demand import NecDemandResult, PracticalLoadSummary
from core.models.ev import EVFeasibilityResult
from core.types import Issue
from domain.project_facade import ProjectFacade
from infra.perf import StageTimer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectCalcBundle:
    panel: PanelSlotReport
    nec: NecDemandResult
    practical: PracticalLoadSummary
    ev: Optional[EVFeasibilityResult]
    whole_home: BatterySizingReport
    partial_home: Optional[BatterySizingReport]
    issues: Tuple[Issue, ...] = field(default_factory=tuple)


# ---------- serialization ----------

def nec_to_dict(nec: NecDemandResult) -> Dict[str, Any]:
    return {
        "totalDemandVA": round(nec.total_demand_va),
        "totalDemandKVA": round(nec.total_demand_kva, 2),
        "serviceAmps": nec.service_amps_rounded,
        "ratio": nec.ratio_pct,
        "status": nec.status.value,
        "generalLightingVA": round(nec.general_lighting_va),
        "breakdown": nec.breakdown.as_rounded_dict(),
    }


def sizing_to_dict(s) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "label": s.label,
        "totalKWh": round(s.total_kwh, 2),
        "totalKW": round(s.total_kw, 2),
        "feasible": s.feasible,
        "notFeasible": s.not_feasible,
        "reason": s.reason,
        "motorStartWarning": s.motor_start_warning,
    }
    if isinstance(s, SingleProductSizing):
        out.update({
            "count": s.count,
            "forEnergy": s.for_energy,
            "forPower": s.for_power,
            "forMotorStart": s.for_motor_start,
            "limitedBy": s.binding.value,
            "maxUnits": s.max_units,
        })
    elif isinstance(s, MixedSizing):
        out.update({
            "count10C": s.count_10c,
            "count5P": s.count_5p,
            "totalUnits": s.total_units,
            "maxUnits": s.max_units,
        })
    elif isinstance(s, LeaderExpansionSizing):
        out.update({
            "leaders": s.leaders,
            "leadersRequired": s.leaders_required,
            "expansions": s.expansions,
            "expansionsRequired": s.expansions_required,
            "maxExpansions": s.max_expansions,
        })
    return out


def battery_to_dict(rep: BatterySizingReport) -> Dict[str, Any]:
    req = rep.requirement
    return {
        "summary": {
            "totalEnergyNeededKWh": rep.total_energy_needed_kwh,
            "peakPowerKW": rep.peak_power_kw,
            "backupDays": rep.backup_days,
            "solarOffsetPercent": rep.solar_offset_percent,
            "loadCount": rep.load_count,
            "largestLRA": req.largest_lra,
            "hasUnknownMotorLRA": req.has_unknown_motor_lra,
        },
        "enphase5P": sizing_to_dict(rep.enphase_5p),
        "enphase10C": sizing_to_dict(rep.enphase_10c),
        "enphaseMixed": sizing_to_dict(rep.enphase_mixed),
        "teslaPW3Only": sizing_to_dict(rep.tesla_pw3),
        "teslaPW3WithExpansions": sizing_to_dict(rep.tesla_pw3_expansions),
    }


def ev_to_dict(ev: Optional[EVFeasibilityResult]) -> Optional[Dict[str, Any]]:
    if ev is None:
        return None
    return {
        "chargerLabel": ev.charger_label,
        "continuousAmps": ev.continuous_amps,
        "breakerAmps": ev.breaker_amps,
        "evWattsEach": round(ev.ev_watts_each),
        "evWattsTotal": round(ev.ev_watts_total),
        "chargerCount": ev.charger_count,
        "slotsNeeded": ev.slots_needed,
        "availableSlots": ev.available_slots,
        "hasSpace": ev.has_space,
        "canUseTandems": ev.can_use_tandems,
        "necWithoutEV": nec_to_dict(ev.nec_without_ev),
        "necWithEV": nec_to_dict(ev.nec_with_ev),
        "recommendation": ev.recommendation.value,
    }


def bundle_to_summary(bundle: ProjectCalcBundle) -> Dict[str, Any]:
    p = bundle.panel
    pr = bundle.practical
    return {
        "panel": {
            "totalSlots": p.total_slots,
            "usedSlots": p.declared_used_slots,
            "tandemSlotsUsed": p.declared_tandem_slots_used,
            "availableSlots": p.available_slots,
            "tandemCapableSlots": p.tandem_capable_slots,
            "canFreeSlotsWithTandems": p.can_free_slots_with_tandems,
            "modeledSlots": p.modeled_slots,
            "delta": p.delta,
        },
        "nec": nec_to_dict(bundle.nec),
        "practical": {
            "totalRunningWatts": round(pr.total_running_watts),
            "totalRunningKW": round(pr.total_running_kw, 2),
            "totalDailyWh": round(pr.total_daily_wh),
            "totalDailyKWh": round(pr.total_daily_kwh, 2),
            "motorLoads": pr.motor_load_count,
            "largestMotorWatts": round(pr.largest_motor_watts),
            "largestMotorLRA": pr.largest_motor_lra,
            "loadCount": pr.load_count,
        },
        "ev": ev_to_dict(bundle.ev),
        "battery": {
            "wholeHome": battery_to_dict(bundle.whole_home),
            "partialHome": battery_to_dict(bundle.partial_home) if bundle.partial_home else None,
        },
        "issues": [it.to_dict() for it in bundle.issues],
    }


# ---------- service ----------

class CalcService:
    """Centralized calculation service (stateless)."""

    def compute(self, data: Dict[str, Any]) -> Tuple[ProjectCalcBundle, Dict[str, Any]]:
        timer = StageTimer("calc")
        bundle = self.compute_bundle(data, timer)
        with timer.stage("summary"):
            summary = bundle_to_summary(bundle)
        timer.report(loads=bundle.practical.load_count, status=bundle.nec.status.value)
        return bundle, summary

    def compute_bundle(self, data: Dict[str, Any], timer: Optional[StageTimer] = None) -> ProjectCalcBundle:
        t = timer or StageTimer("calc", enabled=False)
        f = ProjectFacade(data if isinstance(data, dict) else {})
        service = f.service()
        panel = f.panel()
        loads = f.loads()

        with t.stage("panel"):
            panel_rep = panel_slot_report(panel, loads)
        with t.stage("nec"):
            nec = compute_nec_demand(loads, service)
        with t.stage("practical"):
            practical = compute_practical_load(loads)
        with t.stage("ev"):
            ev = evaluate_ev_feasibility(service, panel, loads, f.charger_request())

        with t.stage("battery_whole"):
            whole = size_batteries(
                loads,
                f.effective_backup_days(K.WHOLE_HOME),
                solar_offset_percent=f.solar_offset_percent(K.WHOLE_HOME),
                proposed_ev_loads=f.proposed_ev_loads(),
            )

        partial = None
        included = f.partial_included_ids()
        if f.partial_enabled() and included:
            with t.stage("battery_partial"):
                partial = size_batteries(
                    loads,
                    f.effective_backup_days(K.PARTIAL_HOME),
                    include_load_ids=included,
                    partial_selections=f.partial_selections(),
                    solar_offset_percent=f.solar_offset_percent(K.PARTIAL_HOME),
                )

        issues: List[Issue] = list(panel_rep.issues) + list(whole.issues)
        if partial is not None:
            issues.extend(it for it in partial.issues if it not in issues)

        log.debug(
            "calc: %d loads, NEC %.0f VA (%s), whole-home %.1f kWh",
            len(loads), nec.total_demand_va, nec.status.value, whole.requirement.energy_kwh,
        )
        return ProjectCalcBundle(
            panel=panel_rep,
            nec=nec,
            practical=practical,
            ev=ev,
            whole_home=whole,
            partial_home=partial,
            issues=tuple(issues),
        )
