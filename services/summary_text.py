# -*- coding: utf-8 -*-
"""Plain-text project summary (clipboard / terminal) and the proposal prompt.

Both are rendered from the CalcService bundle, so they always agree with
the numbers shown elsewhere.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from core.keys import ProjectKeys as K
from domain.project_facade import ProjectFacade
from services.calc_service import CalcService, ProjectCalcBundle

RULE = "-" * 30
DISCLAIMER = "Estimate for planning; verify per code and site conditions."


def _num(x: float) -> str:
    """1500.0 -> '1500', 2.5 -> '2.5'."""
    return f"{x:g}" if float(x) != int(x) else str(int(x))


def _flag(s) -> str:
    return " [NOT FEASIBLE]" if s.not_feasible else ""


def _battery_header(kind: str, days: float, offset: float) -> str:
    head = f"BATTERY SIZING ({kind} - {_num(days)} day backup"
    if offset > 0:
        head += f", {_num(offset)}% solar offset"
    return head + ")"


def build_summary_text(
    data: Dict[str, Any],
    today: Optional[date] = None,
    bundle: Optional[ProjectCalcBundle] = None,
) -> str:
    f = ProjectFacade(data)
    if bundle is None:
        bundle = CalcService().compute_bundle(data)
    service = f.service()
    panel = f.panel()
    meta = data.get(K.METADATA) if isinstance(data.get(K.METADATA), dict) else {}

    lines: List[str] = ["ELECTRICAL LOAD CALCULATOR SUMMARY", "=" * 45, ""]
    if f.project_name():
        lines.append(f"Project: {f.project_name()}")
    if f.address():
        lines.append(f"Address: {f.address()}")
    if meta.get(K.SQUARE_FOOTAGE):
        lines.append(f"Square Footage: {meta.get(K.SQUARE_FOOTAGE)}")
    lines += [f"Date: {(today or date.today()).isoformat()}", ""]

    p = bundle.panel
    lines += [
        "SERVICE & PANEL",
        RULE,
        f"Service Voltage: {_num(service.service_voltage)}V",
        f"Main Breaker: {_num(service.main_breaker_amps)}A",
        f"Bus Rating: {_num(service.bus_rating_amps)}A",
        f"Panel Slots: {p.declared_used_slots} used / {p.total_slots} total",
        f"Modeled Slots: {p.modeled_slots} (delta: {p.delta})",
        f"Tandems: {panel.tandems_allowed.value}",
        "",
    ]

    pr = bundle.practical
    lines += [
        "LOAD SUMMARY",
        RULE,
        f"Total Loads: {pr.load_count}",
        f"Total Running Watts: {pr.total_running_watts:,.0f}W ({pr.total_running_kw:.1f} kW)",
        f"Total Daily Energy: {pr.total_daily_kwh:.1f} kWh/day",
        "",
    ]

    nec = bundle.nec
    lines += [
        "SERVICE ADEQUACY (NEC Optional Method)",
        RULE,
        f"Estimated Demand: {nec.total_demand_kva:.1f} kVA",
        f"Estimated Service Amps: {nec.service_amps_rounded}A",
        f"Status: {nec.status.value} ({nec.ratio_pct}% of main breaker)",
        "",
    ]

    ev = bundle.ev
    if ev is not None:
        charger = f"Charger: {ev.charger_label} ({_num(ev.continuous_amps)}A continuous)"
        if ev.charger_count > 1:
            charger += f" x {ev.charger_count}"
        lines += [
            "EV CHARGER",
            RULE,
            charger,
            f"Total EV Load: {ev.ev_watts_total / 1000:.1f} kW",
            f"Required Breaker: {ev.breaker_amps}A 2-pole",
            f"With EV: {ev.nec_with_ev.status.value} ({ev.nec_with_ev.ratio_pct}% of main breaker)",
            f"Recommendation: {ev.recommendation.value}",
            "",
        ]

    wh = bundle.whole_home
    lines += [
        _battery_header("Whole Home", wh.backup_days, wh.solar_offset_percent),
        RULE,
        f"Energy Needed: {wh.total_energy_needed_kwh} kWh",
        f"Peak Power: {wh.peak_power_kw} kW",
    ]
    for s in (wh.enphase_5p, wh.enphase_10c, wh.tesla_pw3):
        lines.append(f"{s.label}: {s.count} units ({_num(round(s.total_kwh, 2))} kWh / {s.total_kw:.1f} kW){_flag(s)}")
    mx = wh.enphase_mixed
    lines.append(f"{mx.label}: {mx.count_10c} x 10C + {mx.count_5p} x 5P ({_num(round(mx.total_kwh, 2))} kWh){_flag(mx)}")
    te = wh.tesla_pw3_expansions
    if te.expansions_required > 0:
        lines.append(
            f"{te.label}: {te.leaders} leaders + {te.expansions} expansions "
            f"({_num(round(te.total_kwh, 2))} kWh){_flag(te)}"
        )
    for s in wh.configurations():
        if s.not_feasible and s.reason:
            lines.append(f"  {s.label}: {s.reason}")
    warnings = sorted({s.motor_start_warning for s in wh.configurations() if s.motor_start_warning})
    lines += [f"Note: {w}" for w in warnings]

    ph = bundle.partial_home
    if ph is not None:
        sel = f.partial_selections()
        ids = set(f.partial_included_ids())
        included = [ld for ld in f.loads() if ld.id in ids]
        lines += [
            "",
            _battery_header("Partial Home", ph.backup_days, ph.solar_offset_percent),
            RULE,
            f"Included loads ({len(included)}):",
        ]
        for ld in included:
            hours = sel.get(ld.id, {}).get("hoursPerDay", ld.usage.hours_per_day)
            lines.append(f"  - {ld.description or ld.category.value}: {_num(ld.watts)}W, {hours}h/day")
        lines += [
            f"Energy Needed: {ph.total_energy_needed_kwh} kWh",
            f"Peak Power: {ph.peak_power_kw} kW",
            f"{ph.enphase_5p.label}: {ph.enphase_5p.count} units{_flag(ph.enphase_5p)}",
            f"{ph.enphase_10c.label}: {ph.enphase_10c.count} units{_flag(ph.enphase_10c)}",
            f"{ph.tesla_pw3.label}: {ph.tesla_pw3.count} units{_flag(ph.tesla_pw3)}",
        ]

    lines += ["", "---", "Generated by LoadCalc", DISCLAIMER]
    return "\n".join(lines) + "\n"


PROMPT_INTRO = (
    "I have the following electrical load calculator data for a residential project. "
    "Please analyze and help me write a proposal."
)
PROMPT_OUTRO = "Please provide a summary suitable for a solar + battery proposal."


def build_prompt_text(data: Dict[str, Any], today: Optional[date] = None) -> str:
    """Summary plus one line per load, framed as a request for a proposal."""
    f = ProjectFacade(data)
    lines = [PROMPT_INTRO, "", build_summary_text(data, today=today), "Full load details:"]
    for ld in f.loads():
        line = (
            f"- {ld.description or ld.category.value}: {_num(ld.watts)}W, "
            f"{ld.breaker.poles}P/{ld.breaker.amps}A, {_num(ld.usage.hours_per_day)}h/day, {ld.source_tag.value}"
        )
        if ld.motor.is_motor:
            line += ", motor"
        if ld.is_nec_baseline:
            line += " [NEC baseline]"
        lines.append(line)
    lines += ["", PROMPT_OUTRO]
    return "\n".join(lines) + "\n"
