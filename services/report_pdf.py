# -*- coding: utf-8 -*-
"""PDF report export (matplotlib, no GUI backend).

Pages:
  1..n  summary text (same content as the clipboard summary)
  n+1.. load schedule table
  last  NEC demand breakdown and battery configuration comparison charts
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from domain.project_facade import ProjectFacade
from services.calc_service import CalcService, ProjectCalcBundle
from services.summary_text import build_summary_text

log = logging.getLogger(__name__)

PAGE_SIZE = (8.5, 11.0)
TEXT_LINES_PER_PAGE = 62
TABLE_ROWS_PER_PAGE = 32
HEADER_COLOR = "#142850"
INFEASIBLE_COLOR = "#c0392b"
FEASIBLE_COLOR = "#2e86c1"

_BREAKDOWN_LABELS = (
    ("general_and_small_appliance", "General + small appliance"),
    ("fixed_appliances", "Fixed appliances"),
    ("cooking", "Cooking"),
    ("dryer", "Dryer"),
    ("hvac", "HVAC"),
    ("other_large", "Other loads"),
    ("ev", "EV chargers"),
)


def _chunks(items: List[Any], size: int) -> List[List[Any]]:
    return [items[i:i + size] for i in range(0, len(items), size)] or [[]]


def _text_pages(text: str) -> List[Figure]:
    figs = []
    for chunk in _chunks(text.splitlines(), TEXT_LINES_PER_PAGE):
        fig = Figure(figsize=PAGE_SIZE)
        fig.text(0.06, 0.96, "\n".join(chunk), va="top", ha="left", family="monospace", fontsize=8)
        figs.append(fig)
    return figs


def _load_rows(data: Dict[str, Any]) -> List[List[str]]:
    rows = []
    for ld in ProjectFacade(data).loads():
        breaker = f"{ld.breaker.poles}P / {ld.breaker.amps}A" + (" (T)" if ld.is_tandem else "")
        rows.append([
            (ld.description or ld.category.value)[:38],
            breaker,
            f"{ld.watts:,.0f}W",
            f"{ld.usage.hours_per_day:g}h",
            f"{ld.daily_wh / 1000:.1f} kWh",
            ld.source_tag.value,
        ])
    return rows


def _table_pages(data: Dict[str, Any]) -> List[Figure]:
    rows = _load_rows(data)
    if not rows:
        return []
    figs = []
    for chunk in _chunks(rows, TABLE_ROWS_PER_PAGE):
        fig = Figure(figsize=PAGE_SIZE)
        ax = fig.add_subplot(111)
        ax.axis("off")
        ax.set_title("Load Schedule", loc="left")
        table = ax.table(
            cellText=chunk,
            colLabels=["Load", "Breaker", "Watts", "Hrs/Day", "Daily kWh", "Source"],
            loc="upper center",
            cellLoc="left",
        )
        table.auto_set_font_size(False)
        table.set_fontsize(7)
        table.scale(1.0, 1.3)
        for (row, _col), cell in table.get_celld().items():
            if row == 0:
                cell.set_facecolor(HEADER_COLOR)
                cell.get_text().set_color("white")
        figs.append(fig)
    return figs


def _chart_page(bundle: ProjectCalcBundle) -> Figure:
    fig = Figure(figsize=PAGE_SIZE)
    ax1 = fig.add_subplot(211)
    ax2 = fig.add_subplot(212)

    bd = bundle.nec.breakdown
    labels = [label for _attr, label in _BREAKDOWN_LABELS]
    values = [getattr(bd, attr) / 1000.0 for attr, _label in _BREAKDOWN_LABELS]
    ax1.barh(labels, values, color=HEADER_COLOR)
    ax1.invert_yaxis()
    ax1.set_xlabel("Demand [kVA]")
    ax1.set_title(
        f"NEC demand: {bundle.nec.total_demand_kva:.1f} kVA, "
        f"{bundle.nec.service_amps_rounded} A ({bundle.nec.status.value})"
    )
    ax1.grid(True, axis="x")

    wh = bundle.whole_home
    configs = wh.configurations()
    names = [s.label for s in configs]
    kwh = [s.total_kwh for s in configs]
    colors = [INFEASIBLE_COLOR if s.not_feasible else FEASIBLE_COLOR for s in configs]
    ax2.bar(range(len(configs)), kwh, color=colors)
    ax2.axhline(wh.requirement.energy_kwh, color="black", linestyle="--", linewidth=1)
    ax2.set_xticks(range(len(configs)))
    ax2.set_xticklabels(names, rotation=20, ha="right", fontsize=8)
    ax2.set_ylabel("Delivered energy [kWh]")
    ax2.set_title(f"Whole-home battery options (need {wh.total_energy_needed_kwh} kWh)")
    ax2.grid(True, axis="y")

    fig.tight_layout()
    return fig


def export_pdf_report(
    data: Dict[str, Any],
    file_path: Union[str, Path],
    today: Optional[date] = None,
    bundle: Optional[ProjectCalcBundle] = None,
) -> Path:
    """Write the multi-page report; raises IOError when the file cannot be written."""
    if bundle is None:
        bundle = CalcService().compute_bundle(data)
    path = Path(file_path)
    text = build_summary_text(data, today=today, bundle=bundle)
    figs = _text_pages(text) + _table_pages(data) + [_chart_page(bundle)]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(str(path)) as pdf:
            for fig in figs:
                pdf.savefig(fig)
    except (OSError, ValueError) as e:
        raise IOError(f"Failed to write PDF report: {e}") from e
    log.info("PDF report written: %s (%d pages)", path, len(figs))
    return path
