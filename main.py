# -*- coding: utf-8 -*-
"""LoadCalc command line entrypoint.

Intentionally minimal:
- bootstrap (settings, logging)
- parse the command
- read the project file, run a service, print or write the result
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

log = logging.getLogger("loadcalc")


def _build_parser() -> argparse.ArgumentParser:
    from loadcalc.version import __version__

    p = argparse.ArgumentParser(prog="loadcalc", description="Residential electrical load calculator (planning estimates).")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    sub = p.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="create a project file with NEC baseline loads")
    new.add_argument("-o", "--output", default=None,
                     help="project file (default: {name}_{date}.json in the current folder)")
    new.add_argument("--name", default="")
    new.add_argument("--sqft", type=float, default=None)
    new.add_argument("--guided", nargs="*", default=[], metavar="CATEGORY",
                     help="appliance categories to add from the library (e.g. 'Electric Dryer')")
    new.add_argument("--ev-amps", type=float, default=None,
                     help="proposed EV charger continuous amps (catalog rating or custom)")
    new.add_argument("--ev-count", type=int, default=1)

    calc = sub.add_parser("calc", help="print all calculation results as JSON")
    calc.add_argument("project")

    summ = sub.add_parser("summary", help="print the text summary")
    summ.add_argument("project")
    summ.add_argument("--prompt", action="store_true", help="print the proposal prompt instead")

    val = sub.add_parser("validate", help="print validation issues; exit 1 on errors")
    val.add_argument("project")

    rep = sub.add_parser("report", help="write the PDF report")
    rep.add_argument("project")
    rep.add_argument("-o", "--output", default=None)

    save = sub.add_parser("save-named", help="store the project in the named-project library")
    save.add_argument("project")

    sub.add_parser("list-named", help="list the named-project library")

    load = sub.add_parser("load-named", help="write a library project to a file")
    load.add_argument("entry_id")
    load.add_argument("-o", "--output", default=None)
    return p


def _cmd_new(args) -> int:
    from core.keys import ProjectKeys as K
    from domain.catalog import ev_charger_option
    from domain.ids import UuidIdGenerator
    from domain.load_factory import build_guided_loads
    from domain.project_facade import ProjectFacade
    from storage.project_io import save_project
    from storage.project_schema import create_initial_project

    data = create_initial_project()
    data[K.METADATA][K.PROJECT_NAME] = args.name
    if args.sqft:
        data[K.METADATA][K.SQUARE_FOOTAGE] = args.sqft
    data[K.LOADS] = build_guided_loads(args.guided, args.sqft, UuidIdGenerator())
    data[K.LOAD_ENTRY_PATH] = "guided" if args.guided else "manual"
    data[K.GUIDED_COMPLETE] = bool(args.guided)
    if args.ev_amps:
        opt = ev_charger_option(args.ev_amps)
        data[K.EV][K.EV_CHARGER_OPTION] = opt.to_dict()
        if opt.is_custom:
            data[K.EV][K.EV_CUSTOM_CONTINUOUS_AMPS] = args.ev_amps
        ProjectFacade(data).set_charger_count(args.ev_count)
    out = _output_path(args.output, data)
    save_project(data, out)
    print(out)
    return 0


def _output_path(requested: Optional[str], data, ext: str = ".json", folder: str = ".") -> str:
    """``-o`` with the extension added when missing, else the dated default name."""
    from storage.project_paths import default_export_filename, norm_project_path

    if requested:
        folder, name = os.path.split(requested)
        return norm_project_path(folder or ".", name, ext)
    return norm_project_path(folder or ".", default_export_filename(data, ext=ext), ext)


def _library(settings):
    from storage.project_library import ProjectLibrary

    return ProjectLibrary(settings.get("projects_dir"))


def run(args, settings) -> int:
    from core.sections import ALL_SECTIONS
    from services.calc_service import CalcService
    from services.report_pdf import export_pdf_report
    from services.summary_text import build_prompt_text, build_summary_text
    from services.validation_service import ValidationService
    from storage.project_io import load_project, save_project

    if args.command == "new":
        return _cmd_new(args)

    if args.command == "list-named":
        for e in _library(settings).list():
            print(f"{e['id']}  {e['savedAt']}  {e['loadCount']:>3} loads  {e['name']}")
        return 0

    if args.command == "load-named":
        data = _library(settings).load(args.entry_id)
        if data is None:
            print(f"No saved project with id {args.entry_id}", file=sys.stderr)
            return 1
        out = _output_path(args.output, data)
        save_project(data, out)
        print(out)
        return 0

    data = load_project(args.project)

    if args.command == "calc":
        _bundle, summary = CalcService().compute(data)
        print(json.dumps(summary, indent=2))
    elif args.command == "summary":
        print(build_prompt_text(data) if args.prompt else build_summary_text(data), end="")
    elif args.command == "validate":
        by_section, flat = ValidationService().validate(data)
        for sec in ALL_SECTIONS:
            for it in by_section.get(sec.value, []):
                print(f"[{it['level']:<5}] {sec.value:<8} {it['code']}: {it['msg']}")
        if not flat:
            print("No issues.")
        return 1 if any(it["level"] == "error" for it in flat) else 0
    elif args.command == "report":
        out = _output_path(args.output, data, ".pdf", folder=str(Path(args.project).parent))
        print(export_pdf_report(data, out))
    elif args.command == "save-named":
        entry = _library(settings).save(data)
        print(f"{entry['id']}  {entry['name']}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    from app.bootstrap import bootstrap

    args = _build_parser().parse_args(argv)
    settings = bootstrap(args.log_level)
    try:
        return run(args, settings)
    except IOError as e:
        log.debug("command %s failed", args.command, exc_info=True)
        print(str(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
