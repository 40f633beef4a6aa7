# -*- coding: utf-8 -*-
"""
Application bootstrap (runs before any command):
- Load user settings
- Init logging (level from settings)
- Install the crash hook so unexpected errors end up in the log
- Perf log file when LOADCALC_PERF is on
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from infra.crash_handler import install_global_exception_handler
from infra.logging_setup import init_logging, init_perf_logging
from infra.perf import perf_enabled
from infra.settings import load_settings


def bootstrap(log_level: Optional[str] = None) -> Dict[str, Any]:
    settings = load_settings()
    level = str(log_level or settings.get("log_level") or "INFO").upper()
    init_logging(level=getattr(logging, level, logging.INFO))
    install_global_exception_handler()
    if perf_enabled():
        init_perf_logging()
    return settings
