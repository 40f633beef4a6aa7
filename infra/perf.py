# -*- coding: utf-8 -*-
"""Stage timings for the calculation pipeline.

``LOADCALC_PERF=1`` turns timing on. One record per run goes to the
``loadcalc.perf`` logger, for example::

    PERF calc total=1.9ms panel=0.1ms nec=0.4ms ... loads=14 status=OK

``infra.logging_setup.init_perf_logging`` gives that logger its own file.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

ENV_VAR = "LOADCALC_PERF"
LOGGER_NAME = "loadcalc.perf"

log = logging.getLogger(LOGGER_NAME)


def perf_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return str(env.get(ENV_VAR, "")).strip().lower() in ("1", "true", "yes", "on")


class StageTimer:
    """Wall time per named stage of one run.

    A disabled timer records nothing and never logs, so callers can wrap
    every stage unconditionally.
    """

    def __init__(self, run: str, *, enabled: Optional[bool] = None, threshold_ms: float = 0.0):
        self.run = run
        self.enabled = perf_enabled() if enabled is None else bool(enabled)
        self.threshold_ms = float(threshold_ms or 0.0)
        self.stages: Dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        if not self.enabled:
            yield
            return
        t0 = time.perf_counter()
        try:
            yield
        finally:
            # repeated stage names accumulate
            self.stages[name] = self.stages.get(name, 0.0) + (time.perf_counter() - t0) * 1000.0

    @property
    def total_ms(self) -> float:
        return sum(self.stages.values())

    def report(self, **context: Any) -> Optional[str]:
        """Log the stage breakdown plus ``context``; returns the logged line."""
        if not self.enabled or self.total_ms < self.threshold_ms:
            return None
        parts = [f"total={self.total_ms:.1f}ms"]
        parts += [f"{name}={ms:.1f}ms" for name, ms in self.stages.items()]
        parts += [f"{key}={value}" for key, value in context.items()]
        line = f"PERF {self.run} " + " ".join(parts)
        log.info(line)
        return line
