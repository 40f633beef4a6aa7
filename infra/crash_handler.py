# -*- coding: utf-8 -*-
"""Last-resort exception hook for the command line.

Unexpected exceptions go to the log file with the full traceback; the
console only gets one line pointing at the log. KeyboardInterrupt keeps
the default behaviour.
"""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import Optional, Type

log = logging.getLogger(__name__)

_handling_exception = False


def _log_exception(exc_type: Type[BaseException], exc: BaseException, tb: Optional[TracebackType]) -> None:
    global _handling_exception
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    if _handling_exception:
        sys.__excepthook__(exc_type, exc, tb)
        return

    _handling_exception = True
    try:
        log.critical("Unhandled exception", exc_info=(exc_type, exc, tb))
        if sys.stderr is not None:
            sys.stderr.write(f"loadcalc: unexpected error: {exc} (details in the log file)\n")
    finally:
        _handling_exception = False


def install_global_exception_handler() -> None:
    """Route uncaught exceptions through the logging setup."""
    sys.excepthook = _log_exception
