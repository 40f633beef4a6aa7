# -*- coding: utf-8 -*-
"""
Logging setup: one file log in user space plus console output.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from infra.paths import logs_dir
from infra.perf import LOGGER_NAME as PERF_LOGGER_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _has_file_handler(logger: logging.Logger, log_path: Path) -> bool:
    return any(
        isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == str(log_path)
        for h in logger.handlers
    )


def init_logging(filename: str = "loadcalc.log", level: Union[int, str] = logging.INFO) -> Path:
    log_path = logs_dir() / filename
    root = logging.getLogger()
    # Don't add multiple handlers if init called twice
    if not _has_file_handler(root, log_path):
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            handlers=[logging.FileHandler(log_path, encoding="utf-8"), logging.StreamHandler()],
        )
    else:
        root.setLevel(level)
    return log_path


def init_perf_logging(filename: str = "perf.log") -> Path:
    """Attach a dedicated file handler for performance timings.

    Records come from infra.perf.StageTimer when LOADCALC_PERF=1.
    """
    log_path = logs_dir() / filename
    logger = logging.getLogger(PERF_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    if not _has_file_handler(logger, log_path):
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)
    return log_path
