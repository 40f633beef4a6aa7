# -*- coding: utf-8 -*-
"""
domain/parse.py

Single home for tolerant parsing of snapshot values.
Goals:
- Snapshots come from form fields: numbers may arrive as "", "1,500", "12.5 ",
  None or a real number. Every engine reads them through these helpers.
- Never raise; fall back to the caller's default.
"""

from __future__ import annotations

import math
from typing import Any, Optional


_DASH_TOKENS = {"—", "–", "-", "--", "n/a", "N/A"}


def is_blank(val: Any, allow_dash: bool = True) -> bool:
    """True if the value must be treated as 'empty'."""
    if val is None:
        return True

    # bool is a subclass of int; not blank here.
    if isinstance(val, (int, float)):
        return False

    s = str(val).strip()
    if s == "":
        return True

    if allow_dash and s in _DASH_TOKENS:
        return True

    return False


def to_float(val: Any, default: Optional[float] = None, allow_dash: bool = True) -> Optional[float]:
    """
    Tolerant float conversion.
    - Accepts US thousands separators ("1,500.5").
    - Blank, NaN or garbage -> default.
    """
    if is_blank(val, allow_dash=allow_dash):
        return default

    if isinstance(val, bool):
        # Avoid True/False silently becoming 1.0/0.0.
        return default

    if isinstance(val, (int, float)):
        f = float(val)
        return default if math.isnan(f) or math.isinf(f) else f

    s = str(val).strip().replace(" ", "").replace(",", "")
    try:
        f = float(s)
    except ValueError:
        return default
    return default if math.isnan(f) or math.isinf(f) else f


def to_int(val: Any, default: Optional[int] = None) -> Optional[int]:
    f = to_float(val, default=None)
    if f is None:
        return default
    return int(f)


def to_bool(val: Any, default: bool = False) -> bool:
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    if isinstance(val, (int, float)):
        return val != 0
    s = str(val).strip().lower()
    if s in ("1", "true", "yes", "on", "y"):
        return True
    if s in ("0", "false", "no", "off", "n", ""):
        return False
    return default


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
