# -*- coding: utf-8 -*-
"""Shared domain types (pure, test-friendly).

Advisories travel as data: engines return ``Issue`` instances alongside
their numeric results and never raise for inconsistent input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Issue:
    code: str
    message: str
    severity: Severity = Severity.WARNING
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        sev = self.severity.value if isinstance(self.severity, Severity) else str(self.severity)
        return {
            "code": self.code,
            "msg": self.message,
            "level": {"info": "info", "warning": "warn", "error": "error"}.get(sev, "warn"),
            "context": self.context,
        }


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(it.severity == Severity.ERROR for it in (issues or []))
