# -*- coding: utf-8 -*-
"""ValidationService

Runs the pure per-section validators over a project snapshot.

- Validators return core.types.Issue instances.
- Results are returned as plain dicts ``{code, msg, level, context}`` so the
  caller can print or persist them; the snapshot is not modified.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.sections import ALL_SECTIONS, Section
from core.types import Issue, Severity
from core.validators.battery import validate_battery
from core.validators.ev import validate_ev
from core.validators.loads import validate_loads
from core.validators.panel import validate_panel
from core.validators.project import validate_service

log = logging.getLogger(__name__)


_VALIDATOR_MAP = {
    Section.SERVICE: validate_service,
    Section.PANEL: validate_panel,
    Section.LOADS: validate_loads,
    Section.EV: validate_ev,
    Section.BATTERY: validate_battery,
}


class ValidationService:
    def __init__(self, validators=None):
        self.validators = dict(validators or _VALIDATOR_MAP)

    def validate(
        self,
        data: Dict[str, Any],
        sections: Optional[Iterable[Section]] = None,
    ) -> Tuple[Dict[str, List[dict]], List[dict]]:
        """Validate the given sections (all by default).

        Returns (per-section lists keyed by Section.value, deduplicated flat list).
        """
        out_by_section: Dict[str, List[dict]] = {}
        flat: List[dict] = []

        for sec in (sections or ALL_SECTIONS):
            sec = sec if isinstance(sec, Section) else Section(str(sec))
            fn = self.validators.get(sec)
            if not fn:
                continue
            try:
                issues = fn(data) or []
            except Exception:
                log.debug("validator %s failed", sec.value, exc_info=True)
                issues = [Issue(
                    code="VALIDATOR_CRASH",
                    message=f"Validator '{sec.value}' failed (see logs).",
                    severity=Severity.WARNING,
                    context=sec.value,
                )]

            lst = [it.to_dict() for it in issues]
            out_by_section[sec.value] = lst
            flat.extend(lst)

        # Deduplicate by (code,msg,context)
        seen = set()
        uniq = []
        for it in flat:
            key = (it.get("code"), it.get("msg"), it.get("context"))
            if key in seen:
                continue
            seen.add(key)
            uniq.append(it)

        return out_by_section, uniq
