# -*- coding: utf-8 -*-
"""Project-level validations (pure): metadata and service."""

from __future__ import annotations

from typing import Any, Dict, List

from core.keys import ProjectKeys as K
from core.types import Issue, Severity
from domain.catalog import MAIN_BREAKER_OPTIONS, SERVICE_VOLTAGE_OPTIONS
from domain.parse import is_blank, to_float


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = (data or {}).get(key)
    return v if isinstance(v, dict) else {}


def validate_service(data: Dict[str, Any]) -> List[Issue]:
    issues: List[Issue] = []
    meta = _section(data, K.METADATA)
    service = _section(data, K.SERVICE)

    sqft_raw = meta.get(K.SQUARE_FOOTAGE)
    sqft = to_float(sqft_raw)
    if not is_blank(sqft_raw) and (sqft is None or sqft <= 0):
        issues.append(Issue(
            code="PROJ_SQFT_INVALID",
            message="Square footage must be a positive number; the lighting load will be used instead.",
            context="metadata.squareFootage",
        ))

    volts = to_float(service.get(K.SERVICE_VOLTAGE))
    if volts is None or volts <= 0:
        issues.append(Issue(
            code="SERVICE_VOLTAGE_INVALID",
            message="Service voltage is missing or invalid; 240 V assumed.",
            severity=Severity.ERROR,
            context="service.serviceVoltage",
        ))
    elif int(volts) not in SERVICE_VOLTAGE_OPTIONS:
        issues.append(Issue(
            code="SERVICE_VOLTAGE_NONSTANDARD",
            message=f"Service voltage {volts:g} V is not a standard residential service (240/208 V).",
            context="service.serviceVoltage",
        ))

    main = to_float(service.get(K.MAIN_BREAKER_AMPS))
    if main is None or main <= 0:
        issues.append(Issue(
            code="SERVICE_MAIN_INVALID",
            message="Main breaker size is missing or invalid; 200 A assumed.",
            severity=Severity.ERROR,
            context="service.mainBreakerAmps",
        ))
    else:
        if int(main) not in MAIN_BREAKER_OPTIONS:
            issues.append(Issue(
                code="SERVICE_MAIN_NONSTANDARD",
                message=f"Main breaker {main:g} A is not a standard size.",
                severity=Severity.INFO,
                context="service.mainBreakerAmps",
            ))
        bus = to_float(service.get(K.BUS_RATING_AMPS))
        if bus is not None and 0 < bus < main:
            issues.append(Issue(
                code="SERVICE_BUS_BELOW_MAIN",
                message=f"Bus rating ({bus:g} A) is below the main breaker ({main:g} A).",
                context="service.busRatingAmps",
            ))
    return issues
