# -*- coding: utf-8 -*-
"""Panel and service configuration models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.keys import ProjectKeys as K
from domain.parse import to_float, to_int


class TandemsAllowed(str, Enum):
    ALLOWED = "Allowed"
    NOT_ALLOWED = "Not Allowed"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "TandemsAllowed":
        s = "".join(str(value or "").lower().split())
        if s == "allowed":
            return cls.ALLOWED
        if s == "notallowed":
            return cls.NOT_ALLOWED
        return cls.UNKNOWN


class TandemPositions(str, Enum):
    ALL_SLOTS = "All slots"
    BOTTOM_HALF = "Bottom half only"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: Any) -> "TandemPositions":
        s = "".join(str(value or "").lower().split())
        if s in ("bottomhalfonly", "bottomhalf"):
            return cls.BOTTOM_HALF
        if s == "custom":
            return cls.CUSTOM
        return cls.ALL_SLOTS


@dataclass(frozen=True)
class Panel:
    total_slots: int = 40
    used_slots: int = 20
    tandem_slots_used: int = 0
    tandems_allowed: TandemsAllowed = TandemsAllowed.UNKNOWN
    allowed_positions: TandemPositions = TandemPositions.ALL_SLOTS
    custom_max_tandem_slots: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Panel":
        d = d if isinstance(d, dict) else {}
        policy = d.get(K.TANDEM_POLICY) if isinstance(d.get(K.TANDEM_POLICY), dict) else {}
        return cls(
            total_slots=to_int(d.get(K.TOTAL_SLOTS), 0) or 0,
            used_slots=to_int(d.get(K.USED_SLOTS), 0) or 0,
            tandem_slots_used=to_int(d.get(K.TANDEM_SLOTS_USED), 0) or 0,
            tandems_allowed=TandemsAllowed.parse(d.get(K.TANDEMS_ALLOWED)),
            allowed_positions=TandemPositions.parse(policy.get(K.ALLOWED_POSITIONS)),
            custom_max_tandem_slots=to_int(policy.get(K.CUSTOM_MAX_TANDEM_SLOTS)),
        )


@dataclass(frozen=True)
class Service:
    service_voltage: float = 240.0
    main_breaker_amps: float = 200.0
    bus_rating_amps: float = 200.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Service":
        d = d if isinstance(d, dict) else {}
        volts = to_float(d.get(K.SERVICE_VOLTAGE), 240.0) or 0.0
        main = to_float(d.get(K.MAIN_BREAKER_AMPS), 200.0) or 0.0
        bus = to_float(d.get(K.BUS_RATING_AMPS), main) or 0.0
        return cls(
            service_voltage=volts if volts > 0 else 240.0,
            main_breaker_amps=main if main > 0 else 200.0,
            bus_rating_amps=bus if bus > 0 else main,
        )
