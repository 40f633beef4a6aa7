# -*- coding: utf-8 -*-
"""Load model: one circuit entry and its derived per-load quantities.

``Load.from_dict`` reads the persisted (camelCase) load entry tolerantly:
blank or garbage numbers fall back to the category library defaults,
hours are clamped to 0..24 and negative watts/LRA become 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from core.keys import ProjectKeys as K
from core.models.categories import LoadCategory, NecBucket, bucket_for, resolve_category
from domain.catalog import library_entry
from domain.parse import clamp, to_bool, to_float, to_int


class BreakerType(str, Enum):
    STANDARD = "Standard"
    TANDEM = "Tandem"


class SourceTag(str, Enum):
    ASSUMED = "Assumed"
    USER_ENTERED = "User-entered"
    NAMEPLATE = "Nameplate"


@dataclass(frozen=True)
class Breaker:
    poles: int = 1
    amps: int = 15
    type: BreakerType = BreakerType.STANDARD
    voltage_override: Optional[int] = None


@dataclass(frozen=True)
class Usage:
    assumed_watts: float = 500.0
    hours_per_day: float = 4.0
    include_in_service_calc: bool = True
    include_in_battery_calc: bool = True


@dataclass(frozen=True)
class Motor:
    is_motor: bool = False
    lra: Optional[float] = None
    nameplate_known: bool = False


@dataclass(frozen=True)
class Load:
    id: str
    category: LoadCategory = LoadCategory.OTHER
    description: str = ""
    breaker: Breaker = field(default_factory=Breaker)
    usage: Usage = field(default_factory=Usage)
    motor: Motor = field(default_factory=Motor)
    is_nec_baseline: bool = False
    source_tag: SourceTag = SourceTag.ASSUMED
    has_tandem_b: bool = False
    category_known: bool = True

    # ---------- derived ----------
    @property
    def is_tandem(self) -> bool:
        return self.breaker.type == BreakerType.TANDEM

    @property
    def slots_consumed(self) -> int:
        return 1 if self.is_tandem else int(self.breaker.poles)

    @property
    def watts(self) -> float:
        return float(self.usage.assumed_watts)

    @property
    def daily_wh(self) -> float:
        return self.watts * float(self.usage.hours_per_day)

    @property
    def bucket(self) -> NecBucket:
        return bucket_for(self.category)

    @property
    def has_unknown_lra(self) -> bool:
        return self.motor.is_motor and not self.motor.lra

    def voltage(self, service_voltage: float) -> float:
        """Circuit voltage: explicit override, else 120 V for 1-pole, else service voltage."""
        if self.breaker.voltage_override:
            return float(self.breaker.voltage_override)
        if int(self.breaker.poles) == 1:
            return 120.0
        return float(service_voltage)

    def with_hours(self, hours_per_day: float) -> "Load":
        return replace(self, usage=replace(self.usage, hours_per_day=clamp(float(hours_per_day), 0.0, 24.0)))

    # ---------- parsing ----------
    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Load":
        d = d if isinstance(d, dict) else {}
        category, known = resolve_category(d.get(K.CATEGORY))
        lib = library_entry(category)

        br = d.get(K.BREAKER) if isinstance(d.get(K.BREAKER), dict) else {}
        poles = 2 if to_int(br.get("poles"), lib.poles) == 2 else 1
        btype = BreakerType.TANDEM if str(br.get("type", "")).strip().lower() == "tandem" else BreakerType.STANDARD
        if poles == 2:
            btype = BreakerType.STANDARD
        override = to_int(br.get("voltageOverride"))
        breaker = Breaker(
            poles=poles,
            amps=max(0, to_int(br.get("amps"), lib.amps) or 0),
            type=btype,
            voltage_override=override if override and override > 0 else None,
        )

        us = d.get(K.USAGE) if isinstance(d.get(K.USAGE), dict) else {}
        usage = Usage(
            assumed_watts=max(0.0, to_float(us.get("assumedWatts"), lib.watts) or 0.0),
            hours_per_day=clamp(to_float(us.get("hoursPerDay"), lib.hours_per_day) or 0.0, 0.0, 24.0),
            include_in_service_calc=to_bool(us.get("includeInServiceCalc"), True),
            include_in_battery_calc=to_bool(us.get("includeInBatteryCalc"), True),
        )

        mo = d.get(K.MOTOR) if isinstance(d.get(K.MOTOR), dict) else {}
        lra = to_float(mo.get("lra"))
        motor = Motor(
            is_motor=to_bool(mo.get("isMotor"), False),
            lra=max(0.0, lra) if lra is not None else None,
            nameplate_known=to_bool(mo.get("nameplateKnown"), False),
        )

        try:
            tag = SourceTag(str(d.get(K.SOURCE_TAG) or SourceTag.ASSUMED.value))
        except ValueError:
            tag = SourceTag.ASSUMED

        return cls(
            id=str(d.get(K.LOAD_ID) or ""),
            category=category,
            description=str(d.get(K.DESCRIPTION) or ""),
            breaker=breaker,
            usage=usage,
            motor=motor,
            is_nec_baseline=to_bool(d.get(K.IS_NEC_BASELINE), False),
            source_tag=tag,
            has_tandem_b=btype == BreakerType.TANDEM and isinstance(d.get(K.TANDEM_CIRCUIT_B), dict),
            category_known=known,
        )
