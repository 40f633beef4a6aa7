# -*- coding: utf-8 -*-
"""Load categories and their NEC demand buckets.

Category membership in a demand bucket is an explicit table lookup. The
enum values are the category strings persisted in project files.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Tuple


class LoadCategory(str, Enum):
    GENERAL_LIGHTING = "General Lighting/Receptacles"
    REFRIGERATOR = "Refrigerator"
    FREEZER = "Freezer"
    DISHWASHER = "Dishwasher"
    GARBAGE_DISPOSAL = "Garbage Disposal"
    MICROWAVE = "Microwave"
    CLOTHES_WASHER = "Clothes Washer"
    WATER_HEATER = "Water Heater (Electric)"
    DEHUMIDIFIER = "Dehumidifier"
    RANGE_OVEN = "Range/Oven"
    COOKTOP = "Cooktop"
    ELECTRIC_DRYER = "Electric Dryer"
    AC_CONDENSER = "AC Condenser"
    HEAT_PUMP = "Heat Pump"
    AIR_HANDLER = "Air Handler"
    FURNACE_BLOWER = "Furnace Blower"
    BOILER = "Boiler"
    WELL_PUMP = "Well Pump"
    SUMP_PUMP = "Sump Pump"
    POOL_EQUIPMENT = "Pool Equipment"
    HOT_TUB = "Hot Tub / Spa"
    WORKSHOP = "Workshop / Garage"
    EV_CHARGER = "EV Charger"
    OTHER = "Other"


class NecBucket(str, Enum):
    LIGHTING = "lighting"
    FIXED_APPLIANCE = "fixed_appliance"
    COOKING = "cooking"
    DRYER = "dryer"
    COOLING = "cooling"
    HEATING = "heating"
    OTHER = "other"
    EV = "ev"


C = LoadCategory

CATEGORY_BUCKETS: Dict[LoadCategory, NecBucket] = {
    C.GENERAL_LIGHTING: NecBucket.LIGHTING,
    C.DISHWASHER: NecBucket.FIXED_APPLIANCE,
    C.GARBAGE_DISPOSAL: NecBucket.FIXED_APPLIANCE,
    C.MICROWAVE: NecBucket.FIXED_APPLIANCE,
    C.CLOTHES_WASHER: NecBucket.FIXED_APPLIANCE,
    C.WATER_HEATER: NecBucket.FIXED_APPLIANCE,
    C.DEHUMIDIFIER: NecBucket.FIXED_APPLIANCE,
    C.RANGE_OVEN: NecBucket.COOKING,
    C.COOKTOP: NecBucket.COOKING,
    C.ELECTRIC_DRYER: NecBucket.DRYER,
    C.AC_CONDENSER: NecBucket.COOLING,
    C.HEAT_PUMP: NecBucket.COOLING,
    C.AIR_HANDLER: NecBucket.COOLING,
    C.FURNACE_BLOWER: NecBucket.HEATING,
    C.BOILER: NecBucket.HEATING,
    C.REFRIGERATOR: NecBucket.OTHER,
    C.FREEZER: NecBucket.OTHER,
    C.WELL_PUMP: NecBucket.OTHER,
    C.SUMP_PUMP: NecBucket.OTHER,
    C.POOL_EQUIPMENT: NecBucket.OTHER,
    C.HOT_TUB: NecBucket.OTHER,
    C.WORKSHOP: NecBucket.OTHER,
    C.EV_CHARGER: NecBucket.EV,
    C.OTHER: NecBucket.OTHER,
}


def bucket_for(category: LoadCategory) -> NecBucket:
    return CATEGORY_BUCKETS.get(category, NecBucket.OTHER)


def _norm(s: str) -> str:
    return " ".join(s.strip().lower().split())


_BY_VALUE = {_norm(c.value): c for c in LoadCategory}
_BY_NAME = {c.name.lower(): c for c in LoadCategory}


def resolve_category(value: Any) -> Tuple[LoadCategory, bool]:
    """Map a persisted category string to a LoadCategory.

    Returns ``(category, known)``. Unknown or blank values resolve to
    ``LoadCategory.OTHER`` with ``known=False``.
    """
    if isinstance(value, LoadCategory):
        return value, True
    if value is None:
        return LoadCategory.OTHER, False
    s = str(value)
    hit = _BY_VALUE.get(_norm(s)) or _BY_NAME.get(s.strip().lower())
    if hit is None:
        return LoadCategory.OTHER, False
    return hit, True
