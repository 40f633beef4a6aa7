# -*- coding: utf-8 -*-
"""
domain/catalog.py

Static reference data read by the engine:
- load library (defaults per category)
- standard branch and main breaker sizes
- EV charger options
- battery product specifications

Values are planning defaults, not nameplate data. Nothing here is user editable
at runtime; a project stores its own edited copies inside each load entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from core.models.battery import BatteryConfig, BatterySpec
from core.models.categories import LoadCategory as C


@dataclass(frozen=True)
class LibraryEntry:
    category: C
    description: str
    poles: int
    amps: int
    watts: float
    hours_per_day: float
    utilization_factor: float = 0.5
    is_motor: bool = False
    default_lra: Optional[float] = None
    hint: str = ""


def _e(category, description, poles, amps, watts, hours, util=0.5, motor=False, lra=None, hint=""):
    return LibraryEntry(category, description, poles, amps, float(watts), float(hours), util, motor, lra, hint)


LOAD_LIBRARY: Dict[C, LibraryEntry] = {e.category: e for e in (
    _e(C.GENERAL_LIGHTING, "General Lighting/Receptacles", 1, 15, 1500, 8, hint="Use square footage x 3 VA for NEC"),
    _e(C.REFRIGERATOR, "Refrigerator", 1, 20, 200, 24, util=0.1, motor=True, lra=30, hint="Running watts; compressor cycles"),
    _e(C.FREEZER, "Freezer", 1, 15, 150, 24, util=0.1, motor=True, lra=25),
    _e(C.DISHWASHER, "Dishwasher", 1, 20, 1200, 1),
    _e(C.GARBAGE_DISPOSAL, "Garbage Disposal", 1, 15, 500, 0.1, motor=True, lra=20),
    _e(C.MICROWAVE, "Microwave", 1, 20, 1200, 0.5),
    _e(C.CLOTHES_WASHER, "Clothes Washer", 1, 20, 500, 1, motor=True, lra=25),
    _e(C.WATER_HEATER, "Water Heater (Electric)", 2, 30, 4500, 3, util=0.8, hint="Tank type, 4500 W elements"),
    _e(C.DEHUMIDIFIER, "Dehumidifier", 1, 15, 500, 12, motor=True, lra=15),
    _e(C.RANGE_OVEN, "Range/Oven", 2, 50, 10000, 1.5, hint="8-12 kW typical"),
    _e(C.COOKTOP, "Cooktop", 2, 40, 6500, 1),
    _e(C.ELECTRIC_DRYER, "Electric Dryer", 2, 30, 5000, 1, util=0.7),
    _e(C.AC_CONDENSER, "AC Condenser", 2, 30, 3500, 8, motor=True, lra=80, hint="Check nameplate LRA"),
    _e(C.HEAT_PUMP, "Heat Pump", 2, 40, 4000, 8, motor=True, lra=100, hint="Check nameplate LRA"),
    _e(C.AIR_HANDLER, "Air Handler", 1, 15, 500, 8, motor=True, lra=20),
    _e(C.FURNACE_BLOWER, "Furnace Blower", 1, 15, 600, 8, motor=True, lra=25),
    _e(C.BOILER, "Boiler", 1, 15, 300, 8, motor=True, lra=10, hint="Circulator and controls"),
    _e(C.WELL_PUMP, "Well Pump", 2, 20, 1500, 2, motor=True, lra=60),
    _e(C.SUMP_PUMP, "Sump Pump", 1, 15, 800, 1, motor=True, lra=25),
    _e(C.POOL_EQUIPMENT, "Pool Equipment", 2, 20, 1500, 8, motor=True, lra=40),
    _e(C.HOT_TUB, "Hot Tub / Spa", 2, 50, 6000, 3, util=0.6),
    _e(C.WORKSHOP, "Workshop / Garage", 1, 20, 1500, 2),
    _e(C.EV_CHARGER, "EV Charger", 2, 50, 9600, 4, util=0.8),
    _e(C.OTHER, "Other", 1, 15, 500, 4),
)}

GENERIC_ENTRY: LibraryEntry = LOAD_LIBRARY[C.OTHER]


def library_entry(category: C) -> LibraryEntry:
    return LOAD_LIBRARY.get(category, GENERIC_ENTRY)


BREAKER_AMP_OPTIONS: Tuple[int, ...] = (15, 20, 25, 30, 35, 40, 45, 50, 60, 70, 80, 90, 100, 110, 125)
MAIN_BREAKER_OPTIONS: Tuple[int, ...] = (60, 100, 125, 150, 175, 200, 225, 250, 300, 320, 400)
SERVICE_VOLTAGE_OPTIONS: Tuple[int, ...] = (240, 208)


@dataclass(frozen=True)
class EVChargerOption:
    label: str
    continuous_amps: float
    recommended_breaker_amps: int
    is_custom: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "continuousAmps": self.continuous_amps,
            "recommendedBreakerAmps": self.recommended_breaker_amps,
            "isCustom": self.is_custom,
        }


EV_CHARGER_OPTIONS: List[EVChargerOption] = [
    EVChargerOption("Level 2 - 16A (20A breaker)", 16, 20),
    EVChargerOption("Level 2 - 24A (30A breaker)", 24, 30),
    EVChargerOption("Level 2 - 32A (40A breaker)", 32, 40),
    EVChargerOption("Level 2 - 40A (50A breaker)", 40, 50),
    EVChargerOption("Level 2 - 48A (60A breaker)", 48, 60),
    EVChargerOption("Custom", 0, 0, is_custom=True),
]


def ev_charger_option(continuous_amps: float) -> EVChargerOption:
    """Catalog option with this continuous rating, else the Custom entry."""
    for opt in EV_CHARGER_OPTIONS:
        if not opt.is_custom and float(opt.continuous_amps) == float(continuous_amps):
            return opt
    return EV_CHARGER_OPTIONS[-1]


MAX_EV_CHARGERS = 4


BATTERY_SPECS: Dict[str, BatterySpec] = {
    "enphase5P": BatterySpec(
        key="enphase5P",
        label="Enphase IQ Battery 5P",
        short_label="5P",
        usable_kwh=5.0,
        continuous_kw=3.84,
        motor_start_lra=None,
        max_units=16,
    ),
    "enphase10C": BatterySpec(
        key="enphase10C",
        label="Enphase IQ Battery 10C",
        short_label="10C",
        usable_kwh=10.0,
        continuous_kw=7.08,
        motor_start_lra=60.0,
        max_units=8,
    ),
    "teslaPW3": BatterySpec(
        key="teslaPW3",
        label="Tesla Powerwall 3",
        short_label="PW3",
        usable_kwh=13.5,
        continuous_kw=11.5,
        motor_start_lra=185.0,
        max_units=4,
    ),
    "teslaPW3Expansion": BatterySpec(
        key="teslaPW3Expansion",
        label="Tesla Powerwall 3 Expansion",
        short_label="PW3 Expansion",
        usable_kwh=13.5,
        max_per_leader=3,
    ),
}

CONFIG_LABELS: Dict[BatteryConfig, str] = {
    BatteryConfig.ENPHASE_5P: "Enphase 5P",
    BatteryConfig.ENPHASE_10C: "Enphase 10C",
    BatteryConfig.ENPHASE_MIXED: "Enphase 10C + 5P",
    BatteryConfig.TESLA_PW3: "Tesla Powerwall 3",
    BatteryConfig.TESLA_PW3_EXPANSIONS: "Tesla Powerwall 3 + Expansions",
}
