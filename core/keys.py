# -*- coding: utf-8 -*-
"""Single source of truth for project snapshot keys.

Why:
- Avoid typos scattered across services, validators and reports.
- Make schema evolution (migrations) safer.

These are *storage keys* in the persisted project JSON. The camelCase names
are the historical file format; keep them stable and migrate when needed.
"""

from __future__ import annotations


class ProjectKeys:
    # top level
    META = "_meta"
    METADATA = "metadata"
    SERVICE = "service"
    PANEL = "panel"
    LOADS = "loads"
    EV = "ev"
    BATTERY = "battery"
    LOAD_ENTRY_PATH = "loadEntryPath"
    GUIDED_COMPLETE = "guidedComplete"

    # metadata
    PROJECT_NAME = "projectName"
    ADDRESS = "address"
    SQUARE_FOOTAGE = "squareFootage"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    # service
    SERVICE_VOLTAGE = "serviceVoltage"
    MAIN_BREAKER_AMPS = "mainBreakerAmps"
    BUS_RATING_AMPS = "busRatingAmps"

    # panel
    TOTAL_SLOTS = "totalSlots"
    USED_SLOTS = "usedSlots"
    TANDEM_SLOTS_USED = "tandemSlotsUsed"
    TANDEMS_ALLOWED = "tandemsAllowed"
    TANDEM_POLICY = "tandemPolicy"
    ALLOWED_POSITIONS = "allowedPositions"
    CUSTOM_MAX_TANDEM_SLOTS = "customMaxTandemSlots"

    # load entry
    LOAD_ID = "id"
    CIRCUIT_NUMBER = "circuitNumber"
    DESCRIPTION = "description"
    CATEGORY = "category"
    IS_NEC_BASELINE = "isNECBaseline"
    BREAKER = "breaker"
    TANDEM_CIRCUIT_B = "tandemCircuitB"
    USAGE = "usage"
    MOTOR = "motor"
    SOURCE_TAG = "sourceTag"
    WATTS_MANUALLY_SET = "_wattsManuallySet"
    NEC_EDITED = "_necEdited"

    # ev
    EV_INCLUDE_IN_BACKUP_DEFAULT = "includeInBackupDefault"
    EV_CHARGER_OPTION = "chargerOption"
    EV_CUSTOM_CONTINUOUS_AMPS = "customContinuousAmps"
    EV_CHARGER_COUNT = "chargerCount"

    # battery
    WHOLE_HOME = "wholeHome"
    PARTIAL_HOME = "partialHome"
    BACKUP_DAYS = "backupDays"
    BACKUP_MODE = "backupMode"
    CUSTOM_DAYS = "customDays"
    INCLUDE_EV = "includeEV"
    SOLAR_OFFSET_PERCENT = "solarOffsetPercent"
    SOLAR_OFFSET_ENABLED = "solarOffsetEnabled"
    ENABLED = "enabled"
    SELECTIONS = "selections"
