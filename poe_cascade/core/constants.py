"""
POE Cascade Physical Constants and System Configuration

Constants used throughout the POE cascade calculator for cable loss,
device pass-through and chain defaults.
"""

from typing import Tuple

# ==================== Electrical Constants ====================

# Nominal POE supply voltage used to estimate segment current (I = P / V)
POE_VOLTAGE = 48.0  # V

# A single conductor pair carries the full loop current
ONE_PAIR_RESISTANCE_FACTOR = 2.0

# Reference point for the cable calibration: "typical" 100 m run at 90 W
REFERENCE_LENGTH_M = 100.0
REFERENCE_POWER_W = 90.0
REFERENCE_TYPICAL_LOSS_W = 10.5  # midpoint of the 9-12 W band

# ==================== PSE Budgets ====================

# Per-port PSE output budgets (802.3af / 802.3at / 802.3bt type 3 / type 4)
PSE_PRESETS_WATTS: Tuple[float, ...] = (15.4, 30.0, 60.0, 90.0)

# ==================== Link Defaults ====================

DEFAULT_SWITCH_OUTPUT_W = 30.0
DEFAULT_DEVICE_DRAW_W = 0.0
DEFAULT_EFFICIENCY_PERCENT = 80.0
DEFAULT_CABLE_LENGTH_M = 0.0
DEFAULT_CABLE_TYPE = "Cat5e"
DEFAULT_CABLE_SITUATION = "typical"
DEFAULT_TWO_PAIR = True

# ==================== Margin Diagnostics ====================

# Below this much spare power a stage is flagged
MARGIN_THRESHOLD_W = 1.0

MARGIN_NOTE_INSUFFICIENT = "Insufficient power (device cannot operate)"
MARGIN_NOTE_NO_MARGIN_NEXT = "No margin for next device"
MARGIN_NOTE_MINIMAL = "Minimal margin"

# ==================== Labels ====================

SOURCE_STAGE_LABEL = "Switch (PSE)"
DEVICE_STAGE_LABEL = "Device {index}"

# ==================== System Configuration ====================

POE_CASCADE_VERSION = "1.0.0"
