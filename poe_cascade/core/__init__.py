"""
core/ - Shared constants for the POE cascade calculator.
"""

from .constants import (
    POE_VOLTAGE,
    PSE_PRESETS_WATTS,
    DEFAULT_SWITCH_OUTPUT_W,
    DEFAULT_DEVICE_DRAW_W,
    DEFAULT_EFFICIENCY_PERCENT,
    DEFAULT_CABLE_LENGTH_M,
    DEFAULT_CABLE_TYPE,
    DEFAULT_CABLE_SITUATION,
    DEFAULT_TWO_PAIR,
    MARGIN_THRESHOLD_W,
    MARGIN_NOTE_INSUFFICIENT,
    MARGIN_NOTE_NO_MARGIN_NEXT,
    MARGIN_NOTE_MINIMAL,
    POE_CASCADE_VERSION,
)

__all__ = [
    "POE_VOLTAGE",
    "PSE_PRESETS_WATTS",
    "DEFAULT_SWITCH_OUTPUT_W",
    "DEFAULT_DEVICE_DRAW_W",
    "DEFAULT_EFFICIENCY_PERCENT",
    "DEFAULT_CABLE_LENGTH_M",
    "DEFAULT_CABLE_TYPE",
    "DEFAULT_CABLE_SITUATION",
    "DEFAULT_TWO_PAIR",
    "MARGIN_THRESHOLD_W",
    "MARGIN_NOTE_INSUFFICIENT",
    "MARGIN_NOTE_NO_MARGIN_NEXT",
    "MARGIN_NOTE_MINIMAL",
    "POE_CASCADE_VERSION",
]
