"""
POE Physics Primitives

Cable resistive loss, device pass-through and cable situation scaling.
"""

from .cable import (
    CableSpec,
    CABLE_TYPES,
    BASELINE_CABLE_TYPE,
    get_cable_types,
    get_cable_spec,
    loop_resistance,
    cable_power_loss,
    power_after_cable,
)

from .device import device_pse_output

from .situation import (
    CableSituation,
    CABLE_SITUATION_MULTIPLIERS,
    get_cable_situations,
    get_situation_multiplier,
)

__all__ = [
    # Cable
    "CableSpec",
    "CABLE_TYPES",
    "BASELINE_CABLE_TYPE",
    "get_cable_types",
    "get_cable_spec",
    "loop_resistance",
    "cable_power_loss",
    "power_after_cable",
    # Device
    "device_pse_output",
    # Situation
    "CableSituation",
    "CABLE_SITUATION_MULTIPLIERS",
    "get_cable_situations",
    "get_situation_multiplier",
]
