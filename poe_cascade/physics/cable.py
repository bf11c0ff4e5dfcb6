"""
POE Cable Loss Model

Resistive loss of a copper segment between two stages of a POE cascade.

Lumped single-resistor model: the segment current is estimated from the
nominal 48 V supply (I = P / 48) and the loss is I²R over the loop
resistance of the run. Voltage sag along the run is not fed back into the
current estimate, so long or lossy runs are a first-order approximation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List
import logging

from poe_cascade.core.constants import (
    POE_VOLTAGE,
    ONE_PAIR_RESISTANCE_FACTOR,
    DEFAULT_CABLE_TYPE,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CABLE CATALOG
# =============================================================================

@dataclass(frozen=True)
class CableSpec:
    """Copper cable grade used for a POE segment."""
    name: str
    resistance_per_meter: float  # Ω/m, two-pair loop

    def to_dict(self) -> Dict[str, float]:
        return {
            "key": self.name,
            "resistance_per_meter": self.resistance_per_meter,
        }


# Base R (2-pair) calibrated so that 90 W over 100 m of Cat5e in the
# "typical" situation loses 10.5 W: R_100m = 10.5 / (90/48)² ≈ 2.99 Ω
CABLE_TYPES: Dict[str, CableSpec] = {
    "Cat5e": CableSpec("Cat5e", 0.0299),
    "Cat6": CableSpec("Cat6", 0.0267),
    "Cat6a": CableSpec("Cat6a", 0.0236),
    "Cat7": CableSpec("Cat7", 0.0217),
}

BASELINE_CABLE_TYPE = DEFAULT_CABLE_TYPE


def get_cable_types() -> List[str]:
    """Return the supported cable type keys in catalog order."""
    return list(CABLE_TYPES.keys())


def get_cable_spec(cable_type: str) -> CableSpec:
    """
    Look up a cable grade, falling back to the baseline grade.

    Unknown or missing keys never raise; they resolve to Cat5e.
    """
    spec = CABLE_TYPES.get(cable_type) if cable_type is not None else None
    if spec is None:
        logger.debug(f"Unknown cable type {cable_type!r}, using {BASELINE_CABLE_TYPE}")
        spec = CABLE_TYPES[BASELINE_CABLE_TYPE]
    return spec


# =============================================================================
# LOSS FORMULAS
# =============================================================================

def loop_resistance(length_meters: float, cable_type: str, two_pair: bool = True) -> float:
    """
    Loop resistance of a run in ohms.

    One-pair powering carries the whole current on a single pair, which
    doubles the effective loop resistance.
    """
    resistance = get_cable_spec(cable_type).resistance_per_meter * length_meters
    if not two_pair:
        resistance *= ONE_PAIR_RESISTANCE_FACTOR
    return resistance


def cable_power_loss(
    watts_through_cable: float,
    length_meters: float,
    cable_type: str,
    two_pair: bool = True,
) -> float:
    """
    Calculate resistive loss in a cable segment.

    P_loss = I² × R, I = P / 48

    Args:
        watts_through_cable: Power entering the segment (W)
        length_meters: Segment length (m)
        cable_type: Cable catalog key (unknown keys use Cat5e)
        two_pair: True when two pairs share the load

    Returns:
        Loss in watts (exactly 0.0 for zero-length runs)
    """
    if length_meters <= 0:
        return 0.0

    resistance = loop_resistance(length_meters, cable_type, two_pair)
    current = watts_through_cable / POE_VOLTAGE
    return current * current * resistance


def power_after_cable(
    watts_in: float,
    length_meters: float,
    cable_type: str,
    two_pair: bool = True,
) -> float:
    """
    Power arriving at the far end of a segment, never below zero.

    Returns watts_in unchanged for zero-length runs.
    """
    if length_meters <= 0:
        return watts_in
    loss = cable_power_loss(watts_in, length_meters, cable_type, two_pair)
    return max(0.0, watts_in - loss)
