"""
Cable situation scaling.

Installation condition (ambient temperature, bundling) scales computed
cable loss relative to the "typical" baseline. Reference losses at 100 m /
90 W: cool 8-10 W, typical 9-12 W, warm 12-14 W, worst 15-17 W.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Union
import logging

from poe_cascade.core.constants import REFERENCE_TYPICAL_LOSS_W

logger = logging.getLogger(__name__)


class CableSituation(str, Enum):
    """Qualitative installation condition of the cable runs."""
    COOL = "cool"
    TYPICAL = "typical"
    WARM = "warm"
    WORST = "worst"


# Band midpoints over the typical midpoint
CABLE_SITUATION_MULTIPLIERS: Dict[str, float] = {
    CableSituation.COOL.value: 9.0 / REFERENCE_TYPICAL_LOSS_W,
    CableSituation.TYPICAL.value: 1.0,
    CableSituation.WARM.value: 13.0 / REFERENCE_TYPICAL_LOSS_W,
    CableSituation.WORST.value: 16.0 / REFERENCE_TYPICAL_LOSS_W,
}

NEUTRAL_MULTIPLIER = 1.0


def get_cable_situations() -> List[str]:
    """Return the situation keys from coolest to worst."""
    return list(CABLE_SITUATION_MULTIPLIERS.keys())


def get_situation_multiplier(situation: Optional[Union[str, CableSituation]]) -> float:
    """Loss multiplier for a situation; unknown keys are neutral (1.0)."""
    if isinstance(situation, CableSituation):
        situation = situation.value

    multiplier = CABLE_SITUATION_MULTIPLIERS.get(situation)
    if multiplier is None:
        logger.debug(f"Unknown cable situation {situation!r}, no loss scaling")
        return NEUTRAL_MULTIPLIER
    return multiplier
