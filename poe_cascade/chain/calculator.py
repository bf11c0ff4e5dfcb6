"""
POE Chain Power-Flow Calculator

Propagates power from the switch (PSE) through an ordered cascade of
cable segments and pass-through devices.

Single pass, no look-ahead: each stage depends only on the output of the
stage before it, and margin notes are local assessments of that stage.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Union
import time
import logging

from poe_cascade.core.constants import (
    MARGIN_THRESHOLD_W,
    MARGIN_NOTE_INSUFFICIENT,
    MARGIN_NOTE_NO_MARGIN_NEXT,
    MARGIN_NOTE_MINIMAL,
    SOURCE_STAGE_LABEL,
    DEVICE_STAGE_LABEL,
)
from poe_cascade.physics.cable import cable_power_loss
from poe_cascade.physics.device import device_pse_output
from poe_cascade.physics.situation import get_situation_multiplier
from .schema import ChainConfig, LinkInput, Stage

logger = logging.getLogger(__name__)

LinkLike = Union[LinkInput, Mapping[str, Any]]


def _as_link(link: LinkLike) -> LinkInput:
    if isinstance(link, LinkInput):
        return link
    return LinkInput.from_dict(link)


def margin_note_for(
    power_after_cable_watts: float,
    device_draw_watts: float,
    output_watts: float,
    is_last: bool,
) -> Optional[str]:
    """
    Diagnose one device stage. First match wins:

    - cable leaves less than the draw -> insufficient
    - pass-through under 1 W with a device still downstream -> no margin
    - under 1 W spare before derating -> minimal margin
    """
    if power_after_cable_watts < device_draw_watts:
        return MARGIN_NOTE_INSUFFICIENT
    if output_watts < MARGIN_THRESHOLD_W and not is_last:
        return MARGIN_NOTE_NO_MARGIN_NEXT
    if power_after_cable_watts - device_draw_watts < MARGIN_THRESHOLD_W:
        return MARGIN_NOTE_MINIMAL
    return None


class ChainCalculator:
    """
    Stage propagator for a POE cascade.

    Stateless: every call to calculate() derives the stage list from its
    arguments and the read-only cable and situation tables.
    """

    def calculate(
        self,
        links: Iterable[LinkLike],
        config: Optional[ChainConfig] = None,
    ) -> List[Stage]:
        """
        Calculate the power flow through the chain.

        Args:
            links: Ordered links, switch side first (LinkInput or mappings)
            config: Switch output, pair mode and cable situation

        Returns:
            Stages: the switch followed by one stage per link
        """
        start_time = time.perf_counter()
        config = config or ChainConfig()
        chain = [_as_link(link) for link in links]

        loss_multiplier = get_situation_multiplier(config.cable_situation)
        power_at_stage = config.switch_output_watts

        stages: List[Stage] = [
            Stage(label=SOURCE_STAGE_LABEL, output_watts=config.switch_output_watts),
        ]

        for index, link in enumerate(chain):
            stage = self._propagate_link(
                index=index,
                link=link,
                power_at_stage=power_at_stage,
                two_pair=config.two_pair,
                loss_multiplier=loss_multiplier,
                is_last=index == len(chain) - 1,
            )
            stages.append(stage)
            power_at_stage = stage.output_watts

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Chain calculated: {len(chain)} device(s), "
            f"final output {power_at_stage:.2f} W, {elapsed_ms:.2f} ms"
        )
        return stages

    def _propagate_link(
        self,
        index: int,
        link: LinkInput,
        power_at_stage: float,
        two_pair: bool,
        loss_multiplier: float,
        is_last: bool,
    ) -> Stage:
        length = link.resolved_length_meters
        draw = link.resolved_draw_watts
        efficiency = link.resolved_efficiency_percent

        loss = 0.0
        if length > 0:
            loss = cable_power_loss(power_at_stage, length, link.resolved_cable_type, two_pair)
        loss *= loss_multiplier

        # Not clamped: a negative value is reported as-is
        after_cable = power_at_stage - loss

        output = device_pse_output(after_cable, draw, efficiency)

        return Stage(
            label=DEVICE_STAGE_LABEL.format(index=index + 1),
            power_in=power_at_stage,
            cable_loss_watts=loss,
            power_after_cable_watts=after_cable,
            device_draw_watts=draw,
            efficiency_percent=efficiency,
            output_watts=output,
            margin_note=margin_note_for(after_cable, draw, output, is_last),
        )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def calculate_chain(
    switch_output_watts: float,
    links: Iterable[LinkLike],
    config: Optional[ChainConfig] = None,
) -> List[Stage]:
    """
    Convenience function for chain calculation.

    The explicit switch output takes precedence over config.switch_output_watts.

    Args:
        switch_output_watts: PSE output at the switch port (W)
        links: Ordered links, switch side first
        config: Pair mode and cable situation (defaults: two-pair, typical)

    Returns:
        List of Stage records, len(links) + 1 long
    """
    config = replace(config or ChainConfig(), switch_output_watts=switch_output_watts)
    return ChainCalculator().calculate(links, config)
