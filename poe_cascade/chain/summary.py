"""
chain/summary.py - Cascade summary and device power status

Turns a calculated stage list into the headline verdict shown next to the
stage table: how many devices the configuration can cascade and what is
left after the last one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from poe_cascade.core.constants import MARGIN_THRESHOLD_W
from .schema import Stage


class DeviceStatus(Enum):
    """Power status of a device stage."""
    POWERED = "powered"
    UNDERPOWERED = "underpowered"


class SummaryLevel(Enum):
    """Severity of the chain summary."""
    INFO = "info"
    OK = "ok"
    WARN = "warn"
    ERROR = "error"


EMPTY_CHAIN_MESSAGE = (
    "Add devices to see how many can be cascaded. Configure switch PSE, each "
    "device's draw and efficiency, and cable length/type between stages."
)

UNDERPOWERED_MESSAGE = (
    "Chain is underpowered. One or more devices do not receive enough power. "
    "Reduce draw, shorten cables, use better cable (e.g. Cat6a), or increase switch PSE."
)


def device_status(stage: Stage) -> DeviceStatus:
    """Underpowered only when the stage cannot run its own draw."""
    if stage.is_insufficient:
        return DeviceStatus.UNDERPOWERED
    return DeviceStatus.POWERED


@dataclass
class ChainSummary:
    """Headline verdict for a calculated chain."""

    level: SummaryLevel
    device_count: int
    message: str
    remaining_watts: Optional[float] = None
    underpowered_devices: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "device_count": self.device_count,
            "remaining_watts": self.remaining_watts,
            "message": self.message,
            "underpowered_devices": list(self.underpowered_devices),
        }


def summarize_chain(stages: Sequence[Stage]) -> ChainSummary:
    """
    Summarize a stage list produced by the chain calculator.

    Args:
        stages: Switch stage followed by device stages

    Returns:
        ChainSummary
    """
    devices = [s for s in stages if not s.is_source]
    count = len(devices)

    if count == 0:
        return ChainSummary(level=SummaryLevel.INFO, device_count=0, message=EMPTY_CHAIN_MESSAGE)

    last = devices[-1]
    underpowered = [s.label for s in devices if device_status(s) is DeviceStatus.UNDERPOWERED]

    if underpowered:
        return ChainSummary(
            level=SummaryLevel.ERROR,
            device_count=count,
            remaining_watts=last.output_watts,
            message=UNDERPOWERED_MESSAGE,
            underpowered_devices=underpowered,
        )

    if last.output_watts < MARGIN_THRESHOLD_W:
        return ChainSummary(
            level=SummaryLevel.WARN,
            device_count=count,
            remaining_watts=last.output_watts,
            message=(
                f"Maximum cascade in this configuration: {count} device(s). "
                "No usable power remains after the last device."
            ),
        )

    return ChainSummary(
        level=SummaryLevel.OK,
        device_count=count,
        remaining_watts=last.output_watts,
        message=(
            f"Usable cascade: {count} device(s). Remaining power after last device: "
            f"{last.output_watts:.2f} W. You can add more devices if they need less than this."
        ),
    )
