"""
chain/ - POE cascade power-flow engine

Stage propagation over an ordered list of cable + device links, with a
summary of how far the cascade reaches.
"""

from .schema import (
    ChainInputError,
    LinkInput,
    ChainConfig,
    ChainRequest,
    Stage,
)

from .calculator import (
    ChainCalculator,
    calculate_chain,
    margin_note_for,
)

from .summary import (
    DeviceStatus,
    SummaryLevel,
    ChainSummary,
    device_status,
    summarize_chain,
)


__all__ = [
    # Schema
    "ChainInputError",
    "LinkInput",
    "ChainConfig",
    "ChainRequest",
    "Stage",
    # Calculator
    "ChainCalculator",
    "calculate_chain",
    "margin_note_for",
    # Summary
    "DeviceStatus",
    "SummaryLevel",
    "ChainSummary",
    "device_status",
    "summarize_chain",
]
