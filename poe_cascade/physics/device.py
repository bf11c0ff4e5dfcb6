"""
POE Device Pass-Through Model

A powered device (PD) consumes its own draw and re-injects what is left,
derated by its PSE efficiency, into the next segment of the cascade.
"""

from __future__ import annotations


def device_pse_output(
    pd_input_watts: float,
    device_draw_watts: float,
    efficiency_percent: float,
) -> float:
    """
    Calculate power a device passes downstream.

    output = max(0, input - draw) × efficiency / 100

    A draw at or above the input is a normal underpowered condition and
    yields exactly 0.0.

    Args:
        pd_input_watts: Power available at the device input (W)
        device_draw_watts: Device's own consumption (W)
        efficiency_percent: Pass-through efficiency (%)

    Returns:
        Pass-through output in watts
    """
    remaining = max(0.0, pd_input_watts - device_draw_watts)
    return remaining * (efficiency_percent / 100.0)
