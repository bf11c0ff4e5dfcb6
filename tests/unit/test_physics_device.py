"""
Unit tests for poe_cascade/physics/device.py
"""

import pytest

from poe_cascade.physics.device import device_pse_output


class TestDevicePseOutput:
    """Test device pass-through output."""

    def test_full_efficiency(self):
        """Test 100% efficiency passes the whole remainder."""
        assert device_pse_output(30, 5, 100) == 25

    def test_derated_remainder(self):
        """Test remainder is derated by efficiency."""
        assert device_pse_output(30, 5, 80) == 20
        assert device_pse_output(30, 10, 80) == 16.0

    def test_matches_formula_when_draw_below_input(self):
        """Test (input - draw) × efficiency / 100 for a spread of inputs."""
        for input_w, draw_w, eff in [(15.4, 3.2, 85), (60, 12.5, 92), (90, 0, 75)]:
            expected = (input_w - draw_w) * eff / 100
            assert device_pse_output(input_w, draw_w, eff) == pytest.approx(expected)

    def test_draw_exceeds_input(self):
        """Test output is zero when draw exceeds input."""
        assert device_pse_output(10, 15, 90) == 0

    def test_draw_equals_input(self):
        """Test output is zero when nothing remains."""
        assert device_pse_output(10, 10, 80) == 0

    def test_negative_input_clamps(self):
        """Test a negative input (lossy upstream run) still yields zero."""
        assert device_pse_output(-4.0, 0, 80) == 0
