"""
Unit tests for poe_cascade/chain/schema.py

Tests LinkInput default resolution, ChainConfig, ChainRequest parsing and
Stage serialization.
"""

import pytest

from poe_cascade.chain.schema import (
    ChainConfig,
    ChainInputError,
    ChainRequest,
    LinkInput,
    Stage,
)


class TestLinkInput:
    """Test LinkInput defaults and parsing."""

    def test_defaults(self):
        """Test an empty link resolves to the documented defaults."""
        link = LinkInput()
        assert link.resolved_draw_watts == 0.0
        assert link.resolved_efficiency_percent == 80.0
        assert link.resolved_length_meters == 0.0
        assert link.resolved_cable_type == "Cat5e"

    def test_explicit_zero_is_kept(self):
        """Test an explicit zero is not replaced by a default."""
        link = LinkInput(efficiency_percent=0.0, device_draw_watts=0.0)
        assert link.resolved_efficiency_percent == 0.0
        assert link.resolved_draw_watts == 0.0

    def test_to_dict_resolves(self):
        """Test serialization carries resolved values."""
        data = LinkInput(device_draw_watts=5).to_dict()
        assert data == {
            "device_draw_watts": 5,
            "efficiency_percent": 80.0,
            "cable_length_meters": 0.0,
            "cable_type": "Cat5e",
        }

    def test_from_dict_snake_case(self):
        """Test parsing snake_case keys."""
        link = LinkInput.from_dict({
            "device_draw_watts": 5,
            "efficiency_percent": 90,
            "cable_length_meters": 50,
            "cable_type": "Cat6",
        })
        assert link == LinkInput(5.0, 90.0, 50.0, "Cat6")

    def test_from_dict_camel_case(self):
        """Test parsing camelCase chain keys."""
        link = LinkInput.from_dict({
            "deviceDrawWatts": "7.5",
            "efficiencyPercent": 85,
            "cableLengthMeters": 10,
            "cableType": "Cat6a",
        })
        assert link.device_draw_watts == 7.5
        assert link.efficiency_percent == 85.0
        assert link.cable_length_meters == 10.0
        assert link.cable_type == "Cat6a"

    def test_from_dict_missing_and_blank(self):
        """Test missing, null and blank values stay unset."""
        link = LinkInput.from_dict({"efficiencyPercent": None, "cableLengthMeters": ""})
        assert link.efficiency_percent is None
        assert link.cable_length_meters is None
        assert link.resolved_efficiency_percent == 80.0

    def test_from_dict_bad_number(self):
        """Test non-numeric values raise ChainInputError."""
        with pytest.raises(ChainInputError, match="device_draw_watts"):
            LinkInput.from_dict({"deviceDrawWatts": "lots"})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "-Infinity"])
    def test_from_dict_rejects_non_finite(self, value):
        """Test NaN and infinities are not accepted as wattages."""
        with pytest.raises(ChainInputError, match="finite"):
            LinkInput.from_dict({"deviceDrawWatts": value})

    def test_from_dict_rejects_bool(self):
        """Test booleans are not accepted as numbers."""
        with pytest.raises(ChainInputError):
            LinkInput.from_dict({"cable_length_meters": True})

    def test_from_dict_rejects_non_mapping(self):
        """Test a non-object link is rejected."""
        with pytest.raises(ChainInputError):
            LinkInput.from_dict([5, 80])

    def test_chain_input_error_is_value_error(self):
        """Test ChainInputError can be caught as ValueError."""
        assert issubclass(ChainInputError, ValueError)


class TestChainConfig:
    """Test ChainConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = ChainConfig()
        assert config.switch_output_watts == 30.0
        assert config.two_pair is True
        assert config.cable_situation == "typical"

    def test_from_dict_camel_case(self):
        """Test camelCase option keys."""
        config = ChainConfig.from_dict({"switchPseWatts": 60, "twoPair": False, "cableSituation": "warm"})
        assert config == ChainConfig(60.0, False, "warm")

    def test_from_dict_uses_defaults(self):
        """Test absent keys come from the supplied defaults."""
        defaults = ChainConfig(90.0, False, "worst")
        config = ChainConfig.from_dict({"cable_situation": "cool"}, defaults=defaults)
        assert config == ChainConfig(90.0, False, "cool")

    def test_from_dict_rejects_non_bool_pair_mode(self):
        """Test pair mode must be a boolean."""
        with pytest.raises(ChainInputError):
            ChainConfig.from_dict({"two_pair": "yes"})


class TestChainRequest:
    """Test ChainRequest parsing."""

    def test_links_key(self):
        """Test the links key."""
        request = ChainRequest.from_dict({
            "switch_output_watts": 60,
            "links": [{"device_draw_watts": 5}, {"device_draw_watts": 3}],
        })
        assert request.config.switch_output_watts == 60.0
        assert [link.device_draw_watts for link in request.links] == [5.0, 3.0]

    def test_chain_key(self):
        """Test the legacy chain key."""
        request = ChainRequest.from_dict({"chain": [{"deviceDrawWatts": 4}]})
        assert len(request.links) == 1
        assert request.links[0].device_draw_watts == 4.0

    def test_empty(self):
        """Test an empty payload yields defaults and no links."""
        request = ChainRequest.from_dict({})
        assert request.links == []
        assert request.config == ChainConfig()

    def test_bad_link_names_position(self):
        """Test errors name the offending link."""
        with pytest.raises(ChainInputError, match="Link 2"):
            ChainRequest.from_dict({"links": [{}, {"efficiencyPercent": "high"}]})

    def test_links_must_be_list(self):
        """Test a non-list links value is rejected."""
        with pytest.raises(ChainInputError):
            ChainRequest.from_dict({"links": {"device_draw_watts": 5}})

    def test_to_dict(self):
        """Test serialization includes config and links."""
        request = ChainRequest(links=[LinkInput(device_draw_watts=5)])
        data = request.to_dict()
        assert data["switch_output_watts"] == 30.0
        assert data["links"][0]["device_draw_watts"] == 5


class TestStage:
    """Test Stage record."""

    def test_source_stage(self):
        """Test a source stage has only output set."""
        stage = Stage(label="Switch (PSE)", output_watts=30.0)
        assert stage.is_source
        assert not stage.is_insufficient
        assert stage.margin_watts is None
        assert stage.power_in is None
        assert stage.cable_loss_watts is None

    def test_device_stage_margin(self):
        """Test margin is after-cable power minus draw."""
        stage = Stage(
            label="Device 1",
            output_watts=16.0,
            power_in=30.0,
            cable_loss_watts=0.0,
            power_after_cable_watts=30.0,
            device_draw_watts=10.0,
            efficiency_percent=80.0,
        )
        assert not stage.is_source
        assert stage.margin_watts == 20.0

    def test_insufficient_flag(self):
        """Test the insufficient note drives is_insufficient."""
        stage = Stage(label="Device 1", output_watts=0.0, power_in=30.0,
                      margin_note="Insufficient power (device cannot operate)")
        assert stage.is_insufficient

    def test_dict_round_trip(self):
        """Test to_dict / from_dict preserve every field."""
        stage = Stage(
            label="Device 2",
            output_watts=4.2,
            power_in=8.0,
            cable_loss_watts=0.1,
            power_after_cable_watts=7.9,
            device_draw_watts=2.0,
            efficiency_percent=71.0,
            margin_note=None,
        )
        assert Stage.from_dict(stage.to_dict()) == stage
