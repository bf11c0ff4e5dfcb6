"""
chain/schema.py - POE cascade data model

Link inputs, calculation configuration and the per-stage output record.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
import math

from poe_cascade.core.constants import (
    DEFAULT_SWITCH_OUTPUT_W,
    DEFAULT_DEVICE_DRAW_W,
    DEFAULT_EFFICIENCY_PERCENT,
    DEFAULT_CABLE_LENGTH_M,
    DEFAULT_CABLE_TYPE,
    DEFAULT_CABLE_SITUATION,
    DEFAULT_TWO_PAIR,
    MARGIN_NOTE_INSUFFICIENT,
)


class ChainInputError(ValueError):
    """Raised when a chain description cannot be read."""


# Legacy chain-format keys -> attribute names
LINK_FIELD_ALIASES: Dict[str, str] = {
    "deviceDrawWatts": "device_draw_watts",
    "efficiencyPercent": "efficiency_percent",
    "cableLengthMeters": "cable_length_meters",
    "cableType": "cable_type",
    "draw": "device_draw_watts",
    "efficiency": "efficiency_percent",
    "length": "cable_length_meters",
}

CONFIG_FIELD_ALIASES: Dict[str, str] = {
    "switchPseWatts": "switch_output_watts",
    "switchOutputWatts": "switch_output_watts",
    "twoPair": "two_pair",
    "cableSituation": "cable_situation",
}


def _optional_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ChainInputError(f"{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ChainInputError(f"{key} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ChainInputError(f"{key} must be a finite number, got {value!r}")
    return number


def _normalize_keys(data: Mapping[str, Any], aliases: Mapping[str, str]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        normalized[aliases.get(key, key)] = value
    return normalized


@dataclass
class LinkInput:
    """
    One cable segment plus the device at its far end.

    Every field is optional; None means "use the default". Defaults are
    resolved by the resolved_* properties, so an explicit 0 is kept as 0.
    """

    device_draw_watts: Optional[float] = None
    efficiency_percent: Optional[float] = None
    cable_length_meters: Optional[float] = None
    cable_type: Optional[str] = None

    @property
    def resolved_draw_watts(self) -> float:
        if self.device_draw_watts is None:
            return DEFAULT_DEVICE_DRAW_W
        return self.device_draw_watts

    @property
    def resolved_efficiency_percent(self) -> float:
        if self.efficiency_percent is None:
            return DEFAULT_EFFICIENCY_PERCENT
        return self.efficiency_percent

    @property
    def resolved_length_meters(self) -> float:
        if self.cable_length_meters is None:
            return DEFAULT_CABLE_LENGTH_M
        return self.cable_length_meters

    @property
    def resolved_cable_type(self) -> str:
        if not self.cable_type:
            return DEFAULT_CABLE_TYPE
        return self.cable_type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_draw_watts": self.resolved_draw_watts,
            "efficiency_percent": self.resolved_efficiency_percent,
            "cable_length_meters": self.resolved_length_meters,
            "cable_type": self.resolved_cable_type,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LinkInput":
        """Build from snake_case or camelCase keys."""
        if not isinstance(data, Mapping):
            raise ChainInputError(f"Link must be an object, got {type(data).__name__}")

        normalized = _normalize_keys(data, LINK_FIELD_ALIASES)
        cable_type = normalized.get("cable_type")
        return cls(
            device_draw_watts=_optional_float(normalized, "device_draw_watts"),
            efficiency_percent=_optional_float(normalized, "efficiency_percent"),
            cable_length_meters=_optional_float(normalized, "cable_length_meters"),
            cable_type=str(cable_type) if cable_type is not None else None,
        )


@dataclass
class ChainConfig:
    """Settings global to one chain calculation."""

    switch_output_watts: float = DEFAULT_SWITCH_OUTPUT_W
    two_pair: bool = DEFAULT_TWO_PAIR
    cable_situation: str = DEFAULT_CABLE_SITUATION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "switch_output_watts": self.switch_output_watts,
            "two_pair": self.two_pair,
            "cable_situation": self.cable_situation,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        defaults: Optional["ChainConfig"] = None,
    ) -> "ChainConfig":
        """Build from a mapping; absent keys come from defaults."""
        base = defaults or cls()
        normalized = _normalize_keys(data, CONFIG_FIELD_ALIASES)

        switch = _optional_float(normalized, "switch_output_watts")
        two_pair = normalized.get("two_pair")
        if two_pair is not None and not isinstance(two_pair, bool):
            raise ChainInputError(f"two_pair must be true or false, got {two_pair!r}")
        situation = normalized.get("cable_situation")

        return cls(
            switch_output_watts=switch if switch is not None else base.switch_output_watts,
            two_pair=two_pair if two_pair is not None else base.two_pair,
            cable_situation=str(situation) if situation else base.cable_situation,
        )


@dataclass
class Stage:
    """
    One position in the calculated chain.

    Position 0 is the switch (only output_watts set); positions 1..N are
    devices.
    """

    label: str
    output_watts: float
    power_in: Optional[float] = None
    cable_loss_watts: Optional[float] = None
    power_after_cable_watts: Optional[float] = None
    device_draw_watts: Optional[float] = None
    efficiency_percent: Optional[float] = None
    margin_note: Optional[str] = None

    @property
    def is_source(self) -> bool:
        return self.power_in is None

    @property
    def is_insufficient(self) -> bool:
        return self.margin_note == MARGIN_NOTE_INSUFFICIENT

    @property
    def margin_watts(self) -> Optional[float]:
        """Spare power after the draw, before efficiency derating."""
        if self.is_source:
            return None
        return self.power_after_cable_watts - self.device_draw_watts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "power_in": self.power_in,
            "cable_loss_watts": self.cable_loss_watts,
            "power_after_cable_watts": self.power_after_cable_watts,
            "device_draw_watts": self.device_draw_watts,
            "efficiency_percent": self.efficiency_percent,
            "output_watts": self.output_watts,
            "margin_note": self.margin_note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stage":
        return cls(
            label=data.get("label", ""),
            output_watts=data.get("output_watts", 0.0),
            power_in=data.get("power_in"),
            cable_loss_watts=data.get("cable_loss_watts"),
            power_after_cable_watts=data.get("power_after_cable_watts"),
            device_draw_watts=data.get("device_draw_watts"),
            efficiency_percent=data.get("efficiency_percent"),
            margin_note=data.get("margin_note"),
        )


@dataclass
class ChainRequest:
    """A complete chain description: configuration plus ordered links."""

    config: ChainConfig = field(default_factory=ChainConfig)
    links: List[LinkInput] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self.config.to_dict()
        data["links"] = [link.to_dict() for link in self.links]
        return data

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        defaults: Optional[ChainConfig] = None,
    ) -> "ChainRequest":
        """
        Parse a chain file payload.

        Accepts "links" or the legacy "chain" key for the device list.
        """
        if not isinstance(data, Mapping):
            raise ChainInputError(f"Chain must be an object, got {type(data).__name__}")

        raw_links = data.get("links", data.get("chain", []))
        if raw_links is None:
            raw_links = []
        if not isinstance(raw_links, list):
            raise ChainInputError("links must be a list")

        links = []
        for index, raw in enumerate(raw_links):
            try:
                links.append(LinkInput.from_dict(raw))
            except ChainInputError as e:
                raise ChainInputError(f"Link {index + 1}: {e}") from None

        return cls(
            config=ChainConfig.from_dict(data, defaults=defaults),
            links=links,
        )
