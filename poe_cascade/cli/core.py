"""
cli/core.py - Core CLI infrastructure

Link parsing, chain file loading and output formatting for the
poe-cascade command.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
from enum import Enum
from pathlib import Path
import json
import logging
import math

from poe_cascade.chain.schema import ChainConfig, ChainInputError, ChainRequest, LinkInput, Stage
from poe_cascade.chain.summary import ChainSummary

logger = logging.getLogger("cli")

EMPTY_CELL = "—"

STAGE_COLUMNS = [
    ("Stage", "label"),
    ("Power in (W)", "power_in"),
    ("Cable loss (W)", "cable_loss_watts"),
    ("After cable (W)", "power_after_cable_watts"),
    ("Device draw (W)", "device_draw_watts"),
    ("Efficiency", "efficiency_percent"),
    ("PSE out (W)", "output_watts"),
    ("Margin", "margin_note"),
]


class OutputFormat(Enum):
    """Output format options."""
    TEXT = "text"
    TABLE = "table"
    JSON = "json"


def parse_link_spec(spec: str) -> LinkInput:
    """
    Parse a DRAW[:EFF[:LENGTH[:TYPE]]] link argument.

    Empty parts keep the link default, so "5::20" is a 5 W device at the
    default efficiency behind 20 m of the default cable.
    """
    parts = spec.split(":")
    if len(parts) > 4:
        raise ChainInputError(f"Link '{spec}' has more than 4 parts (DRAW:EFF:LENGTH:TYPE)")

    names = ["device_draw_watts", "efficiency_percent", "cable_length_meters"]
    values: Dict[str, Any] = {}
    for name, part in zip(names, parts):
        part = part.strip()
        if not part:
            continue
        try:
            values[name] = float(part)
        except ValueError:
            raise ChainInputError(f"Link '{spec}': {name} must be a number, got {part!r}") from None

    if len(parts) == 4 and parts[3].strip():
        values["cable_type"] = parts[3].strip()

    link = LinkInput(**values)
    try:
        check_link_ranges(link)
    except ChainInputError as e:
        raise ChainInputError(f"Link '{spec}': {e}") from None
    return link


def check_link_ranges(link: LinkInput) -> None:
    """
    Apply the HTTP API's link bounds to a parsed link.

    Draw and length must be >= 0 and efficiency in (0, 100]; unset fields
    are skipped.
    """
    for name in ("device_draw_watts", "efficiency_percent", "cable_length_meters"):
        value = getattr(link, name)
        if value is None:
            continue
        if not math.isfinite(value):
            raise ChainInputError(f"{name} must be a finite number, got {value!r}")
        if value < 0:
            raise ChainInputError(f"{name} must be >= 0, got {value:g}")

    efficiency = link.efficiency_percent
    if efficiency is not None and not 0 < efficiency <= 100:
        raise ChainInputError(f"efficiency_percent must be in (0, 100], got {efficiency:g}")


def load_chain_file(filepath: str, defaults: Optional[ChainConfig] = None) -> ChainRequest:
    """Read a JSON chain file into a ChainRequest."""
    path = Path(filepath)
    if not path.exists():
        raise ChainInputError(f"Chain file not found: {filepath}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ChainInputError(f"Chain file {filepath} is not valid JSON: {e}") from None

    logger.info(f"Loaded chain file: {filepath}")
    return ChainRequest.from_dict(data, defaults=defaults)


def _format_cell(key: str, value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    if key == "efficiency_percent":
        return f"{value:g}%"
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)


def stage_rows(stages: Sequence[Stage]) -> List[List[str]]:
    """Render stages as table cells, header row first."""
    rows = [[title for title, _ in STAGE_COLUMNS]]
    for stage in stages:
        data = stage.to_dict()
        rows.append([_format_cell(key, data[key]) for _, key in STAGE_COLUMNS])
    return rows


def format_table(stages: Sequence[Stage]) -> str:
    """Fixed-width stage table."""
    rows = stage_rows(stages)
    widths = [max(len(row[i]) for row in rows) for i in range(len(STAGE_COLUMNS))]

    lines = []
    for n, row in enumerate(rows):
        lines.append(" | ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if n == 0:
            lines.append("-+-".join("-" * width for width in widths))
    return "\n".join(lines)


def format_output(
    stages: Sequence[Stage],
    summary: ChainSummary,
    format: OutputFormat,
    config: Optional[ChainConfig] = None,
) -> str:
    """Format a calculated chain for display."""
    if format == OutputFormat.JSON:
        payload: Dict[str, Any] = {
            "stages": [s.to_dict() for s in stages],
            "summary": summary.to_dict(),
        }
        if config is not None:
            payload["config"] = config.to_dict()
        return json.dumps(payload, indent=2)

    elif format == OutputFormat.TABLE:
        return format_table(stages)

    else:  # TEXT
        lines = []
        if config is not None:
            pairs = "2-pair" if config.two_pair else "1-pair"
            lines.append(
                f"PSE {config.switch_output_watts:g} W, {pairs}, "
                f"cable situation: {config.cable_situation}"
            )
            lines.append("")
        lines.append(format_table(stages))
        lines.append("")
        lines.append(f"[{summary.level.value.upper()}] {summary.message}")
        if summary.underpowered_devices:
            lines.append(f"  Underpowered: {', '.join(summary.underpowered_devices)}")
        return "\n".join(lines)
