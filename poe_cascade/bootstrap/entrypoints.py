"""
bootstrap/entrypoints.py - Application entry points

Provides the poe-cascade CLI and the poe-cascade-api server entry points.
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import math
import sys

from poe_cascade.core.constants import PSE_PRESETS_WATTS
from poe_cascade.chain.calculator import ChainCalculator
from poe_cascade.chain.schema import ChainInputError, ChainRequest
from poe_cascade.chain.summary import summarize_chain
from poe_cascade.cli.core import OutputFormat, check_link_ranges, format_output, load_chain_file, parse_link_spec
from poe_cascade.physics.cable import CABLE_TYPES, get_cable_types
from poe_cascade.physics.situation import CABLE_SITUATION_MULTIPLIERS, get_cable_situations

from .config import load_config

logger = logging.getLogger("bootstrap.entrypoints")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130


def setup_logging(level: str = "INFO", log_file: str = None, json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Logs go to stderr so stdout stays clean for results
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace handlers from an earlier call instead of stacking them
    for handler in list(root_logger.handlers):
        if getattr(handler, "_poe_cascade", False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: List[logging.Handler] = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    for handler in handlers:
        handler._poe_cascade = True
        root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_cli_parser() -> argparse.ArgumentParser:
    presets = " / ".join(f"{w:g}" for w in PSE_PRESETS_WATTS)
    parser = argparse.ArgumentParser(
        description="POE cascade calculator: power flow through daisy-chained POE devices",
        prog="poe-cascade",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )
    parser.add_argument(
        "--switch",
        type=float,
        default=None,
        metavar="WATTS",
        help=f"PSE output at the switch port in watts (typical: {presets})",
    )
    parser.add_argument(
        "--link",
        action="append",
        default=[],
        metavar="DRAW[:EFF[:LENGTH[:TYPE]]]",
        help="Add a device with the cable leading to it; repeat in chain order",
    )
    parser.add_argument(
        "--chain-file",
        default=None,
        help="JSON chain file (switch output, pair mode, situation, links)",
    )

    pairs = parser.add_mutually_exclusive_group()
    pairs.add_argument(
        "--two-pair",
        dest="two_pair",
        action="store_true",
        default=None,
        help="Power over two pairs (default)",
    )
    pairs.add_argument(
        "--one-pair",
        dest="two_pair",
        action="store_false",
        help="Power over a single pair (doubles loop resistance)",
    )

    parser.add_argument(
        "--situation",
        choices=get_cable_situations(),
        default=None,
        help="Cable installation situation scaling the cable loss",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--list-cable-types",
        action="store_true",
        help="List supported cable types and exit",
    )
    parser.add_argument(
        "--list-situations",
        action="store_true",
        help="List cable situations and their loss multipliers and exit",
    )
    return parser


def _build_request(parsed: argparse.Namespace, config) -> ChainRequest:
    defaults = config.chain.to_chain_config()
    if parsed.chain_file:
        request = load_chain_file(parsed.chain_file, defaults=defaults)
    else:
        request = ChainRequest(config=defaults)

    if parsed.link:
        request.links = [parse_link_spec(spec) for spec in parsed.link]
    if parsed.switch is not None:
        request.config.switch_output_watts = parsed.switch
    if parsed.two_pair is not None:
        request.config.two_pair = parsed.two_pair
    if parsed.situation is not None:
        request.config.cable_situation = parsed.situation

    switch = request.config.switch_output_watts
    if not math.isfinite(switch) or switch <= 0:
        raise ChainInputError(f"Switch output must be a positive number, got {switch:g} W")

    for index, link in enumerate(request.links):
        try:
            check_link_ranges(link)
        except ChainInputError as e:
            raise ChainInputError(f"Link {index + 1}: {e}") from None
    return request


def cli_main(args: List[str] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = build_cli_parser()
    parsed = parser.parse_args(args)

    log_level = "DEBUG" if parsed.verbose else parsed.log_level
    setup_logging(level=log_level, log_file=parsed.log_file)

    try:
        if parsed.list_cable_types:
            for key in get_cable_types():
                print(f"{key}\t{CABLE_TYPES[key].resistance_per_meter:.4f} ohm/m")
            return EXIT_OK

        if parsed.list_situations:
            for key in get_cable_situations():
                print(f"{key}\tx{CABLE_SITUATION_MULTIPLIERS[key]:.3f}")
            return EXIT_OK

        config = load_config(parsed.config)
        request = _build_request(parsed, config)

        stages = ChainCalculator().calculate(request.links, request.config)
        summary = summarize_chain(stages)
        logger.info(f"Chain result: {summary.level.value}, {summary.device_count} device(s)")

        print(format_output(stages, summary, OutputFormat(parsed.format), request.config))
        return EXIT_OK

    except ChainInputError as e:
        logger.error(f"Invalid chain input: {e}")
        return EXIT_BAD_INPUT
    except KeyboardInterrupt:
        print("\nInterrupted")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return EXIT_FAILURE


def api_main(args: Optional[List[str]] = None) -> None:
    """
    API server entry point.

    Args:
        args: Command line arguments
    """
    parser = argparse.ArgumentParser(
        description="POE Cascade Calculator API Server",
        prog="poe-cascade-api",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        help="API port",
        default=None,
    )
    parser.add_argument(
        "-H", "--host",
        help="API host",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level",
    )

    parsed = parser.parse_args(args)

    try:
        import uvicorn

        from poe_cascade.deployment.api import create_fastapi_app

        config = load_config(parsed.config)
        if parsed.port:
            config.api.port = parsed.port
        if parsed.host:
            config.api.host = parsed.host

        setup_logging(
            level=parsed.log_level or config.logging.level,
            log_file=config.logging.log_file,
            json_format=config.logging.json_logs,
        )

        app = create_fastapi_app(config)
        logger.info(f"Starting API on {config.api.host}:{config.api.port}")
        uvicorn.run(app, host=config.api.host, port=config.api.port)

    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    sys.exit(cli_main())
