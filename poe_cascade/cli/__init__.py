"""
cli/ - Command-line front end for the chain calculator.
"""

from .core import (
    OutputFormat,
    parse_link_spec,
    check_link_ranges,
    load_chain_file,
    stage_rows,
    format_table,
    format_output,
)

__all__ = [
    "OutputFormat",
    "parse_link_spec",
    "check_link_ranges",
    "load_chain_file",
    "stage_rows",
    "format_table",
    "format_output",
]
