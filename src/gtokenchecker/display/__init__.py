"""Display utilities for gtokenchecker.

This module provides rendering and output utilities for both terminal
(Rich-based) and JSON output modes.
"""
from __future__ import annotations

from gtokenchecker.display.json import encode_json
from gtokenchecker.display.json import outcome_to_dict
from gtokenchecker.display.json import outcomes_to_dict
from gtokenchecker.display.json import output_json
from gtokenchecker.display.json import output_json_pretty
from gtokenchecker.display.rich import TokenReport
from gtokenchecker.display.rich import display_outcomes
from gtokenchecker.display.rich import format_summary_line
from gtokenchecker.display.rich import render_failure

__all__ = [
    # Rich rendering
    "TokenReport",
    "display_outcomes",
    "format_summary_line",
    "render_failure",
    # JSON output
    "outcome_to_dict",
    "outcomes_to_dict",
    "output_json",
    "output_json_pretty",
    "encode_json",
]
