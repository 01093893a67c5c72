"""
System interaction utilities.

This module provides command execution with error handling, JDK tool
presence checks and JVM discovery through jps.
"""

from .commands import check_tool_installed, run_command
from .locator import EXCLUDED_NAMES, locate_target, parse_jps_output, select_target

__all__ = [
    # Commands
    "check_tool_installed",
    "run_command",
    # JVM discovery
    "EXCLUDED_NAMES",
    "locate_target",
    "parse_jps_output",
    "select_target",
]
