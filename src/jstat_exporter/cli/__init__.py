"""
Command-line interface for the jstat_exporter package.

This module provides the main CLI entry point and the runner it drives.
"""

from .main import main_cli
from .orchestrator import ExporterRunner

__all__ = [
    "ExporterRunner",
    "main_cli",
]
