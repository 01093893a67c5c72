"""
Configuration management for the jstat_exporter package.

This module provides loading and validation of the optional TOML
configuration file and its merge with command-line settings.
"""

from .manager import build_config
from .loader import load_exporter_section, load_toml_file
from .validators import validate_exporter_config

__all__ = [
    "build_config",
    "load_exporter_section",
    "load_toml_file",
    "validate_exporter_config",
]
