"""
Configuration assembly.

Combines the built-in defaults, the optional TOML file and the values given
on the command line into one validated ExporterConfig. Command-line values
win over file values, which win over defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import ExporterConfig
from .loader import load_exporter_section
from .validators import validate_exporter_config

logger = logging.getLogger(__name__)


def build_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ExporterConfig:
    """
    Build the exporter configuration.

    Args:
        config_path: Optional TOML file with an ``[exporter]`` table
        overrides: Settings from the command line; ``None`` values are
                   treated as "not given" and do not override anything

    Returns:
        Validated ExporterConfig instance

    Raises:
        FileNotFoundError: If config_path does not exist
        ValidationError: If any setting is invalid
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    settings: Dict[str, Any] = {}
    if config_path is not None:
        settings.update(load_exporter_section(config_path))

    for key, value in (overrides or {}).items():
        if value is not None:
            settings[key] = value

    config = validate_exporter_config(settings)
    logger.debug(f"Effective exporter configuration: {config}")
    return config
