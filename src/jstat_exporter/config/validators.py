"""
Configuration validation utilities.

Turns raw exporter settings (from TOML or the command line) into a
validated ExporterConfig.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_JPS_PATH,
    DEFAULT_JSTAT_PATH,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_METRICS_PATH,
    DEFAULT_RETRY_DELAY_SECONDS,
    ExporterConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_listen_address,
    validate_metrics_path,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

KNOWN_KEYS = frozenset({
    "listen_address",
    "metrics_path",
    "jstat_path",
    "jps_path",
    "target",
    "interval_ms",
    "retry_delay_seconds",
    "log_level",
})

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_exporter_config(exporter_data: Dict[str, Any]) -> ExporterConfig:
    """
    Validate and create an ExporterConfig from raw configuration data.

    Missing keys take their defaults. Unknown keys are logged and ignored.

    Args:
        exporter_data: Raw exporter settings keyed like the ``[exporter]`` table

    Returns:
        Validated ExporterConfig instance

    Raises:
        ValidationError: If validation fails
    """
    unknown = sorted(set(exporter_data) - KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown exporter settings: {', '.join(unknown)}")

    listen_host, listen_port = validate_listen_address(
        exporter_data.get("listen_address", DEFAULT_LISTEN_ADDRESS),
        field_name="exporter.listen_address",
    )

    metrics_path = validate_metrics_path(
        exporter_data.get("metrics_path", DEFAULT_METRICS_PATH),
        field_name="exporter.metrics_path",
    )

    jstat_path = validate_non_empty_string(
        exporter_data.get("jstat_path", DEFAULT_JSTAT_PATH),
        field_name="exporter.jstat_path",
    )

    jps_path = validate_non_empty_string(
        exporter_data.get("jps_path", DEFAULT_JPS_PATH),
        field_name="exporter.jps_path",
    )

    # An empty target is the same as no target: pick the first JVM.
    target = exporter_data.get("target")
    if target is not None:
        if not isinstance(target, str):
            raise ValidationError(
                "exporter.target must be a string",
                field_name="exporter.target",
                value=target,
            )
        target = target.strip() or None

    interval_ms = validate_positive_integer(
        exporter_data.get("interval_ms", DEFAULT_INTERVAL_MS),
        min_value=1,
        field_name="exporter.interval_ms",
    )

    retry_delay_seconds = validate_positive_float(
        exporter_data.get("retry_delay_seconds", DEFAULT_RETRY_DELAY_SECONDS),
        min_value=0.0,
        field_name="exporter.retry_delay_seconds",
    )

    log_level = validate_enum_choice(
        exporter_data.get("log_level", DEFAULT_LOG_LEVEL),
        valid_choices=LOG_LEVELS,
        field_name="exporter.log_level",
        case_sensitive=False,
    )

    return ExporterConfig(
        listen_host=listen_host,
        listen_port=listen_port,
        metrics_path=metrics_path,
        jstat_path=jstat_path,
        jps_path=jps_path,
        target=target,
        interval_ms=interval_ms,
        retry_delay_seconds=retry_delay_seconds,
        log_level=log_level,
    )
