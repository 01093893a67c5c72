"""
Validation and error handling for the jstat_exporter package.

This module provides input validation, the exporter's exception types and
error handling helpers with consistent error reporting.
"""

from .exceptions import (
    ErrorSeverity,
    ExporterError,
    MalformedSampleError,
    SubprocessSpawnError,
    TargetNotFoundError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

from .validators import (
    validate_enum_choice,
    validate_listen_address,
    validate_metrics_path,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ExporterError",
    "MalformedSampleError",
    "SubprocessSpawnError",
    "TargetNotFoundError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "validate_enum_choice",
    "validate_listen_address",
    "validate_metrics_path",
    "validate_non_empty_string",
    "validate_positive_float",
    "validate_positive_integer",
]
